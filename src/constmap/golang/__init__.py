"""
Go Source Support.

A tokenizer and top-level declaration parser for Go, sufficient to locate
``const`` and ``type`` declarations with their doc comments and to validate
generated output when ``gofmt`` is unavailable.
"""
