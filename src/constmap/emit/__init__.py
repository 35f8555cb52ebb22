"""
Code Emission Package.

Turns an analyzed symbol table into source text.

Modules:
    - ``naming``: Artifact identifiers per output language.
    - ``ir``: Artifact plan (the printer contract).
    - ``printer``, ``go_printer``, ``python_printer``: Renderers.
    - ``formatters``: gofmt / built-in validators.
    - ``emitter``: Plan -> render -> format orchestration.
"""
