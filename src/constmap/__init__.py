"""
constmap Package.

A code generator for typed constants. Given a type name, it scans a Go
package (or a Python module) for the constants declared with that type,
reads ``@group <Name>`` annotations from their doc comments, and emits
lookup tables, validators, membership predicates and converters.

Usage
-----

Command Line
^^^^^^^^^^^^

.. code-block:: bash

    # inside a Go package; writes privatechannelmap.go
    constmap -type PrivateChannel

    //go:generate constmap -type=PrivateChannel

Simple String Generation
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import constmap

    src = '''
    package channels

    type Side int

    const (
        SideBuy  Side = 1
        SideSell Side = -1
    )
    '''
    print(constmap.generate_source(src, "Side"))

Advanced Usage (Pipeline)
^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from constmap import GeneratorConfig, generate

    config = GeneratorConfig(type_name="PrivateChannel", pattern="./channels")
    result = generate(config)
    print(result.groups)
"""

from typing import Optional

from constmap.analysis import SymbolTable, analyze
from constmap.config import GeneratorConfig
from constmap.emit.emitter import emit
from constmap.emit.formatters import SourceFormatter
from constmap.generation_result import GenerationResult
from constmap.pipeline import generate, infer_int_values
from constmap.registry import get_frontend

__version__ = "0.1.0"


def generate_source(
  text: str,
  type_name: str,
  language: str = "go",
  has_int_values: Optional[bool] = None,
  formatter: Optional[SourceFormatter] = None,
  name: Optional[str] = None,
) -> str:
  """
  Generates the lookup file for source text held in memory.

  Args:
      text (str): Go file contents or Python module source.
      type_name (str): The constant type to map.
      language (str): ``go`` or ``python``.
      has_int_values (Optional[bool]): Conversion kind. Inferred from the type
          declaration when None.
      formatter (Optional[SourceFormatter]): Formatter override.
      name (Optional[str]): File name (Go) or module name (Python) of the source.

  Returns:
      str: The formatted generated code.
  """
  frontend = get_frontend(language)
  unit = frontend.from_source(text, name) if name else frontend.from_source(text)
  table = analyze(unit, type_name)
  if has_int_values is None:
    has_int_values = infer_int_values(unit, type_name)
  return emit(table, unit.package_name, has_int_values, language=language, formatter=formatter)


__all__ = [
  "GenerationResult",
  "GeneratorConfig",
  "SymbolTable",
  "analyze",
  "generate",
  "generate_source",
  "__version__",
]
