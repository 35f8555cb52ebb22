"""
Emitter.

Renders a `SymbolTable` into formatted source text:

1.  Build the artifact plan (`ir.build_plan`), validating every identifier.
2.  Render the plan with the printer of the output language.
3.  Pass the text through the canonical formatter. A rejection is a
    generation error, never ignored.
"""

from typing import Optional

from constmap.analysis.symbol_table import SymbolTable
from constmap.emit.formatters import SourceFormatter, resolve_formatter
from constmap.emit.ir import GeneratedFile, build_plan
from constmap.registry import get_printer
from constmap.utils.console import log_debug


def plan(table: SymbolTable, package_name: str, has_int_values: bool, language: str = "go") -> GeneratedFile:
  """
  Builds the artifact plan without rendering it.

  Args:
      table: Analyzed symbols.
      package_name: Package clause / source module.
      has_int_values: Whether conversions produce integers.
      language: Output language key.

  Returns:
      GeneratedFile: The artifact plan.
  """
  printer = get_printer(language)
  return build_plan(table, package_name, has_int_values, printer.naming(table.target_type))


def emit(
  table: SymbolTable,
  package_name: str,
  has_int_values: bool = False,
  language: str = "go",
  formatter: Optional[SourceFormatter] = None,
) -> str:
  """
  Renders and formats the generated file for a symbol table.

  Args:
      table (SymbolTable): Analyzed symbols (read-only).
      package_name (str): Package clause (Go) or source module (Python).
      has_int_values (bool): Convert to integers instead of strings.
      language (str): Output language key (``go`` or ``python``).
      formatter (SourceFormatter, optional): Canonical formatter. Defaults to
          the language's automatic choice.

  Returns:
      str: Formatted source text.

  Raises:
      TemplateRenderError: If the table cannot be rendered safely.
      FormattingError: If the formatter rejects the rendered text.
  """
  artifacts = plan(table, package_name, has_int_values, language)
  rendered = get_printer(language).render(artifacts)

  formatter = formatter or resolve_formatter(language)
  log_debug(f"rendered {len(artifacts.artifacts)} artifacts; formatting with {formatter.name}")
  return formatter.format(rendered)
