"""
Generation Pipeline.

Drives one generator run: load -> analyze -> emit, then writes the result.
Output is rendered fully in memory and committed through a temporary file in
the destination directory that is renamed into place, so a failed run never
leaves a partial artifact behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from constmap.analysis.analyzer import analyze
from constmap.analysis.records import CompilationUnit
from constmap.config import GeneratorConfig
from constmap.emit.emitter import emit
from constmap.emit.formatters import resolve_formatter
from constmap.errors import OutputWriteError
from constmap.generation_result import GenerationResult
from constmap.registry import get_frontend, is_integer_base
from constmap.utils.console import log_debug, log_info, log_warning


def infer_int_values(unit: CompilationUnit, type_name: str) -> bool:
  """
  Decides whether the type's constants convert to integers.

  Args:
      unit: Loaded unit holding the declared types.
      type_name: Target type.

  Returns:
      bool: True if the type is declared over an integer kind. Unknown
      underlying types default to textual conversion.
  """
  underlying = unit.underlying_type(type_name)
  if underlying is None:
    log_debug(f"type {type_name} is not declared in {unit.package_name}; using string conversion")
    return False
  return is_integer_base(unit.language, underlying)


def generate(config: GeneratorConfig) -> GenerationResult:
  """
  Runs the loader, analyzer and emitter for a configuration.

  Args:
      config (GeneratorConfig): Resolved settings.

  Returns:
      GenerationResult: The formatted code and what was discovered.

  Raises:
      ConstmapError: Any configuration, load, analysis or generation failure.
  """
  language = config.resolved_language
  frontend = get_frontend(language)
  log_debug(f"loading {config.pattern!r} as {language}")

  unit = frontend.load(config.pattern)
  log_info(f"Loaded package [bold]{unit.package_name}[/bold] ({len(unit.files)} files)")

  table = analyze(unit, config.type_name)
  result = GenerationResult(
    type_name=config.type_name,
    package_name=unit.package_name,
    language=language,
    symbols=list(table.symbols),
    groups={g: list(table.groups[g]) for g in table.sorted_groups()},
  )
  if not table.symbols:
    message = f"no constants of type {config.type_name} found in {unit.package_name}"
    log_warning(message)
    result.warnings.append(message)

  if config.int_values is not None:
    has_int_values = config.int_values
  else:
    has_int_values = infer_int_values(unit, config.type_name)
  result.has_int_values = has_int_values

  formatter = resolve_formatter(language, config.formatter, config.gofmt_path)
  result.code = emit(table, unit.package_name, has_int_values, language=language, formatter=formatter)

  if not config.stdout:
    result.output_path = config.output_path
  return result


def write_output(code: str, path: Path) -> Path:
  """
  Atomically writes generated code to `path`.

  Args:
      code: The complete file contents.
      path: Destination file.

  Returns:
      Path: The written path.

  Raises:
      OutputWriteError: If the destination cannot be created or replaced.
  """
  tmp_name: Optional[str] = None
  try:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
      f.write(code)
    os.chmod(tmp_name, 0o644)
    os.replace(tmp_name, path)
  except OSError as e:
    if tmp_name and os.path.exists(tmp_name):
      os.unlink(tmp_name)
    raise OutputWriteError(str(path), e.strerror or str(e)) from e
  return path
