"""
Generate Command Handler.

This module implements the single `constmap` action. It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. The load -> analyze -> emit pipeline.
3. Output to stdout or an atomically written file.
"""

import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape

from constmap.config import GeneratorConfig
from constmap.errors import ConstmapError
from constmap.pipeline import generate, write_output
from constmap.utils.console import log_error, log_success


def handle_generate(
  type_name: Optional[str],
  pattern: str = ".",
  output: Optional[Path] = None,
  stdout: bool = False,
  language: Optional[str] = None,
  formatter: Optional[str] = None,
  int_values: Optional[bool] = None,
  verbose: bool = False,
) -> int:
  """
  Handles a generator invocation.

  Args:
      type_name: Target type (required).
      pattern: Load pattern.
      output: Destination file override.
      stdout: Print the code instead of writing a file.
      language: Host language override.
      formatter: Formatter override.
      int_values: Integer (True) / string (False) conversion override.
      verbose: Debug logging.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  try:
    config = GeneratorConfig.load(
      type_name=type_name,
      pattern=pattern,
      output=output,
      stdout=stdout,
      language=language,
      formatter=formatter,
      int_values=int_values,
      verbose=verbose,
    )
    result = generate(config)

    if config.stdout:
      sys.stdout.write(result.code)
      sys.stdout.flush()
      return 0

    written = write_output(result.code, config.output_path)
  except ConstmapError as e:
    log_error(escape(str(e)))
    return 1

  log_success(f"Generated file: [path]{escape(str(written))}[/path]")
  return 0
