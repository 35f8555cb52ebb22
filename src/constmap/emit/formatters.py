"""
Canonical Source Formatters.

A formatter accepts raw rendered text and returns normalized text, or rejects
it with `FormattingError` when it is not syntactically valid.

- `GofmtFormatter`: pipes the text through the ``gofmt`` executable.
- `GoSyntaxFormatter`: re-parses the text with the built-in Go parser.
  Used when ``gofmt`` is not installed; the Go printer already emits
  gofmt layout.
- `LibcstFormatter`: round-trips Python text through LibCST.
"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

import libcst as cst

from constmap.errors import ConfigurationError, FormattingError
from constmap.golang.parser import parse_go_source
from constmap.utils.console import log_debug


def _normalize(text: str) -> str:
  lines = [line.rstrip() for line in text.splitlines()]
  return "\n".join(lines).strip("\n") + "\n"


class SourceFormatter(ABC):
  """
  Abstract base class for canonical formatters.
  """

  name = ""

  @abstractmethod
  def format(self, text: str) -> str:
    """
    Normalizes rendered source.

    Args:
        text (str): Raw rendered text.

    Returns:
        str: Canonical text.

    Raises:
        FormattingError: If the text is not valid source.
    """
    pass


class GofmtFormatter(SourceFormatter):
  """Runs the external ``gofmt`` tool."""

  name = "gofmt"

  def __init__(self, executable: str = "gofmt", timeout: float = 30.0):
    self.executable = executable
    self.timeout = timeout

  def format(self, text: str) -> str:
    try:
      proc = subprocess.run(
        [self.executable],
        input=text,
        capture_output=True,
        text=True,
        timeout=self.timeout,
      )
    except (OSError, subprocess.TimeoutExpired) as e:
      raise FormattingError(f"cannot run {self.executable}: {e}", text) from e
    if proc.returncode != 0:
      raise FormattingError(proc.stderr.strip() or f"{self.executable} exited with {proc.returncode}", text)
    return proc.stdout


class GoSyntaxFormatter(SourceFormatter):
  """Validates Go text with the built-in parser."""

  name = "builtin"

  def format(self, text: str) -> str:
    try:
      parse_go_source(text, "<generated>")
    except SyntaxError as e:
      raise FormattingError(str(e), text) from e
    return _normalize(text)


class LibcstFormatter(SourceFormatter):
  """Validates Python text by parsing it with LibCST."""

  name = "builtin"

  def format(self, text: str) -> str:
    try:
      module = cst.parse_module(_normalize(text))
    except cst.ParserSyntaxError as e:
      raise FormattingError(f"<generated>:{e.raw_line}:{e.raw_column}: {e.message}", text) from e
    return module.code


def resolve_formatter(language: str, choice: str = "auto", gofmt_path: Optional[str] = None) -> SourceFormatter:
  """
  Picks the formatter for an output language.

  Args:
      language: ``go`` or ``python``.
      choice: ``auto``, ``gofmt`` or ``builtin``.
      gofmt_path: Explicit gofmt executable (default: looked up on PATH).

  Returns:
      SourceFormatter: The formatter instance.

  Raises:
      ConfigurationError: For combinations that do not exist.
  """
  if language == "python":
    if choice == "gofmt":
      raise ConfigurationError("gofmt cannot format Python output")
    return LibcstFormatter()

  if language != "go":
    raise ConfigurationError(f"Unknown language: {language!r}")

  if choice == "builtin":
    return GoSyntaxFormatter()

  executable = gofmt_path or "gofmt"
  found = shutil.which(executable)
  if found:
    log_debug(f"formatting with {found}")
    return GofmtFormatter(found)
  if choice == "gofmt":
    raise ConfigurationError(f"gofmt executable not found: {executable}")
  log_debug("gofmt not found; validating output with the built-in parser")
  return GoSyntaxFormatter()
