"""
constmap Error Hierarchy.

All exceptions raised by the generator inherit from `ConstmapError`, so the
CLI can report any failure with a single except clause.

Exception Hierarchy
-------------------
ConstmapError (base)
├── ConfigurationError - missing type name, pattern matching zero/many units
├── LoadError - a source file cannot be read or parsed
├── AnalysisError
│   └── DuplicateSymbolError - a constant name discovered twice
├── GenerationError
│   ├── TemplateRenderError - symbol table and artifact plan disagree
│   └── FormattingError - rendered text rejected by the formatter
└── OutputWriteError - destination cannot be created or written
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


class ConstmapError(Exception):
  """Base exception for all constmap errors."""

  pass


@dataclass(frozen=True)
class SourceLocation:
  """
  A position inside a loaded source file.

  Attributes:
      filename: Path of the file as given to the loader.
      line: 1-indexed line number.
  """

  filename: str
  line: int

  def __str__(self) -> str:
    return f"{self.filename}:{self.line}"


class ConfigurationError(ConstmapError):
  """Invalid invocation: the run cannot start."""

  pass


class LoadError(ConstmapError):
  """
  Raised when a compilation unit cannot be read or parsed.

  The message of the underlying parser error is kept verbatim and prefixed
  with the source location when one is known.
  """

  def __init__(self, message: str, location: Optional[SourceLocation] = None):
    self.message = message
    self.location = location
    super().__init__(f"{location}: {message}" if location else message)


class AnalysisError(ConstmapError):
  """Raised when the discovered declarations cannot form a symbol table."""

  pass


class DuplicateSymbolError(AnalysisError):
  """A constant name was discovered more than once."""

  def __init__(self, name: str):
    self.name = name
    super().__init__(f"duplicate constant name: {name!r}")


class GenerationError(ConstmapError):
  """Base class for failures while producing output text."""

  pass


class TemplateRenderError(GenerationError):
  """The artifact plan cannot be rendered from the given symbol table."""

  pass


class FormattingError(GenerationError):
  """
  The rendered text was rejected by the canonical formatter.

  Attributes:
      source: The unformatted text, kept for debugging.
  """

  def __init__(self, message: str, source: str = ""):
    self.source = source
    super().__init__(f"error formatting source: {message}")


class OutputWriteError(ConstmapError):
  """The generated artifact could not be persisted."""

  def __init__(self, path: Union[str, Path], reason: str):
    self.path = Path(path)
    super().__init__(f"cannot write {path}: {reason}")
