"""
Frontend Protocol.

Defines the abstract interface for loaders that resolve a load pattern to
exactly one compilation unit and flatten it into declaration records.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from constmap.analysis.records import CompilationUnit
from constmap.errors import LoadError


class Frontend(ABC):
  """
  Abstract base class for source-language frontends.
  """

  language: str = ""
  """Registry key (e.g. ``go``)."""

  extension: str = ""
  """Source file suffix including the dot."""

  @abstractmethod
  def load(self, pattern: str = ".") -> CompilationUnit:
    """
    Resolves a load pattern to a single parsed unit.

    Args:
        pattern: Directory, file, or recursive pattern (``dir/...``).

    Returns:
        CompilationUnit: Package name, files, records and declared types.

    Raises:
        ConfigurationError: If the pattern matches zero or several units.
        LoadError: If a file cannot be read or parsed.
    """
    pass

  @abstractmethod
  def from_source(self, text: str, name: str) -> CompilationUnit:
    """
    Parses in-memory source as a single-file unit.

    Args:
        text: Source code.
        name: File name (Go) or module name (Python).

    Returns:
        CompilationUnit: The parsed unit.
    """
    pass

  @staticmethod
  def read_source(path: Path) -> str:
    try:
      return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
      raise LoadError(f"cannot read {path}: {e}") from e

  def is_source_file(self, path: Path) -> bool:
    return path.is_file() and path.suffix == self.extension and not path.name.startswith((".", "_"))

  def list_sources(self, directory: Path) -> List[Path]:
    return sorted(p for p in directory.iterdir() if self.is_source_file(p))
