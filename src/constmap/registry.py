"""
Language Registry.

Centralizes registration of Frontends (source -> CompilationUnit) and
Printers (artifact plan -> source text) per host language.
"""

from pathlib import Path
from typing import Dict, List, Type

from constmap.emit.go_printer import GoPrinter
from constmap.emit.printer import SourcePrinter
from constmap.emit.python_printer import PythonPrinter
from constmap.errors import ConfigurationError
from constmap.frontends.base import Frontend
from constmap.frontends.go import GoFrontend
from constmap.frontends.python import PythonFrontend
from constmap.golang.tokens import INTEGER_KINDS

_FRONTENDS: Dict[str, Type[Frontend]] = {
  "go": GoFrontend,
  "python": PythonFrontend,
}

_PRINTERS: Dict[str, Type[SourcePrinter]] = {
  "go": GoPrinter,
  "python": PythonPrinter,
}

# Integer-backed underlying types, per language
_INTEGER_BASES: Dict[str, frozenset] = {
  "go": INTEGER_KINDS,
  "python": frozenset({"int", "IntEnum", "IntFlag"}),
}


def available_languages() -> List[str]:
  return sorted(_FRONTENDS)


def get_frontend(language: str) -> Frontend:
  """
  Instantiates the frontend of a language.

  Args:
      language: Registry key.

  Returns:
      Frontend: A fresh loader.

  Raises:
      ConfigurationError: If the language is unknown.
  """
  if language not in _FRONTENDS:
    raise ConfigurationError(f"Unknown language: {language!r}. Supported: {available_languages()}")
  return _FRONTENDS[language]()


def get_printer(language: str) -> SourcePrinter:
  if language not in _PRINTERS:
    raise ConfigurationError(f"Unknown language: {language!r}. Supported: {available_languages()}")
  return _PRINTERS[language]()


def is_integer_base(language: str, type_name: str) -> bool:
  """Whether `type_name` is an integer kind in `language`."""
  return type_name in _INTEGER_BASES.get(language, frozenset())


def detect_language(pattern: str) -> str:
  """
  Guesses the host language of a load pattern.

  A ``.py`` file, or a directory holding Python but no Go sources, selects
  Python; everything else is treated as Go.

  Args:
      pattern: The load pattern given on the command line.

  Returns:
      str: ``go`` or ``python``.
  """
  path = Path(pattern)
  if path.suffix == ".py":
    return "python"
  if path.is_dir():
    has_go = any(path.glob("*.go"))
    has_py = any(path.glob("*.py"))
    if has_py and not has_go:
      return "python"
  return "go"
