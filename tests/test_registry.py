"""
Tests for the Language Registry.
"""

import pytest

from constmap.emit.go_printer import GoPrinter
from constmap.emit.python_printer import PythonPrinter
from constmap.errors import ConfigurationError
from constmap.frontends.go import GoFrontend
from constmap.frontends.python import PythonFrontend
from constmap.registry import (
  available_languages,
  detect_language,
  get_frontend,
  get_printer,
  is_integer_base,
)


def test_available_languages():
  assert available_languages() == ["go", "python"]


def test_lookup():
  assert isinstance(get_frontend("go"), GoFrontend)
  assert isinstance(get_frontend("python"), PythonFrontend)
  assert isinstance(get_printer("go"), GoPrinter)
  assert isinstance(get_printer("python"), PythonPrinter)


def test_unknown_language():
  with pytest.raises(ConfigurationError, match="Unknown language"):
    get_frontend("rust")
  with pytest.raises(ConfigurationError, match="Unknown language"):
    get_printer("rust")


@pytest.mark.parametrize(
  "language, type_name, expected",
  [
    ("go", "int", True),
    ("go", "uint8", True),
    ("go", "rune", True),
    ("go", "string", False),
    ("go", "float64", False),
    ("python", "int", True),
    ("python", "IntEnum", True),
    ("python", "str", False),
    ("rust", "int", False),
  ],
)
def test_is_integer_base(language, type_name, expected):
  assert is_integer_base(language, type_name) is expected


def test_detect_language(tmp_path):
  assert detect_language("consts.py") == "python"
  assert detect_language("consts.go") == "go"
  assert detect_language(str(tmp_path)) == "go"

  (tmp_path / "a.py").write_text("")
  assert detect_language(str(tmp_path)) == "python"

  (tmp_path / "a.go").write_text("package a\n")
  assert detect_language(str(tmp_path)) == "go"
