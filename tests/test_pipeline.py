"""
Tests for the Generation Pipeline.

Verifies:
1. End to end generation for the Go and Python samples.
2. Integer capability inference and override.
3. Atomic output writes.
"""

import os
from unittest.mock import patch

import pytest

import constmap
from constmap.config import GeneratorConfig
from constmap.emit.formatters import GoSyntaxFormatter
from constmap.errors import ConfigurationError, OutputWriteError
from constmap.pipeline import generate, write_output


def go_config(pattern, type_name="PrivateChannel", **kwargs):
  return GeneratorConfig(type_name=type_name, pattern=str(pattern), formatter="builtin", **kwargs)


def test_generate_go(go_package):
  result = generate(go_config(go_package))

  assert result.package_name == "testdata"
  assert result.language == "go"
  assert result.symbol_count == 19
  assert sorted(result.groups) == ["Margin", "Misc"]
  assert result.has_int_values is False
  assert result.code.startswith("// Code generated by constmap; DO NOT EDIT.\n\npackage testdata\n")
  assert result.output_path.name == "privatechannelmap.go"


def test_result_describes_discoveries_only(go_package):
  fields = generate(go_config(go_package)).model_dump()
  assert set(fields) == {
    "code",
    "type_name",
    "package_name",
    "language",
    "output_path",
    "symbols",
    "groups",
    "has_int_values",
    "warnings",
  }


def test_integer_type_inferred(go_package):
  result = generate(go_config(go_package, type_name="Side"))
  assert result.has_int_values is True
  assert "func SideStrings(slice []Side) (out []int) {" in result.code


def test_integer_override(go_package):
  result = generate(go_config(go_package, type_name="Side", int_values=False))
  assert result.has_int_values is False
  assert "(out []string)" in result.code


def test_unknown_underlying_type_is_textual(tmp_path):
  (tmp_path / "a.go").write_text("package a\n\nconst A ext.Kind = 1\nconst B Kind = 2\n")
  result = generate(go_config(tmp_path, type_name="Kind"))
  assert result.has_int_values is False
  assert result.symbols == ["B"]


def test_no_symbols_warns(go_package, captured_console):
  result = generate(go_config(go_package, type_name="Missing"))

  assert result.has_warnings
  assert result.symbols == []
  assert "var AllMissings = map[Missing]struct{}{}" in result.code
  assert "no constants of type Missing" in captured_console.export_text()


def test_stdout_has_no_output_path(go_package):
  assert generate(go_config(go_package, stdout=True)).output_path is None


def test_generate_python(testdata):
  config = GeneratorConfig(type_name="Side", pattern=str(testdata / "privateevent.py"))
  result = generate(config)

  assert result.language == "python"
  assert result.has_int_values is True
  assert "def side_strings(values: Sequence[Side]) -> List[int]:" in result.code
  assert result.output_path.name == "sidemap.py"


def test_multiple_packages_is_configuration_error(tmp_path):
  (tmp_path / "a").mkdir()
  (tmp_path / "b").mkdir()
  (tmp_path / "a" / "a.go").write_text("package a\n")
  (tmp_path / "b" / "b.go").write_text("package b\n")
  with pytest.raises(ConfigurationError):
    generate(go_config(f"{tmp_path}/..."))


def test_generate_source_helper():
  src = "package channels\n\ntype Side int\n\nconst (\n\tSideBuy  Side = 1\n\tSideSell Side = -1\n)\n"
  code = constmap.generate_source(src, "Side", formatter=GoSyntaxFormatter())
  assert "package channels" in code
  assert "out = append(out, int(el))" in code


def test_write_output(tmp_path):
  target = tmp_path / "out.go"
  assert write_output("package p\n", target) == target
  assert target.read_text() == "package p\n"
  assert [p.name for p in tmp_path.iterdir()] == ["out.go"]


def test_write_output_replaces_existing(tmp_path):
  target = tmp_path / "out.go"
  target.write_text("old")
  write_output("new", target)
  assert target.read_text() == "new"


def test_write_output_missing_directory(tmp_path):
  with pytest.raises(OutputWriteError, match="cannot write"):
    write_output("x", tmp_path / "missing" / "out.go")


def test_failed_write_leaves_nothing_behind(tmp_path):
  target = tmp_path / "out.go"
  target.write_text("previous")

  with patch("constmap.pipeline.os.replace", side_effect=OSError(13, "Permission denied")):
    with pytest.raises(OutputWriteError, match="Permission denied"):
      write_output("new", target)

  assert target.read_text() == "previous"
  assert os.listdir(tmp_path) == ["out.go"]
