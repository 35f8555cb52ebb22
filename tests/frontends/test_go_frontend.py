"""
Tests for the Go Frontend (package loading).

Verifies:
1. Directory, single file and recursive patterns.
2. Exactly one package must resolve.
3. Test files and blank identifiers are skipped.
4. Block indexes and declared types flow into the CompilationUnit.
"""

import pytest

from constmap.analysis.records import split_blocks
from constmap.errors import ConfigurationError, LoadError
from constmap.frontends.go import GoFrontend


def write(path, text):
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text(text, encoding="utf-8")
  return path


def test_load_directory(go_package):
  unit = GoFrontend().load(str(go_package))

  assert unit.package_name == "testdata"
  assert unit.language == "go"
  assert len(unit.files) == 1
  assert unit.type_decls == {"Side": "int", "PrivateChannel": "string"}
  assert unit.underlying_type("Side") == "int"
  assert unit.underlying_type("Unknown") is None


def test_block_indexes(go_package):
  unit = GoFrontend().load(str(go_package))
  blocks = list(split_blocks(unit.records))

  assert len(blocks) == 3
  assert [len(b) for b in blocks] == [2, 17, 2]
  assert blocks[2][0].block_doc.lines == (" @group Misc",)
  assert blocks[1][9].doc.lines == (" @group Margin",)


def test_load_single_file(go_package):
  unit = GoFrontend().load(str(go_package / "privateevent.go"))
  assert unit.package_name == "testdata"


def test_test_files_are_ignored(tmp_path):
  write(tmp_path / "a.go", "package a\n\nconst A T = 1\n")
  write(tmp_path / "a_test.go", "package a_test\n\nconst B T = 2\n")
  write(tmp_path / "_skip.go", "package other\n")

  unit = GoFrontend().load(str(tmp_path))
  assert unit.package_name == "a"
  assert [r.names for r in unit.records] == [("A",)]


def test_blank_identifier_dropped(tmp_path):
  write(tmp_path / "a.go", "package a\n\nconst (\n\t_ T = iota\n\tA T = 1\n\t_, B T = 2, 3\n)\n")
  names = [r.names for r in GoFrontend().load(str(tmp_path)).records]
  assert names == [(), ("A",), ("B",)]


def test_block_index_spans_files(tmp_path):
  write(tmp_path / "a.go", "package a\n\nconst A T = 1\n")
  write(tmp_path / "b.go", "package a\n\nconst B T = 2\n")
  unit = GoFrontend().load(str(tmp_path))
  assert [r.block_index for r in unit.records] == [0, 1]


def test_recursive_pattern_single_package(tmp_path):
  write(tmp_path / "pkg" / "a.go", "package pkg\n\nconst A T = 1\n")
  write(tmp_path / "pkg" / "testdata" / "x.go", "package x\n")

  unit = GoFrontend().load(f"{tmp_path}/...")
  assert unit.package_name == "pkg"


def test_recursive_pattern_multiple_packages(tmp_path):
  write(tmp_path / "a" / "a.go", "package a\n")
  write(tmp_path / "b" / "b.go", "package b\n")

  with pytest.raises(ConfigurationError, match="Expected a single package"):
    GoFrontend().load(f"{tmp_path}/...")


def test_empty_directory(tmp_path):
  with pytest.raises(ConfigurationError, match="found: none"):
    GoFrontend().load(str(tmp_path))


def test_missing_path(tmp_path):
  with pytest.raises(ConfigurationError, match="No such file"):
    GoFrontend().load(str(tmp_path / "nope"))


def test_mixed_package_clauses(tmp_path):
  write(tmp_path / "a.go", "package a\n")
  write(tmp_path / "b.go", "package b\n")
  with pytest.raises(LoadError, match="found packages a, b"):
    GoFrontend().load(str(tmp_path))


def test_syntax_error_is_load_error(tmp_path):
  write(tmp_path / "a.go", "package a\n\nconst (\n")
  with pytest.raises(LoadError, match="a.go:"):
    GoFrontend().load(str(tmp_path))


def test_from_source():
  unit = GoFrontend().from_source("package p\n\n// @group X\nconst A T = 1\n")
  assert unit.package_name == "p"
  assert unit.records[0].block_doc.lines == (" @group X",)
  assert unit.files == ["<input>.go"]
