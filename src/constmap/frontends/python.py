"""
Python Frontend.

Wraps the LibCST parser to ingest one Python module into a CompilationUnit.

Mapping onto the declaration model:
- A **declaration block** is a maximal run of consecutive top-level simple
  statements. Any compound statement (``def``, ``class``, ``if`` ...) ends it.
- A **member** is an assignment inside the block. Only annotated assignments
  (``NAME: T = value``) carry an explicit type.
- The **member doc** is the run of ``#`` comment lines directly above the
  statement. Python has no block-level doc comment.
- **Declared types** come from ``X = NewType("X", base)`` and
  ``class X(base): ...``.
"""

from pathlib import Path
from typing import List, Optional

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from constmap.analysis.records import CommentGroup, CompilationUnit, DeclarationRecord
from constmap.errors import ConfigurationError, LoadError, SourceLocation
from constmap.frontends.base import Frontend


def _dotted_name(node: cst.BaseExpression) -> Optional[str]:
  if isinstance(node, cst.Name):
    return node.value
  if isinstance(node, cst.Attribute):
    base = _dotted_name(node.value)
    return f"{base}.{node.attr.value}" if base else None
  return None


def module_name_for(path: Path) -> str:
  """
  Derives the importable dotted name of a module file.

  Parent directories are included while they contain ``__init__.py``.

  Args:
      path: Path to a ``.py`` file.

  Returns:
      str: e.g. ``pkg.sub.mod`` (``pkg.sub`` for ``pkg/sub/__init__.py``).
  """
  path = path.resolve()
  parts = [] if path.stem == "__init__" else [path.stem]
  parent = path.parent
  while (parent / "__init__.py").exists():
    parts.insert(0, parent.name)
    parent = parent.parent
  return ".".join(parts) or path.parent.name


class _DeclarationCollector:
  """
  Walks the top-level statements of a module and records constant members.
  """

  def __init__(self, wrapper: MetadataWrapper, filename: str):
    self.module = wrapper.module
    self.positions = wrapper.resolve(PositionProvider)
    self.lines = self.module.code.splitlines()
    self.filename = filename
    self.records: List[DeclarationRecord] = []
    self.type_decls = {}

  def collect(self) -> None:
    block_index = -1
    in_block = False
    for stmt in self.module.body:
      if not isinstance(stmt, cst.SimpleStatementLine):
        in_block = False
        if isinstance(stmt, cst.ClassDef):
          self._record_class(stmt)
        continue
      if not in_block:
        block_index += 1
        in_block = True
      line = self.positions[stmt].start.line
      doc = self._lead_comment(line)
      for small in stmt.body:
        self._record_statement(small, block_index, doc, line)

  def _lead_comment(self, line: int) -> Optional[CommentGroup]:
    collected: List[str] = []
    idx = line - 2
    while idx >= 0:
      stripped = self.lines[idx].strip()
      if not stripped.startswith("#"):
        break
      collected.insert(0, stripped[1:])
      idx -= 1
    return CommentGroup.from_lines(collected)

  def _record_statement(self, small: cst.BaseSmallStatement, block_index: int, doc, line: int) -> None:
    location = SourceLocation(self.filename, line)

    if isinstance(small, cst.AnnAssign) and isinstance(small.target, cst.Name):
      annotation = small.annotation.annotation
      explicit = annotation.value if isinstance(annotation, cst.Name) else None
      values = (self.module.code_for_node(small.value),) if small.value is not None else ()
      self.records.append(
        DeclarationRecord(
          block_index=block_index,
          names=(small.target.value,),
          explicit_type=explicit,
          doc=doc,
          values=values,
          location=location,
        )
      )
      return

    if isinstance(small, cst.Assign):
      names = tuple(t.target.value for t in small.targets if isinstance(t.target, cst.Name))
      if not names:
        return
      self._record_new_type(names[-1], small.value)
      self.records.append(DeclarationRecord(block_index=block_index, names=names, doc=doc, location=location))

  def _record_new_type(self, name: str, value: cst.BaseExpression) -> None:
    if not isinstance(value, cst.Call) or len(value.args) < 2:
      return
    func = _dotted_name(value.func)
    if func not in ("NewType", "typing.NewType"):
      return
    base = _dotted_name(value.args[1].value)
    if base:
      self.type_decls[name] = base.rsplit(".", 1)[-1]

  def _record_class(self, node: cst.ClassDef) -> None:
    for arg in node.bases:
      base = _dotted_name(arg.value)
      if base:
        self.type_decls[node.name.value] = base.rsplit(".", 1)[-1]
        return


class PythonFrontend(Frontend):
  """
  Ingests a single Python module into a CompilationUnit.
  """

  language = "python"
  extension = ".py"

  def load(self, pattern: str = ".") -> CompilationUnit:
    path = Path(pattern)
    if not path.exists():
      raise ConfigurationError(f"No such file or directory: {path}")

    if path.is_dir():
      modules = self.list_sources(path)
      if len(modules) != 1:
        found = ", ".join(p.name for p in modules) or "none"
        raise ConfigurationError(f"Expected a single module in {path}, found: {found}")
      path = modules[0]
    elif path.suffix != self.extension:
      raise ConfigurationError(f"Not a Python source file: {path}")

    return self._parse(self.read_source(path), module_name_for(path), str(path))

  def from_source(self, text: str, name: str = "module") -> CompilationUnit:
    return self._parse(text, name, f"{name.replace('.', '/')}.py")

  def _parse(self, text: str, module_name: str, filename: str) -> CompilationUnit:
    try:
      wrapper = MetadataWrapper(cst.parse_module(text))
    except cst.ParserSyntaxError as e:
      raise LoadError(f"{filename}:{e.raw_line}:{e.raw_column}: {e.message}") from e

    collector = _DeclarationCollector(wrapper, filename)
    collector.collect()
    return CompilationUnit(
      package_name=module_name,
      language=self.language,
      files=[filename],
      records=collector.records,
      type_decls=collector.type_decls,
    )
