"""
Go Frontend.

Resolves a Go load pattern to one package, parses its files with the
top-level declaration parser, and flattens every ``const`` spec into a
`DeclarationRecord`.

Supported patterns:
- A directory: its ``*.go`` files, excluding ``_test.go`` and files starting
  with ``.`` or ``_``, in file name order.
- A single ``.go`` file.
- ``dir/...``: every package below ``dir`` (``testdata``, hidden and ``_``
  directories are skipped). Must still resolve to exactly one package.
"""

import os
from pathlib import Path
from typing import Dict, List

from constmap.analysis.records import CompilationUnit, DeclarationRecord
from constmap.errors import ConfigurationError, LoadError, SourceLocation
from constmap.frontends.base import Frontend
from constmap.golang.nodes import GoFile
from constmap.golang.parser import parse_go_source
from constmap.utils.console import log_debug

BLANK_IDENTIFIER = "_"


class GoFrontend(Frontend):
  """
  Ingests a Go package into a CompilationUnit.
  """

  language = "go"
  extension = ".go"

  def is_source_file(self, path: Path) -> bool:
    return super().is_source_file(path) and not path.name.endswith("_test.go")

  def load(self, pattern: str = ".") -> CompilationUnit:
    packages = self._resolve(pattern)
    if len(packages) != 1:
      found = ", ".join(str(d) for d in packages) or "none"
      raise ConfigurationError(f"Expected a single package for pattern {pattern!r}, found: {found}")

    files = next(iter(packages.values()))
    parsed = [self._parse_file(path) for path in files]

    names = sorted({f.package_name for f in parsed})
    if len(names) > 1:
      raise LoadError(f"found packages {', '.join(names)} in {files[0].parent}")

    return self._flatten(parsed)

  def from_source(self, text: str, name: str = "<input>.go") -> CompilationUnit:
    try:
      go_file = parse_go_source(text, name)
    except SyntaxError as e:
      raise LoadError(str(e)) from e
    return self._flatten([go_file])

  def _resolve(self, pattern: str) -> Dict[Path, List[Path]]:
    recursive = pattern == "..." or pattern.endswith("/...")
    root = Path(pattern[: -len("...")].rstrip("/") or ".") if recursive else Path(pattern)

    if not root.exists():
      raise ConfigurationError(f"No such file or directory: {root}")

    if root.is_file():
      if root.suffix != self.extension:
        raise ConfigurationError(f"Not a Go source file: {root}")
      return {root.parent: [root]}

    if not recursive:
      files = self.list_sources(root)
      return {root: files} if files else {}

    packages: Dict[Path, List[Path]] = {}
    for dirpath, dirnames, _ in os.walk(root):
      dirnames[:] = sorted(d for d in dirnames if not d.startswith((".", "_")) and d != "testdata")
      files = self.list_sources(Path(dirpath))
      if files:
        packages[Path(dirpath)] = files
    return packages

  def _parse_file(self, path: Path) -> GoFile:
    text = self.read_source(path)
    try:
      return parse_go_source(text, str(path))
    except SyntaxError as e:
      raise LoadError(str(e)) from e

  def _flatten(self, files: List[GoFile]) -> CompilationUnit:
    unit = CompilationUnit(
      package_name=files[0].package_name,
      language=self.language,
      files=[f.filename for f in files],
    )
    block_index = 0
    for go_file in files:
      for spec in go_file.type_specs():
        if spec.underlying:
          unit.type_decls[spec.name] = spec.underlying

      for decl in go_file.const_decls():
        log_debug(f"found const decl at {go_file.filename}:{decl.line} ({len(decl.specs)} specs)")
        for spec in decl.specs:
          values = spec.values if len(spec.values) == len(spec.names) else []
          kept = [i for i, n in enumerate(spec.names) if n != BLANK_IDENTIFIER]
          unit.records.append(
            DeclarationRecord(
              block_index=block_index,
              names=tuple(spec.names[i] for i in kept),
              explicit_type=spec.type_ident,
              block_doc=decl.doc,
              doc=spec.doc,
              values=tuple(values[i] for i in kept) if values else (),
              location=SourceLocation(go_file.filename, spec.line),
            )
          )
        block_index += 1
    return unit
