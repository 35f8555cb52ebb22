"""
Declaration Records.

This module defines the language-neutral, flattened view of a parsed
compilation unit. Frontends (Go, Python) walk their own syntax trees once and
emit one `DeclarationRecord` per constant member declaration, in source order.
The Analyzer only ever sees these records, so the group attribution rule can
be exercised without any parser.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from constmap.errors import SourceLocation


@dataclass(frozen=True)
class CommentGroup:
  """
  A run of comments on adjacent lines, as attached to a declaration.
  """

  lines: Tuple[str, ...] = ()
  """Body of each line comment with the marker (``//`` or ``#``) removed."""

  @classmethod
  def from_lines(cls, lines: List[str]) -> Optional["CommentGroup"]:
    """
    Builds a group, or None when there is nothing to attach.

    Args:
        lines: Comment bodies, top to bottom.

    Returns:
        The group, or None if `lines` is empty.
    """
    if not lines:
      return None
    return cls(tuple(lines))

  @property
  def text(self) -> str:
    return "\n".join(self.lines)


@dataclass(frozen=True)
class DeclarationRecord:
  """
  One constant member declaration (e.g. ``A, B T = 1, 2``).
  """

  block_index: int
  """Ordinal of the enclosing declaration block within the unit."""

  names: Tuple[str, ...]
  """Declared names, left to right."""

  explicit_type: Optional[str] = None
  """
  The explicit type annotation when it is a plain identifier.
  None for inferred types and for composite annotations (``pkg.T``, ``[]T``).
  """

  block_doc: Optional[CommentGroup] = None
  """Lead comment of the enclosing block (Go ``// ...`` above ``const (``)."""

  doc: Optional[CommentGroup] = None
  """Lead comment of this member."""

  values: Tuple[str, ...] = ()
  """Source text of the value expression for each name, when available."""

  location: Optional[SourceLocation] = None

  def has_type(self, type_name: str) -> bool:
    """
    Checks the explicit annotation against a type identifier.

    Args:
        type_name: The target type name.

    Returns:
        True only for an exact identifier match.
    """
    return self.explicit_type is not None and self.explicit_type == type_name

  def effective_doc(self) -> Optional[CommentGroup]:
    """The block's comment if present, otherwise the member's own."""
    return self.block_doc if self.block_doc is not None else self.doc


@dataclass
class CompilationUnit:
  """
  The result of loading one package / module.

  This is the contract between the Frontends (loaders) and the Analyzer.
  """

  package_name: str
  """Package clause (Go) or dotted module path (Python)."""

  language: str
  """Frontend key (``go`` or ``python``)."""

  files: List[str] = field(default_factory=list)
  """Source files in load order."""

  records: List[DeclarationRecord] = field(default_factory=list)
  """Every constant member declaration, in source order."""

  type_decls: Dict[str, str] = field(default_factory=dict)
  """Declared type name -> underlying type identifier (e.g. ``Side -> int``)."""

  def underlying_type(self, type_name: str) -> Optional[str]:
    """
    Resolves a declared type to its underlying identifier, following aliases.

    Args:
        type_name: Declared type name.

    Returns:
        The underlying identifier or None if the type is not declared here.
    """
    seen = set()
    current = type_name
    while current in self.type_decls and current not in seen:
      seen.add(current)
      current = self.type_decls[current]
    return None if current == type_name else current


def split_blocks(records: Iterable[DeclarationRecord]) -> Iterator[List[DeclarationRecord]]:
  """
  Groups records by declaration block, preserving order.

  Args:
      records: Records in source order.

  Yields:
      Lists of consecutive records sharing a `block_index`.
  """
  current: List[DeclarationRecord] = []
  for record in records:
    if current and current[-1].block_index != record.block_index:
      yield current
      current = []
    current.append(record)
  if current:
    yield current
