"""
Symbol Table.

Holds the ordered constant names discovered for one target type and their
group membership. The Analyzer is the only writer; once traversal ends the
table is frozen and handed to the Emitter read-only.
"""

from typing import Dict, List, Optional, Set

from constmap.errors import AnalysisError, DuplicateSymbolError


class SymbolTable:
  """
  Ordered symbols of one target type plus the group -> members mapping.

  Attributes:
      symbols: Every discovered name, in first-encountered order.
      groups: Group name (title-cased) -> members, in `symbols` order.
  """

  def __init__(self, target_type: str):
    """
    Args:
        target_type: The declared type name being filtered for.
    """
    self._target_type = target_type
    self.symbols: List[str] = []
    self._known: Set[str] = set()
    self.groups: Dict[str, List[str]] = {}
    self._frozen = False

  @property
  def target_type(self) -> str:
    """The type name this table was built for (read-only)."""
    return self._target_type

  @property
  def frozen(self) -> bool:
    return self._frozen

  def add(self, name: str, group: Optional[str] = None) -> None:
    """
    Appends a symbol, and to `group` when one is given.

    Args:
        name: Constant name.
        group: Normalized group name or None/empty for ungrouped symbols.

    Raises:
        DuplicateSymbolError: If `name` is already present.
        AnalysisError: If the table has been frozen.
    """
    if self._frozen:
      raise AnalysisError(f"symbol table for {self._target_type} is frozen")
    if name in self._known:
      raise DuplicateSymbolError(name)
    self._known.add(name)
    self.symbols.append(name)
    if group:
      self.groups.setdefault(group, []).append(name)

  def freeze(self) -> "SymbolTable":
    """Marks the table read-only and returns it."""
    self._frozen = True
    return self

  def sorted_groups(self) -> List[str]:
    return sorted(self.groups)

  def __len__(self) -> int:
    return len(self.symbols)

  def __repr__(self) -> str:
    return f"SymbolTable(target_type={self._target_type!r}, symbols={len(self.symbols)}, groups={sorted(self.groups)})"
