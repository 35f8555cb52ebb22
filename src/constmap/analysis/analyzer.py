"""
Constant Analyzer.

Folds the ordered declaration records of a compilation unit into a
`SymbolTable` for one target type.

Attribution rules:
1.  **Type filter**: a member is considered only if its explicit type
    annotation is exactly the target identifier. Members relying on implicit
    typing from a previous sibling never match.
2.  **Doc selection**: the enclosing block's lead comment wins over the
    member's own comment.
3.  **Annotations**: every ``@group <name>`` line in the selected comment is
    applied top to bottom (last one wins). The name is title-cased (first
    character upper-cased, rest unchanged).
4.  **Persistence**: the current group carries over to later members of the
    same block until another annotation replaces it. It is cleared at the
    start of every block.
"""

import re
from typing import Iterable, List, Optional, Tuple, Union

from constmap.analysis.records import CommentGroup, CompilationUnit, DeclarationRecord, split_blocks
from constmap.analysis.symbol_table import SymbolTable
from constmap.utils.console import log_debug, log_warning

GROUP_PATTERN = re.compile(r"^\s*@group\s+(\S+)")


def to_title_case(value: str) -> str:
  """
  Upper-cases the first character only (``mWallet`` -> ``MWallet``).

  Args:
      value: Raw group name.

  Returns:
      The normalized name; empty input is returned unchanged.
  """
  if not value:
    return value
  first = value[0].upper()
  # "ß" and similar have no single-character upper case
  if len(first) != 1:
    first = value[0]
  return first + value[1:]


def find_group_annotation(doc: Optional[CommentGroup]) -> Optional[str]:
  """
  Scans a comment for ``@group <name>`` lines.

  Args:
      doc: The applicable comment group, if any.

  Returns:
      The normalized name of the last annotation found, or None.
  """
  if doc is None:
    return None
  found = None
  for line in doc.lines:
    match = GROUP_PATTERN.match(line)
    if match:
      name = to_title_case(match.group(1).strip())
      if not name[:1].isupper():
        log_warning(f"Ignoring group annotation {match.group(1)!r}: name must start with a letter")
        continue
      found = name
  return found


def resolve_groups(records: Iterable[DeclarationRecord], target_type: str) -> List[Tuple[str, Optional[str]]]:
  """
  Pure attribution fold over a flattened record sequence.

  Args:
      records: Declaration records in source order.
      target_type: Identifier of the type to collect.

  Returns:
      ``(name, group)`` pairs in declaration order; group is None for
      ungrouped symbols.
  """
  resolved: List[Tuple[str, Optional[str]]] = []

  for block in split_blocks(records):
    current_group: Optional[str] = None
    for record in block:
      if not record.has_type(target_type):
        continue

      annotated = find_group_annotation(record.effective_doc())
      if annotated:
        current_group = annotated

      for name in record.names:
        resolved.append((name, current_group))

  return resolved


def analyze(source: Union[CompilationUnit, Iterable[DeclarationRecord]], target_type: str) -> SymbolTable:
  """
  Builds the symbol table of `target_type` from a unit or raw records.

  Args:
      source: A loaded `CompilationUnit` or an iterable of records.
      target_type: Identifier of the type to collect.

  Returns:
      SymbolTable: The populated, frozen table.

  Raises:
      DuplicateSymbolError: If the same name is declared twice.
  """
  records = source.records if isinstance(source, CompilationUnit) else list(source)
  table = SymbolTable(target_type)

  for name, group in resolve_groups(records, target_type):
    log_debug(f"found constant {name} (group={group or '-'})")
    table.add(name, group)

  return table.freeze()
