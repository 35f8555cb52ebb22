"""
Intermediate Representation (IR).

This module defines the language-agnostic artifact plan rendered by the
printers. It acts as the contract between the Analyzer output (`SymbolTable`)
and the target-specific printers: every emitted construct is one `Artifact`
descriptor carrying its kind, its public name, the lookup it reads, and its
ordered elements.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from constmap.analysis.symbol_table import SymbolTable
from constmap.emit.naming import Naming
from constmap.errors import TemplateRenderError


class ArtifactKind(str, Enum):
  """Enumeration of emitted constructs, in their canonical order."""

  LOOKUP = "lookup"
  KEYS_ACCESSOR = "keys_accessor"
  VALIDATOR = "validator"
  MEMBERSHIP = "membership"
  ORDERED = "ordered"
  CONVERTER = "converter"
  KEYS_HELPER = "keys_helper"


@dataclass(frozen=True)
class Artifact:
  """
  One emitted construct.
  """

  kind: ArtifactKind
  """What to render."""

  name: str
  """Public identifier of the construct."""

  group: Optional[str] = None
  """Group scope; None for global artifacts."""

  lookup: Optional[str] = None
  """Name of the lookup artifact this one reads (accessors, predicates)."""

  elements: Tuple[str, ...] = ()
  """Symbols listed by lookups and ordered sequences."""


@dataclass
class GeneratedFile:
  """
  The full artifact plan for one output file.
  """

  package_name: str
  """Package clause (Go) or source module (Python)."""

  type_name: str
  """Target type identifier."""

  has_int_values: bool = False
  """Conversion helpers produce integers instead of strings."""

  symbols: Tuple[str, ...] = ()
  """Every symbol in declaration order."""

  artifacts: List[Artifact] = field(default_factory=list)


def _check_table(table: SymbolTable) -> None:
  positions = {name: i for i, name in enumerate(table.symbols)}
  for group, members in table.groups.items():
    if not group:
      raise TemplateRenderError("empty group name in symbol table")
    if not members:
      raise TemplateRenderError(f"group {group!r} has no members")
    indexes = []
    for member in members:
      if member not in positions:
        raise TemplateRenderError(f"group {group!r} member {member!r} is not a discovered symbol")
      indexes.append(positions[member])
    if indexes != sorted(indexes):
      raise TemplateRenderError(f"group {group!r} members are not in declaration order")


def build_plan(table: SymbolTable, package_name: str, has_int_values: bool, naming: Naming) -> GeneratedFile:
  """
  Lays out the artifacts for a symbol table.

  Groups are emitted in sorted name order so that output is byte-stable.

  Args:
      table: The analyzed symbols.
      package_name: Package clause / source module of the output.
      has_int_values: Whether the target type is integer-backed.
      naming: Naming scheme of the output language.

  Returns:
      GeneratedFile: The ordered artifact plan.

  Raises:
      TemplateRenderError: On inconsistent tables or unsafe identifiers.
  """
  _check_table(table)

  # Python sources are addressed by dotted module path
  package_parts = package_name.split(".") if naming.language == "Python" else [package_name]
  for part in package_parts:
    naming.check(part, "package name")
  naming.check(table.target_type, "type name")
  for name in table.symbols:
    naming.check(name, "constant")
  for group in table.groups:
    naming.check(group, "group name")

  plan = GeneratedFile(
    package_name=package_name,
    type_name=table.target_type,
    has_int_values=has_int_values,
    symbols=tuple(table.symbols),
  )

  global_lookup = naming.lookup()
  plan.artifacts.append(Artifact(ArtifactKind.LOOKUP, global_lookup, elements=tuple(table.symbols)))

  for group in table.sorted_groups():
    lookup = naming.lookup(group)
    plan.artifacts.extend(
      [
        Artifact(ArtifactKind.LOOKUP, lookup, group=group, elements=tuple(table.groups[group])),
        Artifact(ArtifactKind.KEYS_ACCESSOR, naming.keys_accessor(group), group=group, lookup=lookup),
        Artifact(ArtifactKind.VALIDATOR, naming.validator(group), group=group, lookup=lookup),
        Artifact(ArtifactKind.MEMBERSHIP, naming.membership(group), group=group, lookup=lookup),
      ]
    )

  plan.artifacts.extend(
    [
      Artifact(ArtifactKind.ORDERED, naming.ordered(), elements=tuple(table.symbols)),
      Artifact(ArtifactKind.CONVERTER, naming.converter()),
      Artifact(ArtifactKind.KEYS_HELPER, naming.keys_helper()),
      Artifact(ArtifactKind.VALIDATOR, naming.validator(), lookup=global_lookup),
    ]
  )

  declared = set(plan.symbols) | {table.target_type}
  seen = set()
  for artifact in plan.artifacts:
    naming.check(artifact.name, "artifact name")
    if artifact.name in seen or artifact.name in declared:
      raise TemplateRenderError(f"generated name {artifact.name!r} collides with another declaration")
    seen.add(artifact.name)

  return plan
