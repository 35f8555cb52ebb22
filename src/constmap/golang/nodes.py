"""
Go Declaration Nodes.

A deliberately shallow syntax tree: only the top level of a Go source file is
modelled. Function bodies, variable initialisers and import lists are parsed
for well-formedness and then dropped.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from constmap.analysis.records import CommentGroup


@dataclass
class ValueSpec:
  """One member of a ``const`` declaration (``A, B T = 1, 2``)."""

  names: List[str]
  line: int
  type_text: str = ""
  """Source text of the type annotation, empty when omitted."""

  type_ident: Optional[str] = None
  """The annotation when it is a single identifier token."""

  values: List[str] = field(default_factory=list)
  doc: Optional[CommentGroup] = None


@dataclass
class TypeSpec:
  """A ``type`` specification (``type Side int`` / ``type A = B``)."""

  name: str
  line: int
  underlying: Optional[str] = None
  """Underlying type when it is a single identifier."""

  alias: bool = False
  doc: Optional[CommentGroup] = None


@dataclass
class GenDecl:
  """
  A top-level ``const``, ``type``, ``var`` or ``import`` declaration.

  Only ``const`` and ``type`` declarations keep their specs.
  """

  keyword: str
  line: int
  specs: List[Union[ValueSpec, TypeSpec]] = field(default_factory=list)
  doc: Optional[CommentGroup] = None
  grouped: bool = False
  """True for the parenthesised form ``const ( ... )``."""


@dataclass
class FuncDecl:
  """A top-level function or method; only its position is kept."""

  line: int
  name: str = ""


@dataclass
class GoFile:
  """A parsed Go source file."""

  package_name: str
  filename: str = "<input>"
  decls: List[Union[GenDecl, FuncDecl]] = field(default_factory=list)

  def const_decls(self) -> List[GenDecl]:
    return [d for d in self.decls if isinstance(d, GenDecl) and d.keyword == "const"]

  def type_specs(self) -> List[TypeSpec]:
    specs: List[TypeSpec] = []
    for decl in self.decls:
      if isinstance(decl, GenDecl) and decl.keyword == "type":
        specs.extend(s for s in decl.specs if isinstance(s, TypeSpec))
    return specs
