"""
Static Analysis Package.

Turns a loaded compilation unit into the symbol table consumed by the Emitter.

Modules:
    - ``records``: Language-neutral declaration records and compilation units.
    - ``symbol_table``: The ordered symbol / group container.
    - ``analyzer``: Type filtering and ``@group`` attribution.
"""

from constmap.analysis.analyzer import analyze, resolve_groups
from constmap.analysis.records import CommentGroup, CompilationUnit, DeclarationRecord
from constmap.analysis.symbol_table import SymbolTable

__all__ = [
  "CommentGroup",
  "CompilationUnit",
  "DeclarationRecord",
  "SymbolTable",
  "analyze",
  "resolve_groups",
]
