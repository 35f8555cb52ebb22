"""
Tests for the Symbol Table.

Verifies:
1. Declaration order is preserved across groups.
2. Duplicate names are rejected.
3. Frozen tables reject writes.
"""

import pytest

from constmap.analysis.symbol_table import SymbolTable
from constmap.errors import AnalysisError, DuplicateSymbolError


def test_add_preserves_order_and_groups():
  table = SymbolTable("PrivateChannel")
  table.add("A")
  table.add("B", "Margin")
  table.add("C")
  table.add("D", "Margin")
  table.add("E", "Misc")

  assert table.symbols == ["A", "B", "C", "D", "E"]
  assert table.groups == {"Margin": ["B", "D"], "Misc": ["E"]}
  assert table.sorted_groups() == ["Margin", "Misc"]
  assert len(table) == 5


def test_empty_group_means_ungrouped():
  table = SymbolTable("T")
  table.add("A", "")
  table.add("B", None)
  assert table.groups == {}


def test_duplicate_detected_in_large_table():
  table = SymbolTable("T")
  for i in range(50_000):
    table.add(f"C{i}")
  with pytest.raises(DuplicateSymbolError):
    table.add("C0")
  assert len(table) == 50_000


def test_duplicate_symbol_rejected():
  table = SymbolTable("T")
  table.add("A")
  with pytest.raises(DuplicateSymbolError) as excinfo:
    table.add("A", "Margin")
  assert excinfo.value.name == "A"
  assert table.groups == {}


def test_frozen_table_is_read_only():
  table = SymbolTable("T").freeze()
  assert table.frozen
  with pytest.raises(AnalysisError, match="frozen"):
    table.add("A")


def test_target_type_is_read_only():
  table = SymbolTable("Side")
  with pytest.raises(AttributeError):
    table.target_type = "Other"
  assert "Side" in repr(table)
