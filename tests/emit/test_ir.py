"""
Tests for the Artifact Plan (IR).

Verifies:
1. Canonical artifact order with sorted groups.
2. Identifier validation before any text is produced.
3. Name collisions and inconsistent tables are rejected.
"""

import pytest

from constmap.analysis.symbol_table import SymbolTable
from constmap.emit.ir import ArtifactKind, build_plan
from constmap.emit.naming import GoNaming, PythonNaming
from constmap.errors import TemplateRenderError


def make_table(type_name="PrivateChannel", entries=(("A", None), ("B", "Misc"), ("C", "Margin"))):
  table = SymbolTable(type_name)
  for name, group in entries:
    table.add(name, group)
  return table.freeze()


def of_kind(plan, kind):
  return [a for a in plan.artifacts if a.kind == kind]


def test_artifact_order():
  plan = build_plan(make_table(), "channels", False, GoNaming("PrivateChannel"))
  assert [(a.kind, a.name) for a in plan.artifacts] == [
    (ArtifactKind.LOOKUP, "AllPrivateChannels"),
    (ArtifactKind.LOOKUP, "AllMarginPrivateChannels"),
    (ArtifactKind.KEYS_ACCESSOR, "AllMarginPrivateChannelsKeys"),
    (ArtifactKind.VALIDATOR, "ValidateMarginPrivateChannels"),
    (ArtifactKind.MEMBERSHIP, "IsMarginPrivateChannel"),
    (ArtifactKind.LOOKUP, "AllMiscPrivateChannels"),
    (ArtifactKind.KEYS_ACCESSOR, "AllMiscPrivateChannelsKeys"),
    (ArtifactKind.VALIDATOR, "ValidateMiscPrivateChannels"),
    (ArtifactKind.MEMBERSHIP, "IsMiscPrivateChannel"),
    (ArtifactKind.ORDERED, "AllPrivateChannelsSlice"),
    (ArtifactKind.CONVERTER, "PrivateChannelStrings"),
    (ArtifactKind.KEYS_HELPER, "PrivateChannelKeys"),
    (ArtifactKind.VALIDATOR, "ValidatePrivateChannel"),
  ]


def test_lookups_and_elements():
  plan = build_plan(make_table(), "channels", True, GoNaming("PrivateChannel"))
  lookups = of_kind(plan, ArtifactKind.LOOKUP)

  assert lookups[0].elements == ("A", "B", "C")
  assert lookups[1].elements == ("C",)
  assert of_kind(plan, ArtifactKind.ORDERED)[0].elements == ("A", "B", "C")
  assert of_kind(plan, ArtifactKind.MEMBERSHIP)[0].lookup == "AllMarginPrivateChannels"
  assert of_kind(plan, ArtifactKind.VALIDATOR)[-1].lookup == "AllPrivateChannels"
  assert plan.has_int_values is True
  assert plan.symbols == ("A", "B", "C")


def test_empty_table_still_plans_global_artifacts():
  plan = build_plan(make_table(entries=()), "channels", False, GoNaming("PrivateChannel"))
  assert [a.kind for a in plan.artifacts] == [
    ArtifactKind.LOOKUP,
    ArtifactKind.ORDERED,
    ArtifactKind.CONVERTER,
    ArtifactKind.KEYS_HELPER,
    ArtifactKind.VALIDATOR,
  ]


def test_invalid_package_name():
  with pytest.raises(TemplateRenderError, match="package name"):
    build_plan(make_table(), "my-pkg", False, GoNaming("PrivateChannel"))


def test_python_dotted_package_name():
  plan = build_plan(make_table(), "pkg.channels", False, PythonNaming("PrivateChannel"))
  assert plan.package_name == "pkg.channels"


def test_invalid_group_name():
  with pytest.raises(TemplateRenderError, match="group name"):
    build_plan(make_table(entries=(("A", "Bad-Group"),)), "p", False, GoNaming("T"))


def test_artifact_name_collides_with_constant():
  with pytest.raises(TemplateRenderError, match="collides"):
    build_plan(make_table("T", (("AllTs", None),)), "p", False, GoNaming("T"))


def test_group_member_must_be_a_symbol():
  table = SymbolTable("T")
  table.add("A", "G")
  table.groups["G"].append("Ghost")
  with pytest.raises(TemplateRenderError, match="not a discovered symbol"):
    build_plan(table, "p", False, GoNaming("T"))
