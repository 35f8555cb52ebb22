"""
Tests for the Python Printer.

The generated module is executed against the sample module, so lookups,
validators and converters are checked by behaviour rather than text,
including Enum-backed constants that convert to their values.
"""

import pytest

from constmap.analysis import analyze
from constmap.emit.emitter import emit
from constmap.frontends.python import PythonFrontend
from constmap.pipeline import infer_int_values

CHANNEL_VALUES = [
  "order",
  "order_update",
  "trade",
  "trade_update",
  "trade_fast_update",
  "account",
  "account_update",
  "sub_account",
  "sub_account_update",
  "mwallet_order",
  "mwallet_trade",
  "mwallet_trade_fast_update",
  "mwallet_account",
  "mwallet_average_price",
  "borrowing",
  "ad_ratio",
  "borrowing_pool_quota",
  "average_price",
  "favorite_market",
]


@pytest.fixture
def sample_unit(testdata, monkeypatch):
  monkeypatch.syspath_prepend(str(testdata))
  return PythonFrontend().load(str(testdata / "privateevent.py"))


def run_generated(unit, type_name):
  table = analyze(unit, type_name)
  code = emit(table, unit.package_name, infer_int_values(unit, type_name), language="python")
  namespace = {}
  exec(compile(code, f"{type_name.lower()}map.py", "exec"), namespace)
  return code, namespace


def test_header(sample_unit):
  code, _ = run_generated(sample_unit, "PrivateChannel")
  assert code.startswith("# Code generated by constmap; DO NOT EDIT.\n")
  assert "from privateevent import (\n    PrivateChannel,\n    PrivateChannelOrder,\n" in code


def test_private_channel_round_trip(sample_unit):
  _, ns = run_generated(sample_unit, "PrivateChannel")

  assert len(ns["ALL_PRIVATE_CHANNELS"]) == 19
  assert len(ns["ALL_PRIVATE_CHANNELS_SLICE"]) == 19
  assert ns["validate_margin_private_channels"](ns["PrivateChannelBorrowing"]) is True
  assert ns["validate_margin_private_channels"](ns["PrivateChannelOrder"]) is False
  assert ns["is_misc_private_channel"](ns["PrivateChannelFavoriteMarket"]) is True
  assert ns["validate_private_channel"]("unknown") is False
  assert ns["private_channel_strings"](ns["ALL_PRIVATE_CHANNELS_SLICE"]) == CHANNEL_VALUES


def test_group_accessors(sample_unit):
  _, ns = run_generated(sample_unit, "PrivateChannel")

  margin = ns["all_margin_private_channels_keys"]()
  assert len(margin) == 8
  assert margin[0] == "mwallet_order"
  assert ns["private_channel_keys"](ns["ALL_MISC_PRIVATE_CHANNELS"]) == ["average_price", "favorite_market"]


def test_side_integer_conversion(sample_unit):
  code, ns = run_generated(sample_unit, "Side")
  assert "-> List[int]:" in code
  assert ns["side_strings"](ns["ALL_SIDES_SLICE"]) == [1, -1]


PALETTE = '''from enum import Enum


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


Red: Color = Color.RED
Blue: Color = Color.BLUE
'''


def test_str_enum_members_convert_to_values(tmp_path, monkeypatch):
  (tmp_path / "palette.py").write_text(PALETTE, encoding="utf-8")
  monkeypatch.syspath_prepend(str(tmp_path))
  unit = PythonFrontend().load(str(tmp_path / "palette.py"))

  code, ns = run_generated(unit, "Color")

  assert "-> List[str]:" in code
  assert ns["color_strings"](ns["ALL_COLORS_SLICE"]) == ["red", "blue"]
  assert ns["validate_color"](ns["Red"]) is True
