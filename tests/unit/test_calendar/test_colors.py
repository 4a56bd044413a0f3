"""
Unit tests for calendar color resolution.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.calendar.colors import (
    DEFAULT_MEMBER_COLOR,
    MEMBER_PALETTE,
    TYPE_COLORS,
    member_color_map,
    resolve_color,
    type_color,
)
from familyhub.calendar.unified import ItemType, UnifiedItem
from familyhub.core.models import FamilyMember


@pytest.fixture
def members():
    return [
        {"id": 1, "name": "Mom", "color": "#ef4444"},
        {"id": "2", "name": "Sam", "color": "#22c55e"},
    ]


def _item(item_type=ItemType.EVENT, member=None):
    return UnifiedItem(id=1, title="x", date="2025-06-01", type=item_type, family_member_id=member)


class TestResolveColor:
    """Owner color wins over type color."""

    def test_member_color(self, members):
        assert resolve_color(_item(member=1), members) == "#ef4444"

    def test_member_ids_compare_as_strings(self, members):
        assert resolve_color(_item(member="1"), members) == "#ef4444"
        assert resolve_color(_item(member=2), members) == "#22c55e"

    def test_unknown_member_uses_default(self, members):
        assert resolve_color(_item(member=99), members) == DEFAULT_MEMBER_COLOR

    def test_unknown_member_uses_configured_default(self, members):
        assert resolve_color(_item(member=99), members, default_member_color="#000000") == "#000000"

    @pytest.mark.parametrize("item_type", list(ItemType))
    def test_unowned_item_uses_type_color(self, members, item_type):
        assert resolve_color(_item(item_type), members) == TYPE_COLORS[item_type]

    def test_meal_is_never_member_colored(self, members):
        assert resolve_color(_item(ItemType.MEAL), members) == TYPE_COLORS[ItemType.MEAL]

    def test_precomputed_colors(self):
        assert resolve_color(_item(member=5), colors={"5": "#123456"}) == "#123456"

    def test_type_colors_are_distinct(self):
        assert len(set(TYPE_COLORS.values())) == len(TYPE_COLORS)


class TestMemberColorMap:

    def test_dicts_and_models(self, members):
        mapping = member_color_map(members + [FamilyMember(id=3, name="Lee", color="#8b5cf6")])
        assert mapping == {"1": "#ef4444", "2": "#22c55e", "3": "#8b5cf6"}

    def test_skips_members_without_id_or_color(self):
        assert member_color_map([{"id": None, "color": "#fff000"}, {"id": 4, "color": ""}]) == {}

    def test_none(self):
        assert member_color_map(None) == {}


def test_type_color_accepts_strings():
    assert type_color("task") == TYPE_COLORS[ItemType.TASK]
    assert type_color("bogus") == DEFAULT_MEMBER_COLOR


def test_palette_has_twelve_hex_colors():
    assert len(MEMBER_PALETTE) == 12
    assert all(color.startswith("#") and len(color) == 7 for color in MEMBER_PALETTE)
