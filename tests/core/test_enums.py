"""Tests for Enum reflection helpers."""

from enum import Enum, IntEnum

from alis_utils.core.enums import (
    get_all_enum_entries,
    get_all_enum_keys,
    get_all_enum_values,
    get_enum_key_by_value,
    get_enum_value_by_key,
)


class State(IntEnum):
    STATE_UNSPECIFIED = 0
    RUNNING = 1
    DEPLOYING = 2
    DEPLOY_FAILED = 3
    PLANNING = 4
    PLANNED = 5
    PLAN_FAILED = 6
    PLANNING_DESTROY = 7
    PLAN_DESTROY_FAILED = 8
    PLANNED_DESTROY = 9
    DESTROYING = 10
    DESTROY_FAILED = 11
    DESTROYED = 12


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    CRIMSON = "red"  # alias of RED


class TestEnumListing:
    def test_keys_in_definition_order(self):
        assert get_all_enum_keys(State) == [
            "STATE_UNSPECIFIED",
            "RUNNING",
            "DEPLOYING",
            "DEPLOY_FAILED",
            "PLANNING",
            "PLANNED",
            "PLAN_FAILED",
            "PLANNING_DESTROY",
            "PLAN_DESTROY_FAILED",
            "PLANNED_DESTROY",
            "DESTROYING",
            "DESTROY_FAILED",
            "DESTROYED",
        ]

    def test_values(self):
        assert get_all_enum_values(State) == list(range(13))

    def test_entries(self):
        entries = get_all_enum_entries(State)
        assert entries[0] == ("STATE_UNSPECIFIED", 0)
        assert entries[-1] == ("DESTROYED", 12)
        assert len(entries) == 13

    def test_aliases_not_listed(self):
        """Alias members are not reported as separate keys."""
        assert get_all_enum_keys(Color) == ["RED", "GREEN"]
        assert get_all_enum_values(Color) == ["red", "green"]


class TestEnumLookup:
    def test_key_by_value(self):
        assert get_enum_key_by_value(State, 1) == "RUNNING"

    def test_key_by_member(self):
        assert get_enum_key_by_value(State, State.DESTROYED) == "DESTROYED"

    def test_key_by_alias_value_is_canonical_name(self):
        assert get_enum_key_by_value(Color, "red") == "RED"

    def test_key_by_unknown_value(self):
        assert get_enum_key_by_value(State, 99) is None

    def test_value_by_key(self):
        assert get_enum_value_by_key(State, "RUNNING") == 1

    def test_value_by_alias_key(self):
        assert get_enum_value_by_key(Color, "CRIMSON") == "red"

    def test_value_by_unknown_key(self):
        assert get_enum_value_by_key(State, "PAUSED") is None
