import copy
from typing import Any, Dict

import pytest

from translation_patcher.utils.nested_json import (
    TranslationKeyValue,
    diff,
    flatten,
    get_value,
    is_flat,
    set_value,
)

NESTED: Dict[str, Any] = {
    "title": "Trade-in",
    "menu": {
        "file": {"open": "Open", "close": "Close"},
        "help": "Help",
    },
    "count": 3,
    "tags": ["a", "b"],
    "enabled": True,
    "empty": None,
}


class TestGetValue:
    """Tests for reading dotted keys."""

    def test_top_level_key(self) -> None:
        """Test reading a top-level string."""
        assert get_value(NESTED, "title") == "Trade-in"

    def test_nested_key(self) -> None:
        """Test reading nested strings."""
        assert get_value(NESTED, "menu.file.open") == "Open"
        assert get_value(NESTED, "menu.help") == "Help"

    def test_missing_path_returns_none(self) -> None:
        """Test missing paths return None."""
        assert get_value(NESTED, "menu.edit") is None
        assert get_value(NESTED, "nope.deeper.still") is None

    def test_path_through_string_returns_none(self) -> None:
        """Descending past a string leaf is a miss, not an error."""
        assert get_value(NESTED, "title.more") is None

    def test_non_string_leaf_returns_none(self) -> None:
        """Test objects, numbers and arrays are not returned."""
        assert get_value(NESTED, "menu") is None
        assert get_value(NESTED, "count") is None
        assert get_value(NESTED, "tags") is None

    def test_flat_tree(self) -> None:
        """Test reading from a flat tree."""
        assert get_value({"a": "A", "b": "B"}, "b") == "B"


class TestSetValue:
    """Tests for writing dotted keys."""

    def test_creates_intermediate_objects(self) -> None:
        """Test missing objects along the path are created."""
        tree: Dict[str, Any] = {}
        set_value(tree, "menu.file.open", "Open")
        assert tree == {"menu": {"file": {"open": "Open"}}}

    def test_overwrites_existing_leaf(self) -> None:
        """Test an existing string is replaced."""
        tree = copy.deepcopy(NESTED)
        set_value(tree, "menu.help", "Aide")
        assert tree["menu"]["help"] == "Aide"
        assert tree["menu"]["file"] == {"open": "Open", "close": "Close"}

    def test_keeps_sibling_keys(self) -> None:
        """Test sibling keys survive a write."""
        tree = copy.deepcopy(NESTED)
        set_value(tree, "menu.file.save", "Save")
        assert tree["menu"]["file"] == {"open": "Open", "close": "Close", "save": "Save"}

    def test_replaces_non_object_in_the_way(self) -> None:
        """A string sitting where an object is needed is replaced."""
        tree: Dict[str, Any] = {"title": "Trade-in"}
        set_value(tree, "title.short", "TI")
        assert tree == {"title": {"short": "TI"}}

    def test_single_segment_on_flat_tree(self) -> None:
        """Test a plain key is added to a flat tree."""
        tree: Dict[str, Any] = {"a": "A"}
        set_value(tree, "b", "B")
        assert tree == {"a": "A", "b": "B"}


class TestFlatten:
    """Tests for flattening a tree into dotted keys."""

    def test_depth_first_insertion_order(self) -> None:
        """Test keys come out depth-first in insertion order."""
        assert list(flatten(NESTED).items()) == [
            ("title", "Trade-in"),
            ("menu.file.open", "Open"),
            ("menu.file.close", "Close"),
            ("menu.help", "Help"),
        ]

    def test_skips_arrays_and_non_strings(self) -> None:
        """Test arrays and non-string values are dropped."""
        flat = flatten(NESTED)
        assert "tags" not in flat
        assert "count" not in flat
        assert "enabled" not in flat
        assert "empty" not in flat

    def test_empty_tree(self) -> None:
        """Test an empty tree flattens to nothing."""
        assert flatten({}) == {}

    def test_round_trip_through_set_value(self) -> None:
        """Re-applying every flattened entry onto an empty tree gives the same entries."""
        rebuilt: Dict[str, Any] = {}
        for key, value in flatten(NESTED).items():
            set_value(rebuilt, key, value)
        assert flatten(rebuilt) == flatten(NESTED)
        assert rebuilt == {
            "title": "Trade-in",
            "menu": {"file": {"open": "Open", "close": "Close"}, "help": "Help"},
        }


class TestIsFlat:
    """Tests for flat tree detection."""

    @pytest.mark.parametrize(
        "tree, expected",
        [
            ({"a": "A", "b": "B"}, True),
            ({}, True),
            ({"a": "A", "b": {"c": "C"}}, False),
            ({"a": "A", "n": 1}, False),
        ],
    )
    def test_is_flat(self, tree: Dict[str, Any], expected: bool) -> None:
        """Test only trees of top-level strings count as flat."""
        assert is_flat(tree) is expected


class TestDiff:
    """Tests for diffing two trees."""

    def test_identical_trees_have_no_diff(self) -> None:
        """Test identical trees produce no entries."""
        assert diff(NESTED, copy.deepcopy(NESTED)) == []
        assert diff({}, {}) == []

    def test_changed_keys_carry_base_value(self) -> None:
        """Changed keys are reported with the text from the base tree."""
        base = {"a": "Hello", "b": {"c": "World"}}
        patched = {"a": "Hi", "b": {"c": "World"}, "d": "New"}

        assert diff(base, patched) == [
            TranslationKeyValue("a", "Hello"),
            TranslationKeyValue("d", "New"),
        ]

    def test_base_order_first_then_added_keys(self) -> None:
        """Test base keys come first, then keys only in the other tree."""
        base = {"x": "1", "y": {"z": "2"}, "w": "3"}
        other = {"n": "new", "w": "changed", "y": {"z": "2", "m": "more"}, "x": "1b"}

        assert [entry.key for entry in diff(base, other)] == ["x", "w", "n", "y.m"]

    def test_key_missing_from_other_is_reported(self) -> None:
        """Test a key removed from the other tree is reported with its base text."""
        base = {"keep": "Keep", "gone": "Gone"}
        other = {"keep": "Keep"}
        assert diff(base, other) == [TranslationKeyValue("gone", "Gone")]

    def test_arrays_are_ignored(self) -> None:
        """Test changes inside arrays are not reported."""
        base = {"a": "A", "list": ["x"]}
        other = {"a": "A", "list": ["y", "z"]}
        assert diff(base, other) == []

    def test_applying_added_entries_converges(self) -> None:
        """Keys only present in the patched tree end up with the patched text."""
        base = {"a": "Hello", "b": {"c": "World"}}
        patched = {"a": "Hi", "b": {"c": "World", "e": "Earth"}, "d": "New"}
        target = copy.deepcopy(base)

        for entry in diff(base, patched):
            set_value(target, entry.key, entry.value)

        assert get_value(target, "d") == get_value(patched, "d")
        assert get_value(target, "b.e") == get_value(patched, "b.e")
        # Changed keys are re-sent with the base text
        assert get_value(target, "a") == "Hello"
