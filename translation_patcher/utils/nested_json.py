"""Helpers for nested translation trees addressed by dotted keys.

A translation tree is a JSON object whose values are either strings or
further JSON objects. Keys are addressed with a dotted path, so
``{"menu": {"file": "File"}}`` holds ``"File"`` under ``"menu.file"``.
Arrays and non-string scalars may appear in a tree but are never treated
as translatable text.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, MutableMapping, Optional

KEY_SEPARATOR = "."

TranslationTree = Dict[str, Any]


@dataclass
class TranslationKeyValue:
    """A single translatable string and the dotted path it lives under."""

    key: str
    value: str


def is_flat(tree: MutableMapping[str, Any]) -> bool:
    """Return True if every top-level value of the tree is a string."""
    return all(isinstance(value, str) for value in tree.values())


def get_value(tree: MutableMapping[str, Any], key: str) -> Optional[str]:
    """Look up the string stored under a dotted key.

    Args:
        tree: The translation tree to read from
        key: Dotted path, e.g. 'menu.file.open'

    Returns:
        The string leaf, or None if the path is missing or does not end on a string
    """
    node: Any = tree
    for segment in key.split(KEY_SEPARATOR):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node if isinstance(node, str) else None


def set_value(tree: MutableMapping[str, Any], key: str, value: str) -> None:
    """Store a string under a dotted key, creating intermediate objects.

    An intermediate segment that is missing, or holds something other than
    an object, is replaced with an empty object. This means a string stored
    at 'a' is overwritten when setting 'a.b'.

    Args:
        tree: The translation tree to modify in place
        key: Dotted path, e.g. 'menu.file.open'
        value: The string to store
    """
    *parents, leaf = key.split(KEY_SEPARATOR)
    node = tree
    for segment in parents:
        if not isinstance(node.get(segment), dict):
            node[segment] = {}
        node = node[segment]
    node[leaf] = value


def flatten(tree: MutableMapping[str, Any]) -> Dict[str, str]:
    """Flatten a tree into dotted keys and their string values.

    Traversal is depth-first in insertion order. Lists and non-string
    scalars are skipped.
    """
    result: Dict[str, str] = {}
    _flatten_into(tree, [], result)
    return result


def _flatten_into(
    node: MutableMapping[str, Any], parent_keys: List[str], result: Dict[str, str]
) -> None:
    for key, value in node.items():
        if isinstance(value, dict):
            _flatten_into(value, parent_keys + [key], result)
        elif isinstance(value, str):
            result[KEY_SEPARATOR.join(parent_keys + [key])] = value


def diff(
    base: MutableMapping[str, Any], other: MutableMapping[str, Any]
) -> List[TranslationKeyValue]:
    """Compute the entries that changed between two trees.

    Keys of base that are missing from other, or whose value differs, come
    first in base order and carry base's value. Keys that only exist in
    other follow in other's order and carry other's value.

    Args:
        base: The tree before the change
        other: The tree after the change

    Returns:
        Ordered list of changed entries
    """
    base_entries = flatten(base)
    other_entries = flatten(other)

    changes = [
        TranslationKeyValue(key, value)
        for key, value in base_entries.items()
        if other_entries.get(key) != value
    ]
    changes.extend(
        TranslationKeyValue(key, value)
        for key, value in other_entries.items()
        if key not in base_entries
    )
    return changes
