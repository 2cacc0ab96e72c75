"""
Configuration tree

Read-only nested configuration modelled as a tagged variant:

- ``Leaf(value)`` holds a scalar (int, str, bool, float or None)
- ``Node(children, value)`` holds nested entries and, optionally, the scalar
  that sat next to the container in a two-tier source

Two-tier sources use a plain key for the scalar and the same key with a
trailing dot for the nested mapping::

    {"plugin.": {"rest.": {"settings.": {"languages.": {"de": "3"}}}}}

The suffix convention is resolved once while building the tree, so lookups
never deal with key suffixes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

CONTAINER_SUFFIX = "."

# Key path of the language map consulted by the resolver
LANGUAGES_KEY_PATH = "plugin.rest.settings.languages"


@dataclass(frozen=True)
class Leaf:
    value: Any


@dataclass(frozen=True)
class Node:
    children: Mapping[str, ConfigEntry] = field(default_factory=dict)
    value: Any = None

    def get(self, key: str) -> ConfigEntry | None:
        return self.children.get(key)


ConfigEntry = Union[Leaf, Node]


class ConfigurationTree:
    """Builders for :class:`Node` trees."""

    @staticmethod
    def from_typoscript(raw: Mapping[str, Any] | None) -> Node:
        """Build a tree from the two-tier key convention.

        When both ``key`` and ``key.`` exist, the container wins and the
        scalar is kept as ``Node.value``.
        """
        if not raw:
            return Node()

        scalars: dict[str, Any] = {}
        containers: dict[str, Mapping[str, Any]] = {}
        for key, value in raw.items():
            key = str(key)
            if key.endswith(CONTAINER_SUFFIX) and isinstance(value, Mapping):
                containers[key[: -len(CONTAINER_SUFFIX)]] = value
            elif isinstance(value, Mapping):
                # Plain keys holding mappings are treated as containers as well
                containers.setdefault(key, value)
            else:
                scalars[key] = value

        children: dict[str, ConfigEntry] = {}
        for key, value in scalars.items():
            children[key] = Leaf(value)
        for key, value in containers.items():
            sub_tree = ConfigurationTree.from_typoscript(value)
            children[key] = Node(children=sub_tree.children, value=scalars.get(key))
        return Node(children=children)

    @staticmethod
    def from_mapping(raw: Mapping[str, Any] | None) -> Node:
        """Build a tree from plain nested mappings."""
        children: dict[str, ConfigEntry] = {}
        for key, value in (raw or {}).items():
            if isinstance(value, Mapping):
                children[str(key)] = ConfigurationTree.from_mapping(value)
            else:
                children[str(key)] = Leaf(value)
        return Node(children=children)

    @staticmethod
    def merge(base: Node, overlay: Node) -> Node:
        """Return a new tree with ``overlay`` entries taking priority."""
        children: dict[str, ConfigEntry] = dict(base.children)
        for key, entry in overlay.children.items():
            current = children.get(key)
            if isinstance(current, Node) and isinstance(entry, Node):
                merged = ConfigurationTree.merge(current, entry)
                value = entry.value if entry.value is not None else current.value
                children[key] = Node(children=merged.children, value=value)
            else:
                children[key] = entry
        return Node(children=children, value=overlay.value if overlay.value is not None else base.value)


def languages_tree(languages: Mapping[str, Any] | None) -> Node:
    """Build a tree holding only ``plugin.rest.settings.languages.<code>`` entries."""
    tree: ConfigEntry = Node(children={str(code): Leaf(value) for code, value in (languages or {}).items()})
    for segment in reversed(LANGUAGES_KEY_PATH.split(".")):
        tree = Node(children={segment: tree})
    return tree


def read_config(key_path: str, tree: Node) -> Any:
    """Look up a dotted key path.

    Returns the unwrapped scalar of a ``Leaf``, the ``Node`` itself for a
    container, or None when any segment is missing.
    """
    current: ConfigEntry = tree
    for segment in key_path.split("."):
        if not isinstance(current, Node):
            return None
        entry = current.get(segment)
        if entry is None:
            return None
        current = entry

    if isinstance(current, Leaf):
        return current.value
    return current
