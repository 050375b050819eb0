"""
Contains the namespace trie used to index values by sequences of key segments.

The trie only supports exact path lookups: a value stored at `("a", "b")` is never returned for
`("a",)` or `("a", "b", "c")`. Intermediate nodes exist solely to route to their descendants.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

MergeFunction = Callable[[T, T], T]


class _TrieNode(Generic[T]):
    """Single node of a `NamespaceTrie`."""

    __slots__ = ("value", "has_value", "children")

    def __init__(self) -> None:
        self.value: T | None = None
        self.has_value = False
        self.children: dict[str, _TrieNode[T]] = {}


class NamespaceTrie(Generic[T]):
    """
    Tree keyed by successive namespace segments.

    Nodes are created lazily the first time a path is written with `set_value`; reading never
    creates nodes. The empty path is valid and addresses the root node.

    Examples:
        >>> trie = NamespaceTrie()
        >>> trie.set_value(["a", "b"], [1])
        [1]
        >>> trie.set_value(["a", "b"], [2], lambda old, new: old + new)
        [1, 2]
        >>> trie.get_value(["a"]) is None
        True
    """

    def __init__(self) -> None:
        self._root: _TrieNode[T] = _TrieNode()

    def get_value(self, path: Sequence[str]) -> T | None:
        """
        Returns the value stored at the exact `path`.

        Args:
            path: Sequence of key segments.

        Returns:
            The stored value, or None if no value was ever set at that path.
        """
        node = self._find(path)
        if node is None or not node.has_value:
            return None
        return node.value

    def set_value(self, path: Sequence[str], value: T, merge: MergeFunction[T] | None = None) -> T:
        """
        Stores `value` at `path`, creating any missing nodes along the way.

        If a value already exists at the path and `merge` is given, the stored value becomes
        `merge(existing, value)`; otherwise `value` replaces whatever was there.

        Args:
            path: Sequence of key segments.
            value: Value to store or merge in.
            merge: Optional function combining the existing and the new value.

        Returns:
            The value stored at the path after the call.
        """
        node = self._root
        for segment in path:
            child = node.children.get(segment)
            if child is None:
                child = node.children[segment] = _TrieNode()
            node = child

        if node.has_value and merge is not None:
            node.value = merge(node.value, value)  # type: ignore[arg-type]
        else:
            node.value = value
        node.has_value = True
        return node.value  # type: ignore[return-value]

    def clear(self) -> None:
        """Discards every node; all paths become absent."""
        self._root = _TrieNode()

    def _find(self, path: Sequence[str]) -> _TrieNode[T] | None:
        node = self._root
        for segment in path:
            node = node.children.get(segment)  # type: ignore[assignment]
            if node is None:
                return None
        return node
