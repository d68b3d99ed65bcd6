"""A per-commitment-tree container with column-wise helpers."""

from __future__ import annotations

from typing import Any, Callable, Iterable

__all__ = ["TreeVec"]


def _checked_pairs(first: list[Any], second: list[Any], what: str) -> list[tuple[Any, Any]]:
    if len(first) != len(second):
        raise ValueError(f"{what} lengths differ: {len(first)} != {len(second)}")
    return list(zip(first, second))


class TreeVec(list):
    """A list holding one element per commitment tree.

    When each element is itself a list of columns, the ``*_cols`` methods
    operate on the columns of every tree.
    """

    def map(self, f: Callable[[Any], Any]) -> "TreeVec":
        """Apply `f` to the element of every tree."""
        return TreeVec(f(tree) for tree in self)

    def zip(self, other: Iterable[Any]) -> "TreeVec":
        """Pair trees with `other`, stopping at the shorter of the two."""
        return TreeVec(zip(self, other))

    def zip_eq(self, other: Iterable[Any]) -> "TreeVec":
        """Pair trees with `other`; raise ValueError if the lengths differ."""
        return TreeVec(_checked_pairs(list(self), list(other), "tree"))

    def map_cols(self, f: Callable[[Any], Any]) -> "TreeVec":
        """Apply `f` to every column of every tree, keeping the structure."""
        return TreeVec([f(column) for column in tree] for tree in self)

    def zip_cols(self, other: Iterable[Iterable[Any]]) -> "TreeVec":
        """Pair columns with those of `other`, which must have the same structure.

        Raises ValueError if the number of trees or of columns in a tree differ.
        """
        trees = _checked_pairs(list(self), list(other), "tree")
        return TreeVec(
            _checked_pairs(list(mine), list(theirs), "column")
            for mine, theirs in trees
        )

    def flatten(self) -> list[Any]:
        """Concatenate the columns of all trees into one list of columns."""
        return [column for tree in self for column in tree]

    def flatten_cols(self) -> list[Any]:
        """Concatenate the values of every column of every tree into one list."""
        return [value for tree in self for column in tree for value in column]