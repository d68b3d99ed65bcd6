"""Committing to columns in a Merkle tree and opening them at queries."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from .blake2_merkle import Blake2sMerkleHasher, commit_on_layer

__all__ = ["MerkleDecommitment", "MerkleProver"]


def _log2_exact(n: int) -> int:
    if n <= 0 or n & (n - 1):
        raise ValueError(f"column length {n} is not a power of two")
    return n.bit_length() - 1


def _take_while(items: deque, predicate: Callable[[Any], bool]) -> list:
    """Pop items from the front while `predicate` holds, leaving the first miss."""
    taken = []
    while items and predicate(items[0]):
        taken.append(items.popleft())
    return taken


def _next_decommitment_node(prev_queries: deque, layer_queries: deque) -> Optional[int]:
    """The next node of the current layer that must be decommitted, if any."""
    candidates = []
    if prev_queries:
        candidates.append(prev_queries[0] // 2)
    if layer_queries:
        candidates.append(layer_queries[0])
    return min(candidates, default=None)


@dataclass
class MerkleDecommitment:
    """Values the verifier needs but cannot compute, in the order it needs them."""

    hash_witness: list[Any] = field(default_factory=list)
    column_witness: list[int] = field(default_factory=list)


@dataclass
class MerkleProver:
    """A committed Merkle tree; `layers[k]` holds the 2**k node hashes of layer k."""

    layers: list[list[Any]]

    @classmethod
    def commit(
        cls, columns: Sequence[Sequence[int]], hasher: Any = Blake2sMerkleHasher
    ) -> "MerkleProver":
        """Commit to columns whose lengths are powers of two.

        Raises ValueError if there are no columns or a length is not a power of two.
        """
        if not columns:
            raise ValueError("cannot commit to no columns")
        for column in columns:
            _log2_exact(len(column))

        ordered = deque(sorted(columns, key=len, reverse=True))
        max_log_size = _log2_exact(len(ordered[0]))
        layers: list[list[Any]] = []
        for log_size in range(max_log_size, -1, -1):
            layer_columns = _take_while(
                ordered, lambda column: _log2_exact(len(column)) == log_size
            )
            prev_layer = layers[-1] if layers else None
            layers.append(commit_on_layer(hasher, log_size, prev_layer, layer_columns))
        layers.reverse()
        return cls(layers)

    def decommit(
        self,
        queries_per_log_size: Mapping[int, Sequence[int]],
        columns: Sequence[Sequence[int]],
    ) -> tuple[list[list[int]], MerkleDecommitment]:
        """Open the columns at the queries given per column log size.

        Returns the queried values of every column, in the order of `columns`,
        and the decommitment. Raises ValueError if some queries are not
        strictly increasing.
        """
        for queries in queries_per_log_size.values():
            if any(a >= b for a, b in zip(queries, queries[1:])):
                raise ValueError("Queries are not sorted.")

        decommitment = MerkleDecommitment()
        queried_values_by_layer: list[list[list[int]]] = []
        columns_by_layer = deque(sorted(columns, key=len, reverse=True))

        last_layer_queries: list[int] = []
        for layer_log_size in reversed(range(len(self.layers))):
            layer_queried_values: list[list[int]] = []
            layer_total_queries: list[int] = []

            layer_columns = _take_while(
                columns_by_layer,
                lambda column: _log2_exact(len(column)) == layer_log_size,
            )
            previous_layer_hashes = (
                self.layers[layer_log_size + 1]
                if layer_log_size + 1 < len(self.layers)
                else None
            )

            prev_layer_queries = deque(last_layer_queries)
            layer_column_queries = deque(queries_per_log_size.get(layer_log_size, ()))

            while (
                node_index := _next_decommitment_node(
                    prev_layer_queries, layer_column_queries
                )
            ) is not None:
                if previous_layer_hashes is not None:
                    for child in (2 * node_index, 2 * node_index + 1):
                        if prev_layer_queries and prev_layer_queries[0] == child:
                            prev_layer_queries.popleft()
                        else:
                            decommitment.hash_witness.append(previous_layer_hashes[child])

                node_values = [column[node_index] for column in layer_columns]
                if layer_column_queries and layer_column_queries[0] == node_index:
                    layer_column_queries.popleft()
                    layer_queried_values.append(node_values)
                else:
                    decommitment.column_witness.extend(node_values)

                layer_total_queries.append(node_index)

            queried_values_by_layer.append(layer_queried_values)
            last_layer_queries = layer_total_queries
        queried_values_by_layer.reverse()

        return self._rearrange_queried_values(queried_values_by_layer, columns), decommitment

    @staticmethod
    def _rearrange_queried_values(
        queried_values_by_layer: list[list[list[int]]],
        columns: Sequence[Sequence[int]],
    ) -> list[list[int]]:
        """Reorder values grouped per layer and node into values per input column."""
        node_iters = [
            [iter(node_values) for node_values in layer] for layer in queried_values_by_layer
        ]
        return [
            [next(node_iter) for node_iter in node_iters[_log2_exact(len(column))]]
            for column in columns
        ]

    def root(self) -> Any:
        """The root hash of the tree."""
        return self.layers[0][0]