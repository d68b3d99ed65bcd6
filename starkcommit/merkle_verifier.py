"""Checking Merkle decommitments against a committed root."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .blake2_merkle import Blake2sMerkleHasher
from .merkle_prover import MerkleDecommitment, _next_decommitment_node, _take_while

__all__ = ["MerkleVerificationError", "MerkleVerificationFailed", "MerkleVerifier"]


class MerkleVerificationError(enum.Enum):
    """The ways a Merkle decommitment can fail to verify."""

    WITNESS_TOO_SHORT = "Witness is too short."
    WITNESS_TOO_LONG = "Witness is too long."
    COLUMN_VALUES_TOO_LONG = "Column values are too long."
    COLUMN_VALUES_TOO_SHORT = "Column values are too short."
    ROOT_MISMATCH = "Root mismatch."


class MerkleVerificationFailed(Exception):
    """Raised when a decommitment does not verify; `error` tells why."""

    def __init__(self, error: MerkleVerificationError) -> None:
        super().__init__(error.value)
        self.error = error


def _read_child(prev_hashes: deque, index: int, hash_witness: deque) -> Any:
    if prev_hashes and prev_hashes[0][0] == index:
        return prev_hashes.popleft()[1]
    if not hash_witness:
        raise MerkleVerificationFailed(MerkleVerificationError.WITNESS_TOO_SHORT)
    return hash_witness.popleft()


@dataclass
class MerkleVerifier:
    """Verifies openings of columns with the given log sizes against `root`."""

    root: Any
    column_log_sizes: list[int]
    hasher: Any = Blake2sMerkleHasher

    def verify(
        self,
        queries_per_log_size: Mapping[int, Sequence[int]],
        queried_values: Sequence[Sequence[int]],
        decommitment: MerkleDecommitment,
    ) -> None:
        """Check the queried values of every column against the root.

        Raises MerkleVerificationFailed if the witness or the column values are
        too long or too short, or if the recomputed root differs.
        """
        max_log_size = max(self.column_log_sizes, default=0)

        queried_values_by_layer = deque(
            sorted(
                zip(self.column_log_sizes, (deque(v) for v in queried_values)),
                key=lambda pair: pair[0],
                reverse=True,
            )
        )
        hash_witness = deque(decommitment.hash_witness)
        column_witness = deque(decommitment.column_witness)

        last_layer_hashes: Optional[list[tuple[int, Any]]] = None
        for layer_log_size in range(max_log_size, -1, -1):
            layer_queried_values = [
                column
                for _, column in _take_while(
                    queried_values_by_layer, lambda pair: pair[0] == layer_log_size
                )
            ]
            n_columns_in_layer = len(layer_queried_values)

            layer_total_queries: list[tuple[int, Any]] = []

            prev_layer_queries = deque(q for q, _ in last_layer_hashes or ())
            prev_layer_hashes = (
                deque(last_layer_hashes) if last_layer_hashes is not None else None
            )
            layer_column_queries = deque(queries_per_log_size.get(layer_log_size, ()))

            while (
                node_index := _next_decommitment_node(
                    prev_layer_queries, layer_column_queries
                )
            ) is not None:
                _take_while(prev_layer_queries, lambda q: q // 2 == node_index)

                node_hashes = None
                if prev_layer_hashes is not None:
                    left = _read_child(prev_layer_hashes, 2 * node_index, hash_witness)
                    right = _read_child(prev_layer_hashes, 2 * node_index + 1, hash_witness)
                    node_hashes = (left, right)

                if layer_column_queries and layer_column_queries[0] == node_index:
                    layer_column_queries.popleft()
                    node_values = []
                    for column in layer_queried_values:
                        if not column:
                            raise MerkleVerificationFailed(
                                MerkleVerificationError.COLUMN_VALUES_TOO_SHORT
                            )
                        node_values.append(column.popleft())
                else:
                    n_available = min(n_columns_in_layer, len(column_witness))
                    node_values = [column_witness.popleft() for _ in range(n_available)]
                if len(node_values) != n_columns_in_layer:
                    raise MerkleVerificationFailed(MerkleVerificationError.WITNESS_TOO_SHORT)

                layer_total_queries.append(
                    (node_index, self.hasher.hash_node(node_hashes, node_values))
                )

            if any(layer_queried_values):
                raise MerkleVerificationFailed(
                    MerkleVerificationError.COLUMN_VALUES_TOO_LONG
                )
            last_layer_hashes = layer_total_queries

        if hash_witness or column_witness:
            raise MerkleVerificationFailed(MerkleVerificationError.WITNESS_TOO_LONG)

        if last_layer_hashes is None or len(last_layer_hashes) != 1:
            raise ValueError("no queries reach the root of the tree")
        (_, computed_root), = last_layer_hashes
        if computed_root != self.root:
            raise MerkleVerificationFailed(MerkleVerificationError.ROOT_MISMATCH)