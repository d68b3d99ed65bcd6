"""Merkle node hashing built on the BLAKE2s compression function."""

from __future__ import annotations

import struct
from typing import Any, Optional, Protocol, Sequence

from .blake2_hash import Blake2sHash
from .blake2s_ref import compress

__all__ = ["MerkleHasher", "Blake2sMerkleHasher", "commit_on_layer"]

_BLOCK_WORDS = 16
_WORD_LIMIT = 1 << 32


class MerkleHasher(Protocol):
    """Hashes one Merkle node from optional child hashes and column values.

    A node hash covers ``[left_child, right_child], column0, column1, ...``,
    where the children are absent on the largest layer.
    """

    @staticmethod
    def hash_node(
        children_hashes: Optional[tuple[Any, Any]], column_values: Sequence[int]
    ) -> Any:
        ...


class Blake2sMerkleHasher:
    """Merkle hasher that chains raw BLAKE2s compressions from a zero state."""

    @staticmethod
    def hash_node(
        children_hashes: Optional[tuple[Blake2sHash, Blake2sHash]],
        column_values: Sequence[int],
    ) -> Blake2sHash:
        """Hash a node from its children (if any) and its column values.

        Column values are 32-bit words; they are zero padded to whole
        16-word blocks. Raises ValueError for a value outside that range.
        """
        state = [0] * 8
        if children_hashes is not None:
            left, right = children_hashes
            block = struct.unpack("<16I", bytes(left) + bytes(right))
            state = compress(state, block, 0, 0, 0, 0)

        values = list(column_values)
        for value in values:
            if not 0 <= value < _WORD_LIMIT:
                raise ValueError(f"column value {value} does not fit in 32 bits")
        values.extend([0] * (-len(values) % _BLOCK_WORDS))

        for start in range(0, len(values), _BLOCK_WORDS):
            state = compress(state, values[start : start + _BLOCK_WORDS], 0, 0, 0, 0)
        return Blake2sHash(struct.pack("<8I", *state))


def commit_on_layer(
    hasher: Any,
    log_size: int,
    prev_layer: Optional[Sequence[Any]],
    columns: Sequence[Sequence[int]],
) -> list[Any]:
    """Compute the 2**log_size node hashes of one Merkle layer.

    `prev_layer` is the larger layer below (twice as many nodes), or None for
    the largest layer. Every column holds one value per node of this layer.
    """
    return [
        hasher.hash_node(
            None if prev_layer is None else (prev_layer[2 * i], prev_layer[2 * i + 1]),
            [column[i] for column in columns],
        )
        for i in range(1 << log_size)
    ]