"""BLAKE2s digests and an incremental hasher producing them."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import ClassVar

__all__ = ["Blake2sHash", "Blake2sHasher"]

_OUTPUT_SIZE = 32


@dataclass(frozen=True, repr=False)
class Blake2sHash:
    """A 32-byte BLAKE2s digest."""

    NAME: ClassVar[str] = "BLAKE2"

    data: bytes = bytes(_OUTPUT_SIZE)

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != _OUTPUT_SIZE:
            raise ValueError(
                f"a BLAKE2s hash is {_OUTPUT_SIZE} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "data", raw)

    def hex(self) -> str:
        """Return the digest as lower-case hexadecimal."""
        return self.data.hex()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return self.hex()


class Blake2sHasher:
    """Incremental BLAKE2s-256 hasher."""

    BLOCK_SIZE: ClassVar[int] = 64
    OUTPUT_SIZE: ClassVar[int] = _OUTPUT_SIZE

    def __init__(self) -> None:
        self._state = hashlib.blake2s(digest_size=_OUTPUT_SIZE)

    def reset(self) -> None:
        """Discard everything absorbed so far."""
        self._state = hashlib.blake2s(digest_size=_OUTPUT_SIZE)

    def update(self, data: bytes) -> None:
        """Absorb more input."""
        self._state.update(bytes(data))

    def finalize(self) -> Blake2sHash:
        """Return the digest of everything absorbed."""
        return Blake2sHash(self._state.digest())

    def finalize_reset(self) -> Blake2sHash:
        """Return the digest and start over with an empty state."""
        digest = self.finalize()
        self.reset()
        return digest

    @classmethod
    def hash(cls, data: bytes) -> Blake2sHash:
        """Hash `data` in one call."""
        hasher = cls()
        hasher.update(data)
        return hasher.finalize()

    @classmethod
    def concat_and_hash(cls, v1: Blake2sHash, v2: Blake2sHash) -> Blake2sHash:
        """Hash the concatenation of two digests."""
        hasher = cls()
        hasher.update(bytes(v1))
        hasher.update(bytes(v2))
        return hasher.finalize()