"""Proof of work by grinding a nonce over a BLAKE2s seed."""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from .blake2_hash import Blake2sHash, Blake2sHasher

__all__ = [
    "ProofOfWork",
    "ProofOfWorkProof",
    "ProofOfWorkVerificationError",
    "check_leading_zeros",
]


class ProofOfWorkVerificationError(Exception):
    """Raised when a proof of work nonce does not meet the difficulty."""

    def __init__(self, message: str = "Proof of work verification failed.") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ProofOfWorkProof:
    """A nonce claimed to meet the difficulty."""

    nonce: int


def check_leading_zeros(data: bytes, bound_bits: int) -> bool:
    """Whether little-endian `data` has at least `bound_bits` leading zero bits."""
    n_bits = 0
    for byte in reversed(bytes(data)):
        if byte == 0:
            n_bits += 8
        else:
            n_bits += 8 - byte.bit_length()
            break
    return n_bits >= bound_bits


@dataclass(frozen=True)
class ProofOfWork:
    """Proof of work of difficulty `n_bits` leading zero bits."""

    n_bits: int

    def prove(self, seed: bytes | Blake2sHash) -> ProofOfWorkProof:
        """Find the smallest nonce meeting the difficulty for `seed`."""
        seed_bytes = bytes(seed)
        for nonce in itertools.count():
            if check_leading_zeros(bytes(self._hash_with_nonce(seed_bytes, nonce)), self.n_bits):
                return ProofOfWorkProof(nonce)
        raise AssertionError("unreachable")

    def verify(self, seed: bytes | Blake2sHash, proof: ProofOfWorkProof) -> None:
        """Check `proof` against `seed`; raise ProofOfWorkVerificationError if it fails."""
        digest = self._hash_with_nonce(bytes(seed), proof.nonce)
        if not check_leading_zeros(bytes(digest), self.n_bits):
            raise ProofOfWorkVerificationError()

    @staticmethod
    def _hash_with_nonce(seed: bytes, nonce: int) -> Blake2sHash:
        return Blake2sHasher.hash(seed + nonce.to_bytes(8, "little"))