"""Query positions over a bit reversed circle domain."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

__all__ = [
    "UPPER_BOUND_QUERY_BYTES",
    "Queries",
    "SparseSubCircleDomain",
    "SubCircleDomain",
]

UPPER_BOUND_QUERY_BYTES = 4


def _dedup(items: Iterable):
    return [key for key, _ in itertools.groupby(items)]


@dataclass(frozen=True, order=True)
class SubCircleDomain:
    """A sub domain of a larger circle domain, given by its coset index and log size."""

    coset_index: int
    log_size: int

    def to_decommitment_positions(self) -> list[int]:
        """Positions in the larger domain covered by this sub domain."""
        return list(
            range(self.coset_index << self.log_size, (self.coset_index + 1) << self.log_size)
        )


@dataclass(frozen=True)
class SparseSubCircleDomain:
    """An ordered collection of sub domains of one larger domain."""

    domains: tuple[SubCircleDomain, ...]
    large_domain_log_size: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "domains", tuple(self.domains))

    def flatten(self) -> list[int]:
        """All decommitment positions of all sub domains, in order."""
        return [p for domain in self.domains for p in domain.to_decommitment_positions()]

    def __iter__(self) -> Iterator[SubCircleDomain]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)

    def __getitem__(self, index):
        return self.domains[index]


@dataclass(frozen=True)
class Queries:
    """A sorted set of query positions over a domain of size 2**log_domain_size."""

    positions: tuple[int, ...]
    log_domain_size: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", tuple(self.positions))

    @classmethod
    def generate(
        cls,
        draw_random_bytes: Callable[[], bytes],
        log_domain_size: int,
        n_queries: int,
    ) -> "Queries":
        """Draw `n_queries` uniform queries in [0, 2**log_domain_size).

        Each call of `draw_random_bytes` yields bytes that are consumed in
        little-endian 4-byte chunks; a trailing partial chunk is ignored.
        Duplicate draws count towards `n_queries` but appear once.
        """
        max_query = (1 << log_domain_size) - 1
        queries: set[int] = set()
        drawn = 0
        while drawn < n_queries:
            random_bytes = bytes(draw_random_bytes())
            n_chunks = len(random_bytes) // UPPER_BOUND_QUERY_BYTES
            for k in range(n_chunks):
                chunk = random_bytes[
                    k * UPPER_BOUND_QUERY_BYTES : (k + 1) * UPPER_BOUND_QUERY_BYTES
                ]
                queries.add(int.from_bytes(chunk, "little") & max_query)
                drawn += 1
                if drawn == n_queries:
                    break
        return cls(tuple(sorted(queries)), log_domain_size)

    @classmethod
    def from_positions(cls, positions: Iterable[int], log_domain_size: int) -> "Queries":
        """Build queries from sorted positions inside the domain.

        Raises ValueError if positions are unsorted or out of range.
        """
        positions = tuple(positions)
        if any(a > b for a, b in zip(positions, positions[1:])):
            raise ValueError("positions are not sorted")
        limit = 1 << log_domain_size
        if any(p >= limit for p in positions):
            raise ValueError(f"positions must be below {limit}")
        return cls(positions, log_domain_size)

    def fold(self, n_folds: int) -> "Queries":
        """Queries of the domain folded `n_folds` times."""
        if n_folds > self.log_domain_size:
            raise ValueError(
                f"cannot fold {n_folds} times a domain of log size {self.log_domain_size}"
            )
        return Queries(
            tuple(_dedup(q >> n_folds for q in self.positions)),
            self.log_domain_size - n_folds,
        )

    def opening_positions(self, fri_step_size: int) -> SparseSubCircleDomain:
        """Sub domains of size 2**fri_step_size that contain the queries."""
        if fri_step_size <= 0:
            raise ValueError("fri_step_size must be positive")
        return SparseSubCircleDomain(
            tuple(
                _dedup(
                    SubCircleDomain(q >> fri_step_size, fri_step_size)
                    for q in self.positions
                )
            ),
            self.log_domain_size,
        )

    def __iter__(self) -> Iterator[int]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __getitem__(self, index):
        return self.positions[index]