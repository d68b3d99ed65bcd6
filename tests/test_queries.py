import itertools

import pytest

from starkcommit.blake2_hash import Blake2sHasher
from starkcommit.queries import Queries, SparseSubCircleDomain, SubCircleDomain


def _random_source(seed: bytes = bytes(32)):
    counter = itertools.count()

    def draw() -> bytes:
        return bytes(Blake2sHasher.hash(seed + next(counter).to_bytes(8, "little")))

    return draw


def test_generate_queries():
    log_query_size = 31
    n_queries = 100
    queries = Queries.generate(_random_source(), log_query_size, n_queries)
    assert len(queries) == n_queries
    assert all(q < 1 << log_query_size for q in queries)
    assert list(queries) == sorted(queries)


def test_generate_reads_little_endian_chunks_and_dedups():
    chunks = bytes([1, 0, 0, 0, 5, 0, 0, 0, 1, 0, 0, 0, 0xFF, 0xFF, 0xFF, 0xFF])
    queries = Queries.generate(lambda: chunks, 3, 4)
    assert queries.positions == (1, 5, 7)
    assert queries.log_domain_size == 3


def test_generate_ignores_partial_chunk():
    draws = iter([bytes([2, 0, 0, 0, 9, 9]), bytes([3, 0, 0, 0])])
    queries = Queries.generate(lambda: next(draws), 4, 2)
    assert queries.positions == (2, 3)


def test_folded_queries():
    log_domain_size = 7
    log_folded_domain_size = 5
    queries = Queries(tuple(range(1 << log_domain_size)), log_domain_size)
    n_folds = log_domain_size - log_folded_domain_size
    ratio = 1 << n_folds

    folded = queries.fold(n_folds)
    assert folded.log_domain_size == log_folded_domain_size
    assert len(folded) == len(queries) // ratio
    repeated = [q for q in folded for _ in range(ratio)]
    for query, folded_query in zip(queries, repeated):
        assert query >> n_folds == folded_query


def test_fold_too_many_times_raises():
    with pytest.raises(ValueError):
        Queries((0, 1), 1).fold(2)


def test_conjugate_queries():
    draw = _random_source()
    for _ in range(100):
        query = Queries.generate(draw, 7, 1)
        conjugate = query[0] ^ 1
        assert query.opening_positions(1).flatten() == sorted([query[0], conjugate])


def test_decommitment_positions():
    n_queries = 100
    fri_step_size = 3
    queries = Queries.generate(_random_source(), 31, n_queries)
    flat = queries.opening_positions(fri_step_size).flatten()
    assert flat == sorted(flat)
    assert len(flat) == n_queries * (1 << fri_step_size)


def test_dedup_decommitment_positions():
    log_domain_size = 7
    queries = Queries(tuple(range(1 << log_domain_size)), log_domain_size)
    flat = queries.opening_positions(log_domain_size - 2).flatten()
    assert flat == list(queries)


def test_opening_positions_structure():
    queries = Queries.from_positions([1, 2, 9], 4)
    sparse = queries.opening_positions(2)
    assert sparse == SparseSubCircleDomain(
        (SubCircleDomain(0, 2), SubCircleDomain(2, 2)), 4
    )
    assert sparse.large_domain_log_size == 4


def test_opening_positions_requires_positive_step():
    with pytest.raises(ValueError):
        Queries.from_positions([1], 2).opening_positions(0)


def test_sub_circle_domain_positions():
    assert SubCircleDomain(3, 2).to_decommitment_positions() == [12, 13, 14, 15]


def test_from_positions_rejects_unsorted():
    with pytest.raises(ValueError):
        Queries.from_positions([3, 1], 4)


def test_from_positions_rejects_out_of_range():
    with pytest.raises(ValueError):
        Queries.from_positions([1, 16], 4)


def test_from_positions_keeps_positions():
    queries = Queries.from_positions([0, 4, 15], 4)
    assert queries.positions == (0, 4, 15)
    assert queries[1] == 4