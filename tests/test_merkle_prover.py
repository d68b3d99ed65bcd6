import random

import pytest

from starkcommit.blake2_merkle import Blake2sMerkleHasher
from starkcommit.merkle_prover import MerkleDecommitment, MerkleProver


def _random_columns(seed, log_sizes):
    rng = random.Random(seed)
    return [[rng.randrange(1 << 30) for _ in range(1 << s)] for s in log_sizes]


def test_layers_double_in_size():
    columns = _random_columns(1, [3, 2, 3])
    prover = MerkleProver.commit(columns)
    assert [len(layer) for layer in prover.layers] == [1, 2, 4, 8]
    assert prover.root() == prover.layers[0][0]


def test_single_value_root():
    prover = MerkleProver.commit([[42]])
    assert prover.root() == Blake2sMerkleHasher.hash_node(None, [42])


def test_root_links_children():
    prover = MerkleProver.commit([[1, 2]])
    leaves = prover.layers[1]
    assert prover.root() == Blake2sMerkleHasher.hash_node((leaves[0], leaves[1]), [])


def test_commit_is_independent_of_column_order_for_distinct_sizes():
    a = [1, 2, 3, 4]
    b = [9, 8]
    assert MerkleProver.commit([a, b]).root() == MerkleProver.commit([b, a]).root()


def test_commit_rejects_no_columns():
    with pytest.raises(ValueError):
        MerkleProver.commit([])


def test_commit_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        MerkleProver.commit([[1, 2, 3]])


def test_decommit_unsorted_queries_rejected():
    columns = [[1, 2, 3, 4]]
    prover = MerkleProver.commit(columns)
    with pytest.raises(ValueError, match="not sorted"):
        prover.decommit({2: [3, 1]}, columns)
    with pytest.raises(ValueError, match="not sorted"):
        prover.decommit({2: [1, 1]}, columns)


def test_decommit_returns_values_at_queries():
    columns = _random_columns(2, [4, 3, 4, 3])
    prover = MerkleProver.commit(columns)
    queries = {4: [0, 9, 15], 3: [2, 5]}
    values, _ = prover.decommit(queries, columns)
    for column, column_values in zip(columns, values):
        positions = queries[len(column).bit_length() - 1]
        assert column_values == [column[p] for p in positions]


def test_decommit_all_leaves_needs_no_witness():
    columns = [[5, 6]]
    prover = MerkleProver.commit(columns)
    values, decommitment = prover.decommit({1: [0, 1]}, columns)
    assert values == [[5, 6]]
    assert decommitment == MerkleDecommitment([], [])


def test_decommit_witness_contents():
    a = [1, 2, 3, 4]
    b = [9, 8]
    prover = MerkleProver.commit([a, b])
    values, decommitment = prover.decommit({2: [3]}, [a, b])
    assert values == [[4], []]
    assert decommitment.hash_witness == [prover.layers[2][2], prover.layers[1][0]]
    assert decommitment.column_witness == [8]