import pytest

from starkcommit.blake2_hash import Blake2sHash, Blake2sHasher
from starkcommit.blake2_merkle import Blake2sMerkleHasher, commit_on_layer


def test_empty_leaf_hashes_to_zero_state():
    assert Blake2sMerkleHasher.hash_node(None, []) == Blake2sHash(bytes(32))


def test_values_are_zero_padded_to_block():
    short = Blake2sMerkleHasher.hash_node(None, [1])
    padded = Blake2sMerkleHasher.hash_node(None, [1] + [0] * 15)
    assert short == padded
    assert len(bytes(short)) == 32


def test_extra_block_changes_hash():
    hashes = {
        Blake2sMerkleHasher.hash_node(None, [7] * 16),
        Blake2sMerkleHasher.hash_node(None, [7] * 16 + [0] * 16),
        Blake2sMerkleHasher.hash_node(None, [7] * 17),
    }
    assert len(hashes) == 3


def test_children_order_matters():
    left = Blake2sHasher.hash(b"left")
    right = Blake2sHasher.hash(b"right")
    hashes = {
        Blake2sMerkleHasher.hash_node((left, right), []),
        Blake2sMerkleHasher.hash_node((right, left), []),
        Blake2sMerkleHasher.hash_node(None, []),
    }
    assert len(hashes) == 3


def test_hash_is_deterministic():
    left = Blake2sHasher.hash(b"a")
    right = Blake2sHasher.hash(b"b")
    first = Blake2sMerkleHasher.hash_node((left, right), [3, 4, 5])
    second = Blake2sMerkleHasher.hash_node((left, right), [3, 4, 5])
    assert first == second


def test_value_out_of_range_rejected():
    with pytest.raises(ValueError):
        Blake2sMerkleHasher.hash_node(None, [1 << 32])
    with pytest.raises(ValueError):
        Blake2sMerkleHasher.hash_node(None, [-1])


def test_commit_on_leaf_layer():
    columns = [[1, 2, 3, 4], [5, 6, 7, 8]]
    layer = commit_on_layer(Blake2sMerkleHasher, 2, None, columns)
    assert len(layer) == 4
    assert layer[2] == Blake2sMerkleHasher.hash_node(None, [3, 7])


def test_commit_on_inner_layer_uses_children():
    leaves = commit_on_layer(Blake2sMerkleHasher, 1, None, [[10, 11]])
    root_layer = commit_on_layer(Blake2sMerkleHasher, 0, leaves, [[5]])
    assert root_layer == [Blake2sMerkleHasher.hash_node((leaves[0], leaves[1]), [5])]


def test_commit_on_layer_without_columns():
    leaves = commit_on_layer(Blake2sMerkleHasher, 2, None, [[1, 2, 3, 4]])
    parents = commit_on_layer(Blake2sMerkleHasher, 1, leaves, [])
    assert parents == [
        Blake2sMerkleHasher.hash_node((leaves[0], leaves[1]), []),
        Blake2sMerkleHasher.hash_node((leaves[2], leaves[3]), []),
    ]