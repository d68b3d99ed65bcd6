# starkcommit

Building blocks for the commitment layer of a STARK prover, in pure Python
with no third-party dependencies.

## What is in the package

- `starkcommit.blake2_hash`
  - `Blake2sHash`: an immutable 32-byte digest. `hex()`, `str()` and
    `repr()` give lower-case hexadecimal, and `bytes()` gives the raw bytes.
    Any other length raises `ValueError`.
  - `Blake2sHasher`: an incremental BLAKE2s-256 hasher with `update`,
    `finalize`, `finalize_reset` and `reset`, and the class methods `hash`
    and `concat_and_hash`.
- `starkcommit.blake2s_ref.compress`: the raw BLAKE2s compression function.
  It takes an 8-word state and a 16-word block and returns the new state.
- `starkcommit.blake2_merkle`
  - `Blake2sMerkleHasher.hash_node(children_hashes, column_values)`: hashes
    one Merkle node. The children are hashed first, as one compression block,
    when present. The column values follow, as 32-bit words zero-padded to
    whole 16-word blocks. The result is chained from a zero state.
  - `commit_on_layer(hasher, log_size, prev_layer, columns)`: computes the
    hashes of one tree layer.
- `starkcommit.merkle_prover`
  - `MerkleProver.commit(columns, hasher=Blake2sMerkleHasher)`: commits to
    columns whose lengths are powers of two. The lengths may differ, and
    shorter columns are hashed into the higher layers.
  - `MerkleProver.decommit(queries_per_log_size, columns)`: returns the
    queried values of each column and a `MerkleDecommitment`, which holds a
    `hash_witness` and a `column_witness`.
  - `MerkleProver.root()` returns the root hash.
- `starkcommit.merkle_verifier`
  - `MerkleVerifier(root, column_log_sizes, hasher=Blake2sMerkleHasher)`.
  - `MerkleVerifier.verify(queries_per_log_size, queried_values, decommitment)`
    raises `MerkleVerificationFailed` when the opening does not check out.
    The exception's `error` attribute is a `MerkleVerificationError` member:
    `WITNESS_TOO_SHORT`, `WITNESS_TOO_LONG`, `COLUMN_VALUES_TOO_LONG`,
    `COLUMN_VALUES_TOO_SHORT` or `ROOT_MISMATCH`.
- `starkcommit.queries`
  - `Queries.generate(draw_random_bytes, log_domain_size, n_queries)`:
    samples query positions. `draw_random_bytes` is any callable returning
    bytes, which are read as little-endian 4-byte chunks.
  - `Queries.from_positions`, `Queries.fold` and `Queries.opening_positions`.
  - `SparseSubCircleDomain.flatten` and
    `SubCircleDomain.to_decommitment_positions`.
- `starkcommit.proof_of_work`
  - `ProofOfWork(n_bits)`: `prove(seed)` grinds for the smallest nonce.
    `verify(seed, proof)` raises `ProofOfWorkVerificationError` if the
    proof fails.
  - `ProofOfWorkProof` and `check_leading_zeros`.
- `starkcommit.tree_vec.TreeVec`: a `list` subclass holding one entry per
  commitment tree. It has `map`, `zip`, `zip_eq`, `map_cols`, `zip_cols`,
  `flatten` and `flatten_cols`.
- `starkcommit.utils`: `bit_reverse_index`, `bit_reverse` (in place),
  `previous_bit_reversed_circle_domain_index`,
  `offset_bit_reversed_circle_domain_index`,
  `circle_domain_order_to_coset_order`, `coset_order_to_circle_domain_order`,
  `fold`, `repeat_value`, `generate_powers` and
  `shifted_secure_combination`. The last two work with any numeric type;
  you pass them its `one` or `zero`.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Example: committing to columns and verifying an opening

```python
from starkcommit.blake2_merkle import Blake2sMerkleHasher
from starkcommit.merkle_prover import MerkleProver
from starkcommit.merkle_verifier import MerkleVerifier

columns = [list(range(16)), list(range(100, 108))]
prover = MerkleProver.commit(columns, Blake2sMerkleHasher)

queries = {4: [1, 9], 3: [2]}
values, decommitment = prover.decommit(queries, columns)

verifier = MerkleVerifier(prover.root(), [4, 3])
verifier.verify(queries, values, decommitment)
```

If the decommitment or the queried values have been tampered with, `verify`
raises `MerkleVerificationFailed`.

## Example: proof of work

```python
from starkcommit.proof_of_work import ProofOfWork

seed = bytes(32)
pow_ = ProofOfWork(n_bits=12)
proof = pow_.prove(seed)
pow_.verify(seed, proof)
```

## What the package does not do

The package has no finite-field arithmetic, circle domains or polynomials.
It has no Fiat-Shamir channel, no FRI, and no full polynomial commitment
scheme or STARK prover and verifier. The caller supplies the randomness to
`Queries.generate` and the seed to `ProofOfWork`. The caller also folds the
resulting nonce back into its own transcript. It has no command-line tool.

## Running the tests

```
pytest
```