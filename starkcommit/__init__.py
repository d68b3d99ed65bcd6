"""BLAKE2s hashing, Merkle vector commitments, query sampling and proof of work for STARK provers."""

__version__ = "0.1.0"