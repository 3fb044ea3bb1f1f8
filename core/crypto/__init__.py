"""
Core cryptographic utilities.

Module 01 provides the hashing primitives behind every Merkle label.
"""
from .hashing import (
    LABEL_LENGTH,
    sha3_256,
    hash_bytes,
    hash_labels,
    is_label,
    to_hex,
    from_hex,
)

__all__ = [
    "LABEL_LENGTH",
    "sha3_256",
    "hash_bytes",
    "hash_labels",
    "is_label",
    "to_hex",
    "from_hex",
]
