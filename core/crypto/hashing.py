"""
Module 01 - Hashing Utilities
Content-addressing digests for Merkle tree labels.

This module provides:
- SHA3-256 hashing for raw bytes
- Hex labels (lowercase, no prefix) used as node addresses
- Branch label computation from two child labels

Determinism Notes:
- Labels are the lowercase hex encoding of a SHA3-256 digest
- Branch labels hash the ASCII text of the two child labels, left first
- No salts, no keys: a label identifies content, it does not authenticate it
"""
from __future__ import annotations

import hashlib
import re
from typing import Any


# Width of a label in hex characters (32-byte digest)
LABEL_LENGTH: int = 64

_LABEL_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def sha3_256(data: bytes) -> bytes:
    """
    Compute the SHA3-256 digest of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest
    """
    return hashlib.sha3_256(data).digest()


def hash_bytes(data: bytes) -> str:
    """
    Compute the label of a byte string.

    Args:
        data: Raw bytes to hash

    Returns:
        64-character lowercase hex label

    Example:
        >>> hash_bytes(b"Some random data")
        '5b054cb1c47ebc3e0bd156e474a36ab2068807eb14bbe609639fc1f9bf53261a'
    """
    return hashlib.sha3_256(data).hexdigest()


def hash_labels(left: str, right: str) -> str:
    """
    Compute a branch label from its two child labels.

    The child labels are concatenated as hex text (left before right) and
    the ASCII bytes of that text are hashed:
    branch = sha3_256((left + right).encode("ascii"))

    Args:
        left: Label of the left child
        right: Label of the right child

    Returns:
        64-character lowercase hex label

    Raises:
        UnicodeEncodeError: If either label contains non-ASCII characters
    """
    return hash_bytes((left + right).encode("ascii"))


def is_label(value: Any) -> bool:
    """Return True if value is a well-formed label (64 lowercase hex chars)."""
    return isinstance(value, str) and _LABEL_PATTERN.match(value) is not None


def to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string without prefix."""
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hex string to bytes.

    An optional 0x prefix is accepted.

    Raises:
        ValueError: If the string has odd length or invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith("0x") else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "LABEL_LENGTH",
    "sha3_256",
    "hash_bytes",
    "hash_labels",
    "is_label",
    "to_hex",
    "from_hex",
]
