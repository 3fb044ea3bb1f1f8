"""
Module 02 - Merkle Proofs Convenience Wrappers
Thin wrappers around the tree builder and verifier for one-shot use.

This module provides class-based interfaces:
- MerkleProver: Build a tree and a proof in one call
- MerkleVerifier: Verify proofs without a tree

Structured objects (feed records, dicts, Pydantic models) are turned into
items with canonical_item(), so provers and verifiers agree on the bytes.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from core.merkle.merkle_tree import build_merkle_tree
from core.merkle.verification import MerkleProof, verify, verify_merkle_proof
from core.schemas.canonical import canonical_item
from core.schemas.errors import CanonicalizationException


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], b"b")
        >>> MerkleVerifier.verify(b"b", proof)
        True
    """

    @staticmethod
    def prove(items: Sequence[bytes], item: bytes) -> MerkleProof:
        """
        Build a tree over ``items`` and prove ``item``.

        Raises:
            EmptyInputException: If items is empty
            LabelNotFoundException: If item is not among items
        """
        return build_merkle_tree(items).prove(item)

    @staticmethod
    def prove_object(objects: Sequence[Any], obj: Any) -> MerkleProof:
        """Prove a structured object against a tree over canonical objects."""
        items = [canonical_item(o) for o in objects]
        return build_merkle_tree(items).prove(canonical_item(obj))

    @staticmethod
    def compute_root(items: Sequence[bytes]) -> str:
        """Root label of a tree over ``items``."""
        return build_merkle_tree(items).root_label()

    @staticmethod
    def compute_root_from_objects(objects: Sequence[Any]) -> str:
        """Root label of a tree over canonically serialized objects."""
        return build_merkle_tree([canonical_item(o) for o in objects]).root_label()


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(item: bytes, proof: MerkleProof) -> bool:
        """Verify a MerkleProof against its own root label."""
        return verify_merkle_proof(item, proof)

    @staticmethod
    def verify_entries(
        item: bytes,
        entries: Iterable[Any],
        root_label: str,
    ) -> bool:
        """Verify bare proof entries against a trusted root label."""
        return verify(item, entries, root_label)

    @staticmethod
    def verify_object(
        obj: Any,
        entries: Iterable[Any],
        root_label: str,
    ) -> bool:
        """
        Verify a structured object is included under ``root_label``.

        Returns False when the object cannot be canonically serialized.
        """
        try:
            item = canonical_item(obj)
        except CanonicalizationException:
            return False
        return verify(item, entries, root_label)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
