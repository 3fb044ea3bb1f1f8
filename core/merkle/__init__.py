"""
Module 02 - Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree / build_merkle_tree: Immutable tree from ordered byte items
- NodeRegistry: Label -> node lookup filled during construction
- ProofEntry / Side / MerkleProof: Authentication paths and their wire form
- verify / verify_merkle_proof: Tree-independent verification

Commitment Rules:
1. Leaf label: sha3_256(item) hex
2. Branch label: sha3_256(left_label + right_label) over the hex text
3. Odd node at any level: promoted unchanged, never duplicated
4. Empty input: EmptyInputException
5. Single item: root = leaf, empty proof

Usage:
    from core.merkle import build_merkle_tree, verify

    tree = build_merkle_tree([b"\\x01", b"\\x02", b"\\x03"])
    root = tree.root_label()

    # Proof for the third item
    entries = tree.make_proof(b"\\x03")

    # Verify with only the item, the proof and the trusted root
    assert verify(b"\\x03", entries, root)
"""
from .nodes import (
    Leaf,
    Branch,
    Node,
    NodeArena,
    ITEM_ENCODINGS,
    item_bytes,
    decode_item,
)

from .registry import NodeRegistry

from .verification import (
    Side,
    ProofEntry,
    MerkleProof,
    coerce_entry,
    entries_to_wire,
    entries_from_wire,
    compute_root,
    verify,
    verify_merkle_proof,
)

from .merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    compute_tree_height,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Node model
    "Leaf",
    "Branch",
    "Node",
    "NodeArena",
    "ITEM_ENCODINGS",
    "item_bytes",
    "decode_item",
    "NodeRegistry",
    # Proofs
    "Side",
    "ProofEntry",
    "MerkleProof",
    "coerce_entry",
    "entries_to_wire",
    "entries_from_wire",
    "compute_root",
    "verify",
    "verify_merkle_proof",
    # Tree
    "MerkleTree",
    "build_merkle_tree",
    "compute_tree_height",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
