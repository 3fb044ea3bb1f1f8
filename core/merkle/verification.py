"""
Module 02 - Merkle Proof Verification
Tree-independent inclusion proofs and their verification.

A proof is an ordered, bottom-up list of (sibling_label, side) entries.
Verification replays the hash chain from the item to the root using only
the item, the proof and a trusted root label; no tree or registry is
needed, which is what makes proofs portable.

Verification Rules:
1. computed = hash_bytes(item)
2. For each entry, bottom-up:
   - side LEFT:  computed = hash_labels(sibling, computed)
   - side RIGHT: computed = hash_labels(computed, sibling)
3. Valid iff computed == root label

Malformed input never raises here; it simply fails verification.

Wire form: [[hex_label, side_bit], ...] with side_bit 0 = LEFT, 1 = RIGHT.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, NamedTuple, Optional

from core.crypto.hashing import hash_bytes, hash_labels, is_label
from core.merkle.nodes import item_bytes
from core.schemas.errors import SchemaValidationException


logger = logging.getLogger(__name__)


class Side(IntEnum):
    """Position of the sibling label in the concatenation."""
    LEFT = 0
    RIGHT = 1


class ProofEntry(NamedTuple):
    """One step of an authentication path."""
    sibling_label: str
    side: Side


def coerce_entry(raw: Any) -> ProofEntry:
    """
    Parse one proof entry from any of its accepted forms.

    Accepted forms: ProofEntry, a 2-item list/tuple (label, side), or a
    mapping with ``sibling_label`` and ``side`` keys. The side may be a
    Side member or the integer 0/1.

    Raises:
        ValueError: If the entry is malformed
    """
    if isinstance(raw, dict):
        if set(raw) != {"sibling_label", "side"}:
            raise ValueError(f"Proof entry keys must be sibling_label/side, got {sorted(raw)}")
        label, side = raw["sibling_label"], raw["side"]
    elif isinstance(raw, (tuple, list)):
        if len(raw) != 2:
            raise ValueError(f"Proof entry must have 2 elements, got {len(raw)}")
        label, side = raw
    else:
        raise ValueError(f"Unsupported proof entry type {type(raw).__name__}")

    if not is_label(label):
        raise ValueError(f"Proof entry label is not a 64-char hex label: {label!r:.80}")
    # bool is an int subclass; True/False are not side markers
    if isinstance(side, bool) or not isinstance(side, int) or side not in (0, 1):
        raise ValueError(f"Proof entry side must be 0 or 1, got {side!r}")

    return ProofEntry(label, Side(side))


def entries_to_wire(entries: Iterable[ProofEntry]) -> list[list[Any]]:
    """Serialize entries to [[hex_label, side_bit], ...]."""
    return [[entry.sibling_label, int(entry.side)] for entry in entries]


def entries_from_wire(pairs: Any) -> list[ProofEntry]:
    """
    Parse the wire form of a proof.

    Raises:
        SchemaValidationException: If the list or any entry is malformed
    """
    if not isinstance(pairs, (list, tuple)):
        raise SchemaValidationException(
            f"Proof entries must be a list, got {type(pairs).__name__}",
            field_path="entries",
        )
    entries: list[ProofEntry] = []
    for i, raw in enumerate(pairs):
        try:
            entries.append(coerce_entry(raw))
        except ValueError as e:
            raise SchemaValidationException(
                str(e), field_path=f"entries[{i}]"
            ) from e
    return entries


@dataclass(frozen=True)
class MerkleProof:
    """
    A self-describing inclusion proof.

    Attributes:
        leaf_label: Label of the proven item
        entries: Sibling labels with sides, bottom-up
        root_label: Root label of the tree the proof was generated from
    """
    leaf_label: str
    entries: tuple[ProofEntry, ...]
    root_label: str

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if not is_label(self.leaf_label):
            raise ValueError(f"Invalid leaf label: {self.leaf_label!r:.80}")
        if not is_label(self.root_label):
            raise ValueError(f"Invalid root label: {self.root_label!r:.80}")
        object.__setattr__(
            self, "entries", tuple(coerce_entry(e) for e in self.entries)
        )

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "leaf_label": self.leaf_label,
            "root_label": self.root_label,
            "entries": entries_to_wire(self.entries),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MerkleProof":
        """
        Build a proof from its dict form.

        Raises:
            SchemaValidationException: If the data is malformed
        """
        if not isinstance(data, dict):
            raise SchemaValidationException(
                f"Proof must be an object, got {type(data).__name__}"
            )
        missing = {"leaf_label", "root_label", "entries"} - set(data)
        if missing:
            raise SchemaValidationException(
                f"Proof is missing fields: {', '.join(sorted(missing))}",
                details={"missing": sorted(missing)},
            )
        entries = entries_from_wire(data["entries"])
        try:
            return cls(
                leaf_label=data["leaf_label"],
                entries=tuple(entries),
                root_label=data["root_label"],
            )
        except ValueError as e:
            raise SchemaValidationException(str(e)) from e


def compute_root(item: Any, proof: Iterable[Any]) -> str:
    """
    Replay a proof from an item and return the resulting root label.

    Raises:
        TypeError: If the item is not bytes-like or the proof not iterable
        ValueError: If a proof entry is malformed
    """
    computed = hash_bytes(item_bytes(item))
    for raw in proof:
        entry = coerce_entry(raw)
        if entry.side is Side.LEFT:
            computed = hash_labels(entry.sibling_label, computed)
        else:
            computed = hash_labels(computed, entry.sibling_label)
    return computed


def verify(item: Any, proof: Any, root_label: Any) -> bool:
    """
    Check that ``proof`` establishes membership of ``item`` under ``root_label``.

    Args:
        item: The item bytes
        proof: Entries in any form accepted by coerce_entry, or a MerkleProof
        root_label: Trusted root label obtained out-of-band

    Returns:
        True if the recomputed root equals root_label, False otherwise
        (including for any malformed input)
    """
    if isinstance(proof, MerkleProof):
        proof = proof.entries
    try:
        computed = compute_root(item, proof)
    except (TypeError, ValueError) as e:
        logger.debug(f"Rejecting malformed proof: {e}")
        return False

    if computed != root_label:
        logger.debug(f"Proof replay gave {computed}, expected {root_label!r:.80}")
        return False
    return True


def verify_merkle_proof(
    item: Any,
    proof: MerkleProof,
    expected_root: Optional[str] = None,
) -> bool:
    """
    Verify a MerkleProof for ``item``.

    Also checks that the proof's leaf label is the item's label and, when
    ``expected_root`` is given, that the proof was issued for that root.
    """
    if not isinstance(proof, MerkleProof):
        return False
    try:
        if hash_bytes(item_bytes(item)) != proof.leaf_label:
            return False
    except TypeError as e:
        logger.debug(f"Rejecting proof for non-bytes item: {e}")
        return False
    if expected_root is not None and expected_root != proof.root_label:
        return False
    return verify(item, proof.entries, proof.root_label)


__all__ = [
    "Side",
    "ProofEntry",
    "MerkleProof",
    "coerce_entry",
    "entries_to_wire",
    "entries_from_wire",
    "compute_root",
    "verify",
    "verify_merkle_proof",
]
