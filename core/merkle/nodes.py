"""
Module 02 - Merkle Node Model
Leaf and branch nodes stored in a single index-addressed arena.

Every node of a tree lives in one ordered store. Branches refer to their
children by arena index, and a separate parent table records the upward
link of each node. A parent is assigned exactly once, right after the
branch that owns the child is created; the root is the only node left
without one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from core.crypto.hashing import from_hex
from core.schemas.errors import SchemaValidationException, TreeStructureException


# Textual encodings accepted for items given as strings
ITEM_ENCODINGS: tuple[str, ...] = ("utf-8", "hex")


@dataclass(frozen=True)
class Leaf:
    """
    A tree node wrapping one input item.

    Attributes:
        label: Hash of the item bytes
        data: The item bytes
    """
    label: str
    data: bytes

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True)
class Branch:
    """
    A tree node combining exactly two children.

    Attributes:
        label: Hash of left.label followed by right.label
        left: Arena index of the left child
        right: Arena index of the right child
    """
    label: str
    left: int
    right: int

    @property
    def is_leaf(self) -> bool:
        return False

    def other_child(self, index: int) -> int:
        """Return the index of the sibling of child ``index``."""
        if index == self.left:
            return self.right
        if index == self.right:
            return self.left
        raise TreeStructureException(
            f"Node {index} is not a child of branch {self.label[:16]}",
            node_index=index,
        )


Node = Union[Leaf, Branch]


class NodeArena:
    """
    Append-only node store with a parent table.

    Mutable only while a tree is being built; ``freeze`` turns both
    tables into tuples and rejects further writes.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._parent_of: list[Optional[int]] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, node: Node) -> int:
        """Store a node and return its index."""
        self._check_writable()
        if isinstance(node, Branch):
            for child in (node.left, node.right):
                if not 0 <= child < len(self._nodes):
                    raise TreeStructureException(
                        f"Branch refers to unknown child index {child}",
                        node_index=child,
                    )
            if node.left == node.right:
                raise TreeStructureException(
                    "Branch must have two distinct children",
                    node_index=node.left,
                )
        self._nodes.append(node)
        self._parent_of.append(None)
        return len(self._nodes) - 1

    def set_parent(self, child: int, parent: int) -> None:
        """Record the upward link of ``child``. Allowed once per node."""
        self._check_writable()
        if self._parent_of[child] is not None:
            raise TreeStructureException(
                f"Node {child} already has parent {self._parent_of[child]}",
                node_index=child,
            )
        self._parent_of[child] = parent

    def freeze(self) -> tuple[tuple[Node, ...], tuple[Optional[int], ...]]:
        """Stop accepting writes and return the node and parent tables."""
        self._frozen = True
        return tuple(self._nodes), tuple(self._parent_of)

    def _check_writable(self) -> None:
        if self._frozen:
            raise TreeStructureException("Node arena is frozen")


def item_bytes(item: object) -> bytes:
    """
    Normalize a data item to immutable bytes.

    Raises:
        TypeError: If the item is not bytes-like
    """
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    raise TypeError(
        f"Merkle items must be bytes-like, got {type(item).__name__}"
    )


def decode_item(text: str, encoding: str = "utf-8") -> bytes:
    """
    Turn a textual item (CLI argument, JSON field) into item bytes.

    Args:
        text: The item as text
        encoding: "utf-8" for the text's UTF-8 bytes, "hex" for hex digits
            (an optional 0x prefix is accepted)

    Raises:
        SchemaValidationException: On an unknown encoding, invalid hex or
            text that cannot be UTF-8 encoded (lone surrogates)
    """
    if encoding == "utf-8":
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SchemaValidationException(
                f"Item is not valid UTF-8 text: {e.reason}",
                details={"item": repr(text[:80])},
            ) from e
    if encoding == "hex":
        try:
            return from_hex(text)
        except ValueError as e:
            raise SchemaValidationException(
                f"Item is not valid hex: {e}", details={"item": text[:80]}
            ) from e
    raise SchemaValidationException(
        f"Unknown item encoding {encoding!r}",
        field_path="encoding",
        details={"allowed": list(ITEM_ENCODINGS)},
    )


def child_indices(nodes: Sequence[Node], index: int) -> tuple[int, ...]:
    """Indices of the children of node ``index`` (empty for a leaf)."""
    node = nodes[index]
    if isinstance(node, Branch):
        return (node.left, node.right)
    return ()


__all__ = [
    "Leaf",
    "Branch",
    "Node",
    "NodeArena",
    "ITEM_ENCODINGS",
    "item_bytes",
    "decode_item",
    "child_indices",
]
