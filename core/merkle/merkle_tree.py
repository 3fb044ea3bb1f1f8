"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree construction and authentication-path generation.

This module provides:
- Construction of an immutable tree from an ordered sequence of byte items
- A content-addressed registry resolving labels to nodes in O(1)
- Inclusion proofs for any item present in the tree
- Structural inspection (counts, height, leaf depths)

Commitment Rules (Hard Contracts):
1. Leaf label: sha3_256(item) as lowercase hex
2. Branch label: sha3_256((left.label + right.label).encode("ascii"))
3. Leaf order: leaf i is input item i, left to right
4. Odd count at any level: the last node is promoted unchanged to the
   rightmost position of the next level; it is never duplicated
5. Empty input: EmptyInputException, no tree
6. Single item: the leaf is the root and its proof is empty

Structural Notes:
- n items give n leaves and n - 1 branches (2n - 1 nodes)
- Height is ceil(log2(n)); a promoted node keeps its depth, so leaf
  depths can differ by more than one when n is not a power of two
- Leaves occupy arena indices 0..n-1, branches follow level by level
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional, Sequence

from core.crypto.hashing import hash_bytes, hash_labels
from core.merkle.nodes import Branch, Leaf, Node, NodeArena, child_indices, item_bytes
from core.merkle.registry import NodeRegistry
from core.merkle.verification import MerkleProof, ProofEntry, Side
from core.schemas.errors import (
    EmptyInputException,
    LabelNotFoundException,
    SchemaValidationException,
    TreeStructureException,
)


logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Immutable binary Merkle tree over an ordered set of byte items.

    Instances are produced by ``build_merkle_tree`` / ``MerkleTree.from_items``.
    All state is frozen after construction, so concurrent proof requests
    need no locking.

    Example:
        >>> from core.merkle import verify
        >>> tree = MerkleTree.from_items([b"\\x01", b"\\x02", b"\\x03"])
        >>> entries = tree.make_proof(b"\\x03")
        >>> verify(b"\\x03", entries, tree.root_label())
        True
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        parent_of: Sequence[Optional[int]],
        registry: NodeRegistry,
        root_index: int,
        leaf_count: int,
    ) -> None:
        self._nodes = tuple(nodes)
        self._parent_of = tuple(parent_of)
        self._registry = registry
        self._root_index = root_index
        self._leaf_count = leaf_count

    @classmethod
    def from_items(
        cls,
        items: Iterable[Any],
        max_items: Optional[int] = None,
    ) -> "MerkleTree":
        """Alias for build_merkle_tree()."""
        return build_merkle_tree(items, max_items=max_items)

    # ------------------------------------------------------------------
    # Root and lookup
    # ------------------------------------------------------------------

    def root_label(self) -> str:
        """Label of the root node; summarizes the whole tree."""
        return self._nodes[self._root_index].label

    @property
    def root(self) -> Node:
        return self._nodes[self._root_index]

    @property
    def root_index(self) -> int:
        return self._root_index

    @property
    def registry(self) -> NodeRegistry:
        return self._registry

    def node(self, index: int) -> Node:
        return self._nodes[index]

    def parent_of(self, index: int) -> Optional[int]:
        """Arena index of the parent of node ``index`` (None for the root)."""
        return self._parent_of[index]

    def lookup(self, label: str) -> Node:
        """
        Resolve a label to its node.

        Raises:
            LabelNotFoundException: If no node carries this label
        """
        return self._nodes[self._registry.lookup(label)]

    def contains(self, item: Any) -> bool:
        """True if ``item`` is one of the tree's leaves."""
        index = self._registry.get(hash_bytes(item_bytes(item)))
        return index is not None and isinstance(self._nodes[index], Leaf)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def make_proof(self, item: Any) -> list[ProofEntry]:
        """
        Build the authentication path of ``item``.

        Walks parent links from the item's leaf up to the root, recording
        at each level the sibling's label and the side it occupies.

        Args:
            item: Item bytes

        Returns:
            Bottom-up list of ProofEntry; empty for a single-node tree

        Raises:
            LabelNotFoundException: If the item was never included
            TypeError: If the item is not bytes-like
        """
        label = hash_bytes(item_bytes(item))
        index = self._registry.get(label)
        if index is None or not isinstance(self._nodes[index], Leaf):
            raise LabelNotFoundException(
                f"Item with label {label} is not in the tree", label=label
            )

        entries: list[ProofEntry] = []
        current = index
        parent = self._parent_of[current]
        while parent is not None:
            branch = self._nodes[parent]
            if not isinstance(branch, Branch):
                raise TreeStructureException(
                    f"Parent {parent} of node {current} is not a branch",
                    node_index=parent,
                )
            sibling = branch.other_child(current)
            side = Side.RIGHT if sibling == branch.right else Side.LEFT
            entries.append(ProofEntry(self._nodes[sibling].label, side))
            current = parent
            parent = self._parent_of[current]

        if current != self._root_index:
            raise TreeStructureException(
                f"Parent chain of node {index} ends at {current}, not the root",
                node_index=current,
            )

        logger.debug(f"Built proof for {label[:16]} with {len(entries)} entries")
        return entries

    def prove(self, item: Any) -> MerkleProof:
        """Build a self-describing MerkleProof for ``item``."""
        entries = self.make_proof(item)
        return MerkleProof(
            leaf_label=hash_bytes(item_bytes(item)),
            entries=tuple(entries),
            root_label=self.root_label(),
        )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def branch_count(self) -> int:
        return len(self._nodes) - self._leaf_count

    def leaves(self) -> Iterator[Leaf]:
        """Leaves in input order."""
        for index in range(self._leaf_count):
            yield self._nodes[index]

    def depth_of(self, index: int) -> int:
        """Number of parent hops from node ``index`` to the root."""
        depth = 0
        parent = self._parent_of[index]
        while parent is not None:
            depth += 1
            parent = self._parent_of[parent]
        return depth

    def subtree_size(self, index: Optional[int] = None) -> int:
        """Number of nodes under (and including) ``index``; defaults to the root."""
        stack = [self._root_index if index is None else index]
        count = 0
        while stack:
            current = stack.pop()
            count += 1
            stack.extend(child_indices(self._nodes, current))
        return count

    def leaf_depths(self) -> list[int]:
        """Depth of each leaf, in input order."""
        return [self.depth_of(index) for index in range(self._leaf_count)]

    @property
    def height(self) -> int:
        """Depth of the deepest leaf (0 for a single-node tree)."""
        return max(self.leaf_depths())

    def summary(self) -> dict[str, Any]:
        return {
            "root_label": self.root_label(),
            "leaf_count": self.leaf_count,
            "branch_count": self.branch_count,
            "node_count": self.node_count,
            "height": self.height,
        }

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(root={self.root_label()[:16]}..., "
            f"leaves={self._leaf_count}, nodes={len(self._nodes)})"
        )


def build_merkle_tree(
    items: Iterable[Any],
    max_items: Optional[int] = None,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of byte items.

    Algorithm:
    1. One leaf per item, in input order; register each leaf
    2. While more than one node remains at the current level:
       - Pair adjacent nodes (0,1), (2,3), ... into branches
       - Set the parent of both children right after each branch is made
       - Register each branch
       - If the level is odd, carry the last node forward unchanged
    3. The single remaining node is the root

    Example: [a, b, c, d, e] -> [ab, cd, e] -> [abcd, e] -> [abcde]

    Args:
        items: Ordered byte items (bytes, bytearray or memoryview)
        max_items: Optional upper bound on the number of items

    Returns:
        Immutable MerkleTree

    Raises:
        EmptyInputException: If there are no items
        SchemaValidationException: If max_items is exceeded
        TypeError: If an item is not bytes-like
    """
    data = [item_bytes(item) for item in items]
    if not data:
        raise EmptyInputException()
    if max_items is not None and len(data) > max_items:
        raise SchemaValidationException(
            f"Too many items: {len(data)} exceeds limit of {max_items}",
            field_path="items",
            details={"count": len(data), "max_items": max_items},
        )

    arena = NodeArena()
    registry = NodeRegistry()

    level: list[int] = []
    for item in data:
        leaf = Leaf(label=hash_bytes(item), data=item)
        index = arena.add(leaf)
        registry.register(leaf.label, index)
        level.append(index)

    while len(level) > 1:
        next_level: list[int] = []
        for i in range(0, len(level) - 1, 2):
            left, right = level[i], level[i + 1]
            branch = Branch(
                label=hash_labels(arena[left].label, arena[right].label),
                left=left,
                right=right,
            )
            index = arena.add(branch)
            arena.set_parent(left, index)
            arena.set_parent(right, index)
            registry.register(branch.label, index)
            next_level.append(index)

        # Odd node: promoted as-is to the rightmost slot
        if len(level) % 2 == 1:
            next_level.append(level[-1])

        level = next_level

    root_index = level[0]
    nodes, parent_of = arena.freeze()
    registry.freeze()

    if parent_of[root_index] is not None:
        raise TreeStructureException("Root has a parent", node_index=root_index)
    if len(nodes) != 2 * len(data) - 1:
        raise TreeStructureException(
            f"Expected {2 * len(data) - 1} nodes for {len(data)} leaves, got {len(nodes)}"
        )

    tree = MerkleTree(
        nodes=nodes,
        parent_of=parent_of,
        registry=registry,
        root_index=root_index,
        leaf_count=len(data),
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Built Merkle tree: leaves={tree.leaf_count} nodes={tree.node_count} "
            f"height={tree.height} root={tree.root_label()}"
        )
    return tree


def compute_tree_height(num_leaves: int) -> int:
    """
    Height of a tree with ``num_leaves`` leaves under the promotion rule.

    Height counts edges from the root to the deepest leaf: 1 leaf -> 0,
    2 leaves -> 1, 5 leaves -> 3.
    """
    if num_leaves <= 1:
        return 0
    height = 0
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        height += 1
    return height


__all__ = [
    "MerkleTree",
    "build_merkle_tree",
    "compute_tree_height",
]
