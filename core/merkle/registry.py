"""
Module 02 - Node Registry
Label -> arena index lookup, filled once while a tree is built.

The registry does not own nodes; it only maps content addresses to
positions in the tree's arena. When two nodes share a label the first
one registered is kept. The builder registers every leaf before any
branch, so a leaf is never shadowed by a branch, and among duplicate
items the leftmost leaf wins.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from core.schemas.errors import LabelNotFoundException, TreeStructureException


class NodeRegistry:
    """Content-addressed index over a tree's nodes."""

    def __init__(self) -> None:
        self._index: dict[str, int] = {}
        self._frozen = False

    def register(self, label: str, index: int) -> bool:
        """
        Map ``label`` to ``index`` unless the label is already known.

        Returns:
            True if a new entry was created, False on a repeated label
        """
        if self._frozen:
            raise TreeStructureException(
                "Registry is frozen", node_index=index
            )
        if label in self._index:
            return False
        self._index[label] = index
        return True

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, label: str) -> int:
        """
        Resolve a label to its node index.

        Raises:
            LabelNotFoundException: If no node has this label
        """
        try:
            return self._index[label]
        except KeyError:
            raise LabelNotFoundException(
                f"No node with label {label}", label=label
            ) from None

    def get(self, label: str) -> Optional[int]:
        return self._index.get(label)

    def labels(self) -> Iterator[str]:
        return iter(self._index)

    def as_mapping(self) -> Mapping[str, int]:
        """Read-only view of the label index."""
        return MappingProxyType(self._index)

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"NodeRegistry(entries={len(self._index)}, frozen={self._frozen})"


__all__ = ["NodeRegistry"]
