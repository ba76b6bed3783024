"""
_node.py
========
A single tree vertex: its kind (internal or leaf) and optional taxon label.

Structure (parent, children, edge weights) is not stored here; it lives in
the id-indexed mappings of :class:`ramus.RootedTree`.
"""

from enum import Enum
from typing import Optional


class NodeKind(Enum):
    INTERNAL = "internal"
    LEAF = "leaf"


class Node:
    """
    A vertex of a rooted tree.

    A node is created as ``INTERNAL`` and reclassified as ``LEAF`` explicitly
    (by the parser, or when pruning leaves a node childless).  The kind is
    never re-derived from the children on read.

    Parameters
    ----------
    taxon : str or None
        Taxon label, or None when unlabelled.
    kind : NodeKind, default NodeKind.INTERNAL
    """

    __slots__ = ("taxon", "kind")

    def __init__(
        self, taxon: Optional[str] = None, kind: NodeKind = NodeKind.INTERNAL
    ) -> None:
        self.taxon = taxon
        self.kind = kind

    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def taxa(self) -> str:
        """Return the taxon label, or '' when the node is unlabelled."""
        return self.taxon if self.taxon is not None else ""

    def assign_taxon(self, taxon: Optional[str]) -> None:
        self.taxon = taxon

    def flip(self) -> None:
        """Toggle between ``INTERNAL`` and ``LEAF``."""
        if self.kind is NodeKind.LEAF:
            self.kind = NodeKind.INTERNAL
        else:
            self.kind = NodeKind.LEAF

    def copy(self) -> "Node":
        return Node(self.taxon, self.kind)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.taxon == other.taxon and self.kind is other.kind

    def __hash__(self) -> int:
        return hash((self.taxon, self.kind))

    def __repr__(self) -> str:
        return f"Node({self.taxon!r}, {self.kind.name})"
