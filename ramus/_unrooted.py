"""
_unrooted.py
============
Data shape for an unrooted phylogenetic tree.

Only the storage is defined; no algorithm operates on it yet.
"""

from typing import Dict, Optional, Set, Tuple

from ._node import Node


class UnrootedTree:
    """
    An unrooted tree as an undirected adjacency store.

    Attributes
    ----------
    nodes      : {id: Node}
    neighbours : {id: {(weight or None, neighbour_id), ...}}
    leaves     : {id: taxon}
    """

    def __init__(self) -> None:
        self.nodes: Dict[int, Node] = {}
        self.neighbours: Dict[int, Set[Tuple[Optional[float], int]]] = {}
        self.leaves: Dict[int, str] = {}
