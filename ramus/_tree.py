"""
_tree.py
========
A rooted phylogenetic tree stored as three id-indexed mappings, with the
algorithms that query and restructure it.

Public API
----------
  RootedTree()                     Empty tree (a single root, id 0).
  RootedTree.from_newick(s)        Parse a NEWICK string.

  Building     : add_node, set_child, set_children, set_leaf, assign_taxon,
                 set_edge_weight
  Accessors    : get_root, get_node, get_nodes, get_children, get_parents,
                 get_node_children, get_node_parent, get_node_degree,
                 get_edge_weight, get_taxa, is_leaf, find_taxon
  Traversal    : iter_node_pre, iter_node_post, iter_edges_pre,
                 iter_edges_post
  Queries      : get_leaves, get_cluster, get_bipartition, get_ancestors_pre,
                 get_mrca, distance_from_ancestor, leaf_distance_matrix,
                 to_arrays
  Restructuring: get_subtree, prune, split_edge, clean, increment_ids
  Not provided : graft_subtree, reroot_at_node, reroot_at_edge

Storage model
-------------
Parent/child back-references are not object references.  The tree owns

  _nodes    : {id: Node}
  _children : {id: [(child_id, weight or None), ...]}   (ordered)
  _parents  : {id: parent_id or None}                   (None only at root)

and the three always share one key set.  An unknown id is detected with a
single membership test and reported as ``InvalidNodeError``.  Ids come from
a per-tree counter and are never reused, not even after a prune.

Every public method that takes a node also accepts a taxon label; labels
are resolved through a name index built on first use, discarded on any
structural change, and re-checked against the node it names on lookup.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ._errors import BrokenAncestryError, InvalidNodeError, NodeKindError
from ._logging import (
    log_clean_summary,
    log_id_shift,
    log_missing_weight,
    log_prune,
)
from ._node import Node
from ._traversal import PostOrderEdges, PostOrderNodes, PreOrderEdges, PreOrderNodes


ChildList = List[Tuple[int, Optional[float]]]


class RootedTree:
    """
    A rooted phylogenetic tree of arbitrary degree with optional edge weights.

    The tree starts as a single internal root with id 0.  Children keep
    their insertion order, which is the left-to-right branch order used by
    every traversal.

    Attributes
    ----------
    root     : int   Id of the node without a parent.
    n_nodes  : int   Number of nodes currently in the tree.
    n_leaves : int   Number of nodes classified as leaves.
    """

    # ================================================================== #
    # Construction                                                         #
    # ================================================================== #

    def __init__(self) -> None:
        self._root: int = 0
        self._nodes: Dict[int, Node] = {0: Node()}
        self._children: Dict[int, ChildList] = {0: []}
        self._parents: Dict[int, Optional[int]] = {0: None}
        self._next_id: int = 1

        # Name index: built lazily on first name-based query.
        self._name_index: Optional[Dict[str, int]] = None

    @classmethod
    def from_newick(cls, newick_string: str) -> "RootedTree":
        """
        Build a tree from a NEWICK string.

        Raises
        ------
        NewickParseError   if the string is malformed.
        """
        from ._parser import parse_newick

        return parse_newick(newick_string)

    @classmethod
    def _from_parts(
        cls,
        root: int,
        nodes: Dict[int, Node],
        children: Dict[int, ChildList],
        parents: Dict[int, Optional[int]],
    ) -> "RootedTree":
        """**Private.**  Wrap already-consistent mappings in a new tree."""
        tree = cls()
        tree._root = root
        tree._nodes = nodes
        tree._children = children
        tree._parents = parents
        tree._next_id = max(nodes) + 1
        return tree

    # ================================================================== #
    # Building                                                             #
    # ================================================================== #

    def add_node(self) -> int:
        """Create a detached internal node and return its id."""
        node_id = self._next_id
        self._next_id += 1
        self._nodes[node_id] = Node()
        self._children[node_id] = []
        self._parents[node_id] = None
        return node_id

    def set_child(
        self,
        node_id,
        parent_id,
        weight: Optional[float] = None,
        taxon: Optional[str] = None,
    ) -> None:
        """
        Attach *node_id* as the last child of *parent_id*.

        The node is reset to an internal node carrying *taxon*; the edge
        from the parent carries *weight*.
        """
        node_id = self._resolve_node(node_id)
        parent_id = self._resolve_node(parent_id)
        self._parents[node_id] = parent_id
        self._children[parent_id].append((node_id, weight))
        self._nodes[node_id] = Node(taxon)
        self._name_index = None

    def set_children(
        self, node_id, children: Sequence[Tuple[int, Optional[float]]]
    ) -> None:
        """
        Replace the ordered child list of *node_id*; re-point each child's parent.

        The new list may reorder, reweight and extend the current one.  Each
        added child must be detached (a fresh :meth:`add_node` id, or the
        root of a subtree built beside the tree) and must not be an
        ancestor of *node_id*.

        Raises
        ------
        InvalidNodeError
            If a current child is left out, a child is listed twice, or an
            added child already has a parent, is the root, or would close
            a cycle.
        """
        node_id = self._resolve_node(node_id)
        new_children = [(self._resolve_node(c), w) for c, w in children]
        new_ids = [c for c, _ in new_children]
        if len(set(new_ids)) != len(new_ids):
            raise InvalidNodeError(f"Duplicate child in new list for node {node_id}.")

        current = {c for c, _ in self._children[node_id]}
        dropped = current.difference(new_ids)
        if dropped:
            raise InvalidNodeError(
                f"Children {sorted(dropped)} of node {node_id} left out of the "
                f"new list; prune them first."
            )

        ancestry = {node_id}
        ancestry.update(self.get_ancestors_pre(node_id))
        for child_id in new_ids:
            if child_id in current:
                continue
            if child_id == self._root or child_id in ancestry:
                raise InvalidNodeError(
                    f"Node {child_id} is an ancestor of node {node_id}."
                )
            if self._parents[child_id] is not None:
                raise InvalidNodeError(
                    f"Node {child_id} already has parent "
                    f"{self._parents[child_id]}."
                )

        for child_id, _ in new_children:
            self._parents[child_id] = node_id
        self._children[node_id] = new_children

    def set_leaf(self, node_id) -> None:
        """Reclassify *node_id* as a leaf.  No-op if it already is one."""
        node = self._nodes[self._resolve_node(node_id)]
        if not node.is_leaf():
            node.flip()

    def assign_taxon(self, node_id, taxon: Optional[str]) -> None:
        self._nodes[self._resolve_node(node_id)].assign_taxon(taxon)
        self._name_index = None

    def set_edge_weight(self, parent_id, child_id, weight: Optional[float]) -> None:
        parent_id = self._resolve_node(parent_id)
        child_id = self._resolve_node(child_id)
        pos = self._child_position(parent_id, child_id)
        self._children[parent_id][pos] = (child_id, weight)

    # ================================================================== #
    # Accessors                                                            #
    # ================================================================== #

    @property
    def root(self) -> int:
        return self._root

    @property
    def n_nodes(self) -> int:
        return len(self._nodes)

    @property
    def n_leaves(self) -> int:
        return sum(1 for node in self._nodes.values() if node.is_leaf())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return (
            f"RootedTree(root={self._root}, n_nodes={self.n_nodes}, "
            f"n_leaves={self.n_leaves})"
        )

    def get_root(self) -> int:
        return self._root

    def get_node(self, node_id) -> Node:
        """Return a copy of the node; relabel through :meth:`assign_taxon`."""
        return self._nodes[self._resolve_node(node_id)].copy()

    def get_nodes(self) -> Mapping[int, Node]:
        """Read-only view of ``{id: Node}``."""
        return MappingProxyType(self._nodes)

    def get_children(self) -> Mapping[int, ChildList]:
        """Read-only view of ``{id: [(child_id, weight), ...]}``."""
        return MappingProxyType(self._children)

    def get_parents(self) -> Mapping[int, Optional[int]]:
        """Read-only view of ``{id: parent_id or None}``."""
        return MappingProxyType(self._parents)

    def get_node_children(self, node_id) -> ChildList:
        """Return a copy of the ordered ``(child_id, weight)`` list of *node_id*."""
        return list(self._children[self._resolve_node(node_id)])

    def get_node_parent(self, node_id) -> Optional[int]:
        return self._parents[self._resolve_node(node_id)]

    def get_node_degree(self, node_id) -> int:
        """Number of incident edges: children, plus one for the parent edge."""
        node_id = self._resolve_node(node_id)
        degree = len(self._children[node_id])
        if self._parents[node_id] is not None:
            degree += 1
        return degree

    def get_edge_weight(self, parent_id, child_id) -> Optional[float]:
        parent_id = self._resolve_node(parent_id)
        child_id = self._resolve_node(child_id)
        pos = self._child_position(parent_id, child_id)
        return self._children[parent_id][pos][1]

    def get_taxa(self, node_id) -> str:
        """Taxon label of *node_id*, or '' when unlabelled."""
        return self.get_node(node_id).taxa()

    def is_leaf(self, node_id) -> bool:
        return self.get_node(node_id).is_leaf()

    def find_taxon(self, name: str) -> int:
        """
        Return the id of the node labelled *name*.

        Raises
        ------
        InvalidNodeError   if no node carries the label.
        ValueError         if the label is used by more than one node.
        """
        return self._resolve_node(str(name))

    # ================================================================== #
    # Traversal                                                            #
    # ================================================================== #

    def iter_node_pre(self, start=None) -> PreOrderNodes:
        """Node ids below *start* (default: root), each before its descendants."""
        return PreOrderNodes(self._start(start), self._children)

    def iter_node_post(self, start=None) -> PostOrderNodes:
        """Node ids below *start* (default: root), each after its descendants."""
        return PostOrderNodes(self._start(start), self._children)

    def iter_edges_pre(self, start=None) -> PreOrderEdges:
        """``(parent, child)`` edges below *start*, in pre-order of the child."""
        return PreOrderEdges(self._start(start), self._children, self._parents)

    def iter_edges_post(self, start=None) -> PostOrderEdges:
        """``(parent, child)`` edges below *start*, in post-order of the child."""
        return PostOrderEdges(self._start(start), self._children, self._parents)

    # ================================================================== #
    # Queries                                                              #
    # ================================================================== #

    def get_leaves(self, node_id=None) -> List[Tuple[int, Node]]:
        """
        Return the ``(id, Node)`` pairs of every childless node at or below
        *node_id* (default: root), in pre-order.
        """
        start = self._start(node_id)
        return [
            (n, self._nodes[n].copy())
            for n in PreOrderNodes(start, self._children)
            if not self._children[n]
        ]

    def get_cluster(self, node_id) -> List[Tuple[int, Node]]:
        """
        Return the cluster of *node_id*: the leaves it covers, as
        ``(id, Node)`` pairs in pre-order.
        """
        return self.get_leaves(self._resolve_node(node_id))

    def get_bipartition(
        self, edge
    ) -> Tuple[List[Tuple[int, Node]], List[Tuple[int, Node]]]:
        """
        Return the split of the leaf set induced by removing *edge*.

        Parameters
        ----------
        edge : (parent, child)

        Returns
        -------
        (cluster, complement)
            ``cluster`` holds the leaves below *child*; ``complement`` holds
            every other leaf of the tree.  Together they partition the leaf
            set with no overlap.

        Raises
        ------
        InvalidNodeError   if *child* is not a child of *parent*.
        """
        parent_id = self._resolve_node(edge[0])
        child_id = self._resolve_node(edge[1])
        self._child_position(parent_id, child_id)

        cluster = self.get_cluster(child_id)
        inside = {leaf_id for leaf_id, _ in cluster}
        complement = [
            pair for pair in self.get_leaves(self._root) if pair[0] not in inside
        ]
        return cluster, complement

    def get_ancestors_pre(self, node_id) -> List[int]:
        """
        Return the ancestors of *node_id*, nearest first, ending at the root.

        The node itself is not included, so the root has no ancestors.

        Raises
        ------
        BrokenAncestryError
            if the parent links do not reach the root within ``n_nodes``
            steps (a cycle) or point at a node that is not in the tree.
        """
        node_id = self._resolve_node(node_id)
        ancestors = []
        current = self._parents[node_id]
        while current is not None:
            if current not in self._parents or len(ancestors) >= len(self._nodes):
                raise BrokenAncestryError(
                    f"Parent links from node {node_id} do not reach the root."
                )
            ancestors.append(current)
            current = self._parents[current]
        return ancestors

    def get_mrca(self, node_ids) -> int:
        """
        Return the most recent common ancestor of *node_ids*.

        Each node's path is taken inclusively (the node itself, then its
        ancestors) and read from the root side inward.  The MRCA is the last
        position at which every path still agrees, so paths of different
        lengths are handled for any number of inputs.  A node counts as its
        own ancestor: ``get_mrca([x]) == x``.

        Parameters
        ----------
        node_ids : sequence of (int | str)   Length >= 1; duplicates OK.

        Raises
        ------
        ValueError         if *node_ids* is empty.
        InvalidNodeError   if an id or name is not in the tree.
        """
        ids = [self._resolve_node(n) for n in node_ids]
        if not ids:
            raise ValueError("node_ids must contain at least one element.")

        paths = [
            list(reversed([node_id] + self.get_ancestors_pre(node_id)))
            for node_id in ids
        ]
        mrca = paths[0][0]
        for level in zip(*paths):
            if any(n != level[0] for n in level[1:]):
                break
            mrca = level[0]
        return mrca

    def distance_from_ancestor(
        self, node_id, ancestor_id, weighted: bool = True
    ) -> float:
        """
        Return the path length from *ancestor_id* down to *node_id*.

        Parameters
        ----------
        node_id, ancestor_id : int | str
        weighted : bool, default True
            Sum edge weights when True; count edges when False.  An
            unweighted edge contributes 0.0 in weighted mode.

        Raises
        ------
        ValueError
            if *ancestor_id* is not an ancestor of *node_id*.
        BrokenAncestryError
            if two consecutive ancestors are not joined by a recorded edge.
        """
        node_id = self._resolve_node(node_id)
        ancestor_id = self._resolve_node(ancestor_id)
        if node_id == ancestor_id:
            return 0.0

        ancestors = self.get_ancestors_pre(node_id)
        if ancestor_id not in ancestors:
            raise ValueError(
                f"Node {ancestor_id} is not an ancestor of node {node_id}."
            )
        chain = [node_id] + ancestors[: ancestors.index(ancestor_id) + 1]

        distance = 0.0
        for child, parent in zip(chain, chain[1:]):
            for child_id, weight in self._children[parent]:
                if child_id == child:
                    break
            else:
                raise BrokenAncestryError(
                    f"Node {parent} is the recorded parent of node {child} but "
                    f"does not list it as a child. Clean the tree first."
                )
            if not weighted:
                distance += 1.0
            elif weight is None:
                log_missing_weight(parent, child)
            else:
                distance += weight
        return distance

    def leaf_distance_matrix(
        self, weighted: bool = True
    ) -> Tuple[List[int], np.ndarray]:
        """
        Return pairwise path distances between all leaves.

        dist(u, v) = distance(u, MRCA) + distance(v, MRCA)

        Returns
        -------
        leaf_ids : list[int]        Row/column order (leaves in pre-order).
        matrix   : float64[n, n]    Symmetric, zero diagonal.
        """
        leaf_ids = [leaf_id for leaf_id, _ in self.get_leaves(self._root)]
        n = len(leaf_ids)
        matrix = np.zeros((n, n), dtype=np.float64)
        for i in range(n):
            for j in range(i + 1, n):
                u, v = leaf_ids[i], leaf_ids[j]
                mrca = self.get_mrca([u, v])
                d = self.distance_from_ancestor(
                    u, mrca, weighted
                ) + self.distance_from_ancestor(v, mrca, weighted)
                matrix[i, j] = d
                matrix[j, i] = d
        return leaf_ids, matrix

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """
        Export the tree as flat parallel arrays, nodes in pre-order.

        Returns
        -------
        dict with
          node_ids : int64  [n]   Node id at each position.
          parent   : int64  [n]   Parent id; -1 for the root.
          distance : float64[n]   Weight of the parent edge; -1.0 for the
                                  root or an unweighted edge.
          is_leaf  : bool   [n]
        """
        order = list(PreOrderNodes(self._root, self._children))
        n = len(order)
        node_ids = np.array(order, dtype=np.int64)
        parent = np.full(n, -1, dtype=np.int64)
        distance = np.full(n, -1.0, dtype=np.float64)
        is_leaf = np.zeros(n, dtype=bool)

        position = {node_id: i for i, node_id in enumerate(order)}
        for i, node_id in enumerate(order):
            is_leaf[i] = self._nodes[node_id].is_leaf()
            for child_id, weight in self._children[node_id]:
                k = position[child_id]
                parent[k] = node_id
                if weight is not None:
                    distance[k] = weight

        return {
            "node_ids": node_ids,
            "parent": parent,
            "distance": distance,
            "is_leaf": is_leaf,
        }

    # ================================================================== #
    # Restructuring                                                        #
    # ================================================================== #

    def get_subtree(self, node_id) -> "RootedTree":
        """
        Return an independent copy of the subtree rooted at *node_id*.

        The copy keeps the original ids, children order and edge weights;
        its root has no parent.  The source tree is not modified.

        Raises
        ------
        NodeKindError   if *node_id* is a leaf.
        """
        node_id = self._resolve_node(node_id)
        if self._nodes[node_id].is_leaf():
            raise NodeKindError(f"Node {node_id} is a leaf and has no subtree.")
        return self._copy_subtree(node_id, remove=False)

    def prune(self, node_id) -> "RootedTree":
        """
        Cut the subtree rooted at *node_id* out of this tree and return it.

        The two trees partition the original node set: every id below the
        cut moves to the returned tree and is removed here, along with the
        edge to its former parent.  A parent left without children is
        reclassified as a leaf.

        Raises
        ------
        NodeKindError   if *node_id* is the root.
        """
        node_id = self._resolve_node(node_id)
        if node_id == self._root:
            raise NodeKindError("The root cannot be pruned from its own tree.")

        parent_id = self._parents[node_id]
        siblings = self._children[parent_id]
        del siblings[self._child_position(parent_id, node_id)]

        pruned = self._copy_subtree(node_id, remove=True)
        if not siblings:
            self.set_leaf(parent_id)
        self._name_index = None

        log_prune(node_id, pruned.n_nodes, self.n_nodes)
        return pruned

    def split_edge(
        self,
        edge,
        edge_weights: Tuple[Optional[float], Optional[float]] = (None, None),
    ) -> int:
        """
        Insert a new internal node in the middle of *edge*.

        Parameters
        ----------
        edge : (parent, child)
        edge_weights : (upper, lower)
            Weights of the new ``parent -> new`` and ``new -> child`` edges.

        Returns
        -------
        int   Id of the inserted node.  It takes the child's position among
              the parent's children.

        Raises
        ------
        InvalidNodeError   if *child* is not a child of *parent*.
        """
        parent_id = self._resolve_node(edge[0])
        child_id = self._resolve_node(edge[1])
        pos = self._child_position(parent_id, child_id)

        upper, lower = edge_weights
        new_id = self.add_node()
        self._children[parent_id][pos] = (new_id, upper)
        self._children[new_id].append((child_id, lower))
        self._parents[new_id] = parent_id
        self._parents[child_id] = new_id
        return new_id

    def clean(self) -> None:
        """
        Contract redundant nodes in place.

        1. Every non-root internal node with fewer than two children is
           spliced out: its children take its place, in order, among its
           parent's children and keep their own edge weights.  Nodes are
           visited in post-order, so chains of unary nodes collapse fully.
        2. While the root has a single child, that child becomes the root
           and the old root is removed.
        """
        spliced = []
        for node_id in list(PostOrderNodes(self._root, self._children)):
            if node_id == self._root or self._nodes[node_id].is_leaf():
                continue
            if len(self._children[node_id]) < 2:
                self._splice(node_id)
                spliced.append(node_id)

        # Non-root parents emptied above were themselves spliced later in
        # the walk; only the root can be left internal and childless.
        if spliced and not self._children[self._root]:
            self.set_leaf(self._root)

        old_roots = []
        while len(self._children[self._root]) == 1:
            old_root = self._root
            new_root = self._children[old_root][0][0]
            self._parents[new_root] = None
            self._remove(old_root)
            self._root = new_root
            old_roots.append(old_root)

        self._name_index = None
        log_clean_summary(spliced, old_roots, self._root if old_roots else None)

    def increment_ids(self, offset: int) -> None:
        """
        Shift every node id by *offset*.

        Node keys, parent references, child references, the root and the
        id counter move together, so the shape of the tree is unchanged.
        Used to make two trees' id spaces disjoint before merging them.
        A negative offset undoes an earlier shift.

        Raises
        ------
        ValueError   if the shift would produce a negative id.
        """
        offset = int(offset)
        if min(self._nodes) + offset < 0:
            raise ValueError(
                f"Offset {offset} would make node {min(self._nodes)} negative."
            )

        # Rewritten in place so views from get_nodes/get_children/get_parents
        # stay bound to the live tree.
        nodes = {n + offset: node for n, node in self._nodes.items()}
        parents = {
            n + offset: (p + offset if p is not None else None)
            for n, p in self._parents.items()
        }
        children = {
            n + offset: [(c + offset, w) for c, w in kids]
            for n, kids in self._children.items()
        }
        for mapping, shifted in (
            (self._nodes, nodes),
            (self._parents, parents),
            (self._children, children),
        ):
            mapping.clear()
            mapping.update(shifted)
        self._root += offset
        self._next_id += offset
        self._name_index = None

        log_id_shift(offset, len(self._nodes))

    def check_integrity(self) -> None:
        """
        Verify the structural invariants of the tree.

        Checks that the three mappings share one key set, that the root is
        the only parentless node, that parent and child links agree in both
        directions, and that every node reaches the root.

        Raises
        ------
        BrokenAncestryError   describing the first violation found.
        """
        keys = set(self._nodes)
        if keys != set(self._children) or keys != set(self._parents):
            raise BrokenAncestryError("Node, children and parent maps disagree.")

        for node_id, parent_id in self._parents.items():
            if parent_id is None:
                if node_id != self._root:
                    raise BrokenAncestryError(f"Non-root node {node_id} has no parent.")
                continue
            if parent_id not in keys:
                raise BrokenAncestryError(
                    f"Node {node_id} points at missing parent {parent_id}."
                )
            if all(c != node_id for c, _ in self._children[parent_id]):
                raise BrokenAncestryError(
                    f"Node {parent_id} does not list its child {node_id}."
                )

        for node_id, kids in self._children.items():
            for child_id, _ in kids:
                if self._parents.get(child_id) != node_id:
                    raise BrokenAncestryError(
                        f"Child {child_id} of node {node_id} points elsewhere."
                    )

        for node_id in keys:
            self.get_ancestors_pre(node_id)

    def graft_subtree(self, tree: "RootedTree", edge) -> None:
        raise NotImplementedError("Grafting a subtree is not supported yet.")

    def reroot_at_node(self, node_id) -> None:
        raise NotImplementedError("Re-rooting at a node is not supported yet.")

    def reroot_at_edge(self, edge) -> None:
        raise NotImplementedError("Re-rooting at an edge is not supported yet.")

    # ================================================================== #
    # Private instance methods                                             #
    # ================================================================== #

    def _start(self, node_id) -> int:
        return self._root if node_id is None else self._resolve_node(node_id)

    def _child_position(self, parent_id: int, child_id: int) -> int:
        for pos, (c, _) in enumerate(self._children[parent_id]):
            if c == child_id:
                return pos
        raise InvalidNodeError(f"No edge ({parent_id}, {child_id}) in tree.")

    def _copy_subtree(self, node_id: int, remove: bool) -> "RootedTree":
        """
        **Private.**  Copy the nodes at and below *node_id* into a new tree,
        optionally removing them from this one.
        """
        # Materialised first: removal would invalidate a live walk.
        ids = list(PreOrderNodes(node_id, self._children))

        nodes = {n: self._nodes[n].copy() for n in ids}
        children = {n: list(self._children[n]) for n in ids}
        parents = {n: self._parents[n] for n in ids}
        parents[node_id] = None

        if remove:
            for n in ids:
                self._remove(n)

        return type(self)._from_parts(node_id, nodes, children, parents)

    def _splice(self, node_id: int) -> None:
        """**Private.**  Replace *node_id* by its children in its parent's list."""
        parent_id = self._parents[node_id]
        siblings = self._children[parent_id]
        pos = self._child_position(parent_id, node_id)
        grandchildren = self._children[node_id]

        self._children[parent_id] = siblings[:pos] + grandchildren + siblings[pos + 1:]
        for child_id, _ in grandchildren:
            self._parents[child_id] = parent_id
        self._remove(node_id)

    def _remove(self, node_id: int) -> None:
        del self._nodes[node_id]
        del self._children[node_id]
        del self._parents[node_id]

    def _resolve_node(self, node) -> int:
        """
        **Private.**  Return the integer node id for *node*.

        Integers (including numpy integers) are checked for membership;
        strings are looked up in the name index, which is built lazily.

        Raises
        ------
        InvalidNodeError   if the id or name is not present in the tree.
        """
        if isinstance(node, str):
            if self._name_index is None or not self._name_index_matches(node):
                self._build_name_index()
            if node not in self._name_index:
                raise InvalidNodeError(f"No node with name '{node}' found in tree.")
            return self._name_index[node]
        if isinstance(node, bool):
            raise InvalidNodeError(f"Invalid node id {node!r}.")
        if isinstance(node, (int, np.integer)) and int(node) in self._nodes:
            return int(node)
        raise InvalidNodeError(f"Invalid node id {node!r}.")

    def _name_index_matches(self, name: str) -> bool:
        """
        **Private.**  Whether the cached entry for *name* still agrees with
        the node it points at.  A miss also counts as stale, since a node
        read through :meth:`get_nodes` may have been relabelled in place.
        """
        node_id = self._name_index.get(name)
        if node_id is None or node_id not in self._nodes:
            return False
        return self._nodes[node_id].taxa() == name

    def _build_name_index(self) -> None:
        """
        **Private.**  Build and cache ``self._name_index``: a dict mapping
        each non-empty taxon label to its node id.

        Raises
        ------
        ValueError   if duplicate taxon labels are found.
        """
        idx = {}
        for node_id, node in self._nodes.items():
            name = node.taxa()
            if name != "":
                if name in idx:
                    raise ValueError(
                        f"Duplicate node name '{name}' at IDs "
                        f"{idx[name]} and {node_id}."
                    )
                idx[name] = node_id
        self._name_index = idx
