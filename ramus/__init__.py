"""
ramus
=====

In-memory rooted phylogenetic trees: NEWICK parsing, traversal, ancestor
and MRCA queries, clusters and bipartitions, pruning, path distances and
degree-2 contraction.

*Ramus* is Latin for "branch".

Main Classes
------------
RootedTree : Rooted tree of arbitrary degree with optional edge weights
Node : A single vertex (internal or leaf, optional taxon label)
UnrootedTree : Storage shape for unrooted trees (no algorithms yet)

Traversal
---------
PreOrderNodes, PostOrderNodes, PreOrderEdges, PostOrderEdges :
    Restartable lazy walks, usually obtained from ``RootedTree.iter_*``.

Errors
------
RamusError : Base class of every ramus error
NewickParseError : Malformed NEWICK input
InvalidNodeError : Unknown node id, taxon name or edge
NodeKindError : Operation not defined for this node (e.g. subtree of a leaf)
BrokenAncestryError : Parent and child links disagree

Context Managers
----------------
quiet : Suppress ramus logging during operations
suppress_logger : Suppress specific logger
suppress_warnings : Suppress specific warnings

Utilities
---------
format_newick : Format NEWICK strings consistently
taxon_set : Taxon labels of a cluster or bipartition half

Examples
--------
Basic usage:

>>> from ramus import RootedTree, taxon_set
>>> tree = RootedTree.from_newick('((A:1,B:2):1,(C:1,D:1):1);')
>>> tree.get_mrca(['A', 'B']) == tree.get_node_parent('A')
True
>>> cluster, rest = tree.get_bipartition((tree.get_root(), 1))
>>> sorted(taxon_set(cluster)), sorted(taxon_set(rest))
(['A', 'B'], ['C', 'D'])
>>> tree.distance_from_ancestor('B', tree.get_root())
3.0

Restructuring:

>>> clade = tree.prune(1)
>>> sorted(taxon_set(tree.get_leaves()))
['C', 'D']
>>> tree.clean()
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Main classes
from ._node import Node, NodeKind
from ._tree import RootedTree
from ._unrooted import UnrootedTree
from ._parser import parse_newick

# Traversal
from ._traversal import (
    PreOrderNodes,
    PostOrderNodes,
    PreOrderEdges,
    PostOrderEdges,
)

# Errors
from ._errors import (
    RamusError,
    NewickParseError,
    InvalidNodeError,
    NodeKindError,
    BrokenAncestryError,
)

# Context managers (user-facing utilities)
from ._context import (
    suppress_logger,
    quiet,
    suppress_warnings,
)

# Utilities (generally useful functions)
from ._utils import (
    format_newick,
    taxon_set,
)

# Public API
__all__ = [
    # Main classes
    "RootedTree",
    "Node",
    "NodeKind",
    "UnrootedTree",
    "parse_newick",
    # Traversal
    "PreOrderNodes",
    "PostOrderNodes",
    "PreOrderEdges",
    "PostOrderEdges",
    # Errors
    "RamusError",
    "NewickParseError",
    "InvalidNodeError",
    "NodeKindError",
    "BrokenAncestryError",
    # Context managers
    "suppress_logger",
    "quiet",
    "suppress_warnings",
    # Utilities
    "format_newick",
    "taxon_set",
    # Version info
    "__version__",
]
