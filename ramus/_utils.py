"""
_utils.py
=========
General-purpose utility functions for ramus.

These are standalone functions that don't depend on the main classes
and are useful when preparing input or comparing query results.
"""

from typing import Iterable, Set, Tuple

from ._node import Node


def format_newick(newick: str) -> str:
    """
    Format a NEWICK string for consistent representation.

    Ensures the NEWICK string:
    - Has no whitespace (the parser drops it anyway)
    - Ends with a semicolon

    Parameters
    ----------
    newick : str
        NEWICK string to format.

    Returns
    -------
    str
        Formatted NEWICK string.

    Examples
    --------
    >>> format_newick('((A:1,B:1):1,(C:1,D:1):1)')
    '((A:1,B:1):1,(C:1,D:1):1);'

    >>> format_newick('  ((A:1, B:1):1);  ')
    '((A:1,B:1):1);'
    """
    newick = "".join(newick.split())
    if not newick.endswith(";"):
        newick += ";"
    return newick


def taxon_set(pairs: Iterable[Tuple[int, Node]]) -> Set[str]:
    """
    Collapse ``(id, Node)`` pairs into the set of their taxon labels.

    Clusters and bipartitions are returned as ``(id, Node)`` pairs; this
    gives the plain taxon sets they stand for.  Unlabelled nodes are
    skipped.

    Examples
    --------
    >>> tree = RootedTree.from_newick('((A,B),(C,D));')
    >>> taxon_set(tree.get_cluster(tree.get_root()))
    {'A', 'B', 'C', 'D'}
    """
    return {node.taxa() for _, node in pairs if node.taxa()}
