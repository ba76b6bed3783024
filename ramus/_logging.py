"""
_logging.py
===========
Logging functions for ramus.

All functions in this module have NO side effects except logging. They take
computed data as parameters and format/emit log messages, so the tree
algorithms stay free of presentation code and logging can be silenced or
captured in tests (see ``ramus.quiet``).
"""

import logging
from typing import List, Optional


logger = logging.getLogger(__name__)


# ============================================================================ #
# Parsing
# ============================================================================ #


def log_parse_summary(
    n_chars: int, n_nodes: int, n_leaves: int, terminated: bool
) -> None:
    """
    Log the outcome of a NEWICK parse.

    Parameters
    ----------
    n_chars : int
        Length of the input after whitespace removal.
    n_nodes : int
        Number of nodes in the resulting tree.
    n_leaves : int
        Number of nodes reclassified as leaves.
    terminated : bool
        Whether the scan stopped at a ';'.
    """
    logger.debug("Parsed %d characters into %d nodes", n_chars, n_nodes)
    logger.info("Tree built: %d nodes, %d leaves", n_nodes, n_leaves)

    if not terminated:
        logger.warning(
            "NEWICK string has no terminating ';'. End of input was used as "
            "the terminator."
        )


# ============================================================================ #
# Structural edits
# ============================================================================ #


def log_prune(node_id: int, n_removed: int, n_remaining: int) -> None:
    """
    Log the removal of a subtree.

    Parameters
    ----------
    node_id : int
        Root of the pruned subtree.
    n_removed : int
        Number of nodes moved into the returned tree.
    n_remaining : int
        Number of nodes left in the source tree.
    """
    logger.debug(
        "Pruned subtree at node %d: %d nodes removed, %d remain",
        node_id,
        n_removed,
        n_remaining,
    )


def log_clean_summary(
    spliced: List[int], old_roots: List[int], new_root: Optional[int]
) -> None:
    """
    Log the outcome of a degree-2 contraction pass.

    Parameters
    ----------
    spliced : List[int]
        Ids of unary or childless internal nodes spliced out.
    old_roots : List[int]
        Ids of former roots removed by root promotion, in order.
    new_root : int or None
        Root after promotion (None when the root did not change).
    """
    if not spliced and not old_roots:
        logger.debug("Tree already clean; nothing to contract")
        return

    if spliced:
        if len(spliced) <= 5:
            logger.info(
                "Spliced out %d redundant internal node(s): %s",
                len(spliced),
                ", ".join(map(str, spliced)),
            )
        else:
            logger.info("Spliced out %d redundant internal nodes", len(spliced))

    if old_roots:
        logger.info(
            "Root promoted from %d to %d (%d level(s))",
            old_roots[0],
            new_root,
            len(old_roots),
        )


def log_id_shift(offset: int, n_nodes: int) -> None:
    """Log an id renumbering."""
    logger.debug("Shifted %d node ids by %+d", n_nodes, offset)


# ============================================================================ #
# Queries
# ============================================================================ #


def log_missing_weight(parent: int, child: int) -> None:
    """
    Log an unweighted edge met during a weighted distance computation.

    The edge contributes 0.0 to the distance rather than failing.
    """
    logger.debug(
        "Edge (%d, %d) has no weight; counting it as 0.0", parent, child
    )
