"""
_parser.py
==========
Single-pass NEWICK reader that builds a :class:`ramus.RootedTree`.

Grammar (informal)
------------------
  tree     := subtree ';'
  subtree  := leaf | internal
  internal := '(' subtree (',' subtree)* ')' label? (':' weight)?
  leaf     := label? (':' weight)?

``label`` is any run of characters other than ``():,;``; ``weight`` is a
decimal number made of digits and at most one ``.``.

Algorithm
---------
All whitespace is removed, then the string is scanned once from left to
right.  An explicit stack of open parent ids stands in for recursion:

  '('        push the current context, allocate a child, make it current.
  ',' / ')'  attach the current context to the top of the stack with the
             label and weight buffered since the last attachment.  ','
             then allocates a sibling; ')' pops back to the enclosing node.
  ':'        read the edge weight of the current context.
  ';'        give any buffered label to the root and stop.  Trailing
             content is ignored.
  other      accumulate into the label buffer.

Node ids are therefore allocated in order of appearance, with the root at
0.  After the scan, every node without children is reclassified as a leaf.
"""

import logging
from typing import Optional

from ._errors import NewickParseError
from ._logging import log_parse_summary
from ._tree import RootedTree

logger = logging.getLogger(__name__)

_STRUCTURAL = "():,;"
_WEIGHT_CHARS = "0123456789."


def parse_newick(newick_string: str) -> RootedTree:
    """
    Parse *newick_string* and return a fully populated :class:`RootedTree`.

    Parameters
    ----------
    newick_string : str
        NEWICK tree description.  The terminating ';' may be omitted, in
        which case end of input is treated as the terminator.

    Returns
    -------
    RootedTree

    Raises
    ------
    NewickParseError
        If the input ends inside an unclosed group, closes or separates a
        group that was never opened, or carries a malformed edge weight.
    """
    s = "".join(newick_string.split())
    n_chars = len(s)

    tree = RootedTree()
    stack = []
    context = tree.get_root()
    taxon_buf = []
    weight: Optional[float] = None

    terminated = False
    i = 0
    while i < n_chars:
        c = s[i]

        if c == "(":
            stack.append(context)
            context = tree.add_node()
            i += 1

        elif c == "," or c == ")":
            if not stack:
                raise NewickParseError(
                    f"Unbalanced '{c}' at position {i}: no open group to close."
                )
            tree.set_child(
                context,
                stack[-1],
                weight,
                "".join(taxon_buf) if taxon_buf else None,
            )
            taxon_buf = []
            weight = None

            if c == ",":
                context = tree.add_node()
            else:
                context = stack.pop()
            i += 1

        elif c == ":":
            i += 1
            j = i
            while j < n_chars and s[j] in _WEIGHT_CHARS:
                j += 1
            if j < n_chars and s[j] not in _STRUCTURAL:
                raise NewickParseError(
                    f"Unexpected character {s[j]!r} in edge weight at position {j}."
                )
            if j > i:
                try:
                    weight = float(s[i:j])
                except ValueError as exc:
                    raise NewickParseError(
                        f"Malformed edge weight {s[i:j]!r} at position {i}."
                    ) from exc
            i = j

        elif c == ";":
            terminated = True
            break

        else:
            j = i
            while j < n_chars and s[j] not in _STRUCTURAL:
                j += 1
            taxon_buf.append(s[i:j])
            i = j

    if stack:
        raise NewickParseError(
            f"NEWICK string ended abruptly: {len(stack)} unclosed group(s)."
        )

    if taxon_buf:
        tree.assign_taxon(context, "".join(taxon_buf))
    if weight is not None:
        logger.debug("Ignoring edge weight %s given to the root.", weight)

    leaves = [
        node
        for node in tree.iter_node_pre(tree.get_root())
        if not tree.get_node_children(node)
    ]
    for leaf in leaves:
        tree.set_leaf(leaf)

    log_parse_summary(n_chars, tree.n_nodes, len(leaves), terminated)
    return tree
