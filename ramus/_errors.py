"""
_errors.py
==========
Exception hierarchy for ramus.

Every error raised by the tree engine is structural or a caller mistake;
none of them is transient, so there is no retry logic anywhere in the
package.  Each class also derives from the builtin that callers would
naturally catch for the same condition (``KeyError`` for a bad identifier,
``ValueError`` for bad input), so ``except KeyError`` keeps working.
"""


class RamusError(Exception):
    """Base exception for ramus tree errors."""

    pass


class NewickParseError(RamusError, ValueError):
    """Raised when a NEWICK string is malformed (e.g. an unclosed group)."""

    pass


class InvalidNodeError(RamusError, KeyError):
    """Raised when a node id, taxon name or edge is not present in the tree."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class NodeKindError(RamusError, ValueError):
    """Raised when an operation is not defined for the kind of node given."""

    pass


class BrokenAncestryError(RamusError, RuntimeError):
    """Raised when consecutive ancestors are not linked by a recorded edge."""

    pass
