"""
_context.py
===========
Context managers for ramus.

Provides clean, Pythonic context managers for temporarily changing state:
- Logging control (suppress/change levels)
- Warning control (suppress specific warnings)

All context managers properly restore state on exit, even if exceptions occur.
"""

import logging
import warnings
from contextlib import contextmanager
from typing import Optional, Type


# Every module logger in the package is a child of this one.
PACKAGE_LOGGER = "ramus"


# ============================================================================ #
# Logging Context Managers
# ============================================================================ #


@contextmanager
def suppress_logger(logger_name: str, level: int = logging.CRITICAL):
    """
    Temporarily change a logger's level.

    Useful for suppressing verbose output from specific modules during
    parsing or bulk restructuring.

    Parameters
    ----------
    logger_name : str
        Name of the logger to suppress (e.g., 'ramus._parser')
    level : int, default logging.CRITICAL
        Temporary logging level. Common values:
        - logging.CRITICAL: Suppress almost everything
        - logging.ERROR: Show only errors
        - logging.WARNING: Show warnings and errors
        - logging.INFO: Show info, warnings, and errors
        - logging.DEBUG: Show everything

    Yields
    ------
    None
        Control is yielded back to the with-block.

    Examples
    --------
    >>> # Suppress the parse summaries while reading many trees
    >>> with suppress_logger('ramus._logging'):
    ...     trees = [RootedTree.from_newick(nwk) for nwk in newicks]

    >>> # Nested suppression works correctly
    >>> with suppress_logger('ramus._parser'):
    ...     with suppress_logger('ramus._logging', logging.WARNING):
    ...         tree.clean()

    Notes
    -----
    - Exception-safe: Logger level restored even if exception raised
    - Nesting-safe: Can nest multiple suppress_logger contexts
    """
    logger = logging.getLogger(logger_name)
    original_level = logger.level

    try:
        logger.setLevel(level)
        yield
    finally:
        logger.setLevel(original_level)


@contextmanager
def quiet(level: int = logging.CRITICAL):
    """
    Temporarily suppress all ramus logging.

    Convenience wrapper around :func:`suppress_logger` for the package
    logger, which every ramus module logger inherits its level from.

    Parameters
    ----------
    level : int, default logging.CRITICAL
        Temporary logging level for the package logger.

    Examples
    --------
    >>> with quiet():
    ...     tree = RootedTree.from_newick('((A,B),(C,D));')

    >>> # Show only warnings while cleaning
    >>> with quiet(logging.WARNING):
    ...     tree.clean()
    """
    with suppress_logger(PACKAGE_LOGGER, level):
        yield


# ============================================================================ #
# Warning Context Managers
# ============================================================================ #


@contextmanager
def suppress_warnings(category: Optional[Type[Warning]] = None):
    """
    Temporarily suppress warnings.

    Parameters
    ----------
    category : Type[Warning] or None, default None
        Warning category to suppress. If None, suppresses all warnings.
        ``RuntimeWarning`` is the usual one, raised by numpy on the
        exported arrays.

    Examples
    --------
    >>> with suppress_warnings(RuntimeWarning):
    ...     ids, matrix = tree.leaf_distance_matrix()
    ...     ratios = matrix / matrix.max()

    Notes
    -----
    - Uses Python's warnings.catch_warnings() internally
    - Fully restores warning state on exit
    - Safe to nest with other warning contexts
    """
    with warnings.catch_warnings():
        if category is None:
            warnings.simplefilter("ignore")
        else:
            warnings.filterwarnings("ignore", category=category)
        yield
