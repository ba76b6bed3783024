"""
conftest.py
===========
Session-level pytest configuration for the test suite.

Custom marks
------------
deep
    Applied to tests that build very deep (caterpillar) trees to check that
    parsing and traversal never recurse.  They run by default; deselect
    with ``-m "not deep"`` for a faster pass.

    Registration here suppresses PytestUnknownMarkWarning and makes the mark
    visible in ``pytest --markers``.

Logging
-------
The ramus package logger is reset to NOTSET after the run so that level
changes made by ``quiet``/``suppress_logger`` tests cannot leak.
"""

import logging


def pytest_configure(config):
    """
    Configure pytest before test collection begins.
    """
    config.addinivalue_line(
        "markers",
        "deep: builds trees thousands of levels deep (opt out with -m 'not deep')",
    )


def pytest_unconfigure(config):
    """
    Clean up after all tests complete.
    """
    logging.getLogger("ramus").setLevel(logging.NOTSET)
