"""
_traversal.py
=============
Lazy, restartable pre-order and post-order walks over a children mapping.

Each walker is an iterable object: every call to ``iter()`` starts a fresh
walk from the start node, so one walker can be driven to completion any
number of times.  Walkers only read the mapping they are given, and read
it live: a walk started after an edit sees the edit.  The start id is
fixed when the walker is made: after ``RootedTree.increment_ids`` an
older walker still starts from its old id, and raises ``KeyError`` when
that id is gone.  Mutating the tree while a walk is in progress is not
supported.

All walks are iterative (explicit stack, no recursion), so deep caterpillar
trees do not hit the interpreter recursion limit.
"""

from typing import Dict, Iterator, List, Optional, Tuple

ChildList = List[Tuple[int, Optional[float]]]


class PreOrderNodes:
    """Yield node ids, each node before its descendants, children in stored order."""

    def __init__(self, start: int, children: Dict[int, ChildList]) -> None:
        self.start = start
        self._children = children

    def __iter__(self) -> Iterator[int]:
        stack = [self.start]
        while stack:
            node = stack.pop()
            yield node
            # Reversed so the leftmost child is popped first.
            for child, _ in reversed(self._children[node]):
                stack.append(child)


class PostOrderNodes:
    """Yield node ids with each node after all of its descendants."""

    def __init__(self, start: int, children: Dict[int, ChildList]) -> None:
        self.start = start
        self._children = children

    def __iter__(self) -> Iterator[int]:
        # Phase-coded stack: (node, expanded).  A node is emitted on its
        # second visit, once every child below it has been emitted.
        stack = [(self.start, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield node
                continue
            stack.append((node, True))
            for child, _ in reversed(self._children[node]):
                stack.append((child, False))


class PreOrderEdges:
    """Yield ``(parent, child)`` pairs, ordered by the pre-order of the child."""

    def __init__(
        self,
        start: int,
        children: Dict[int, ChildList],
        parents: Dict[int, Optional[int]],
    ) -> None:
        self.start = start
        self._children = children
        self._parents = parents

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for node in PreOrderNodes(self.start, self._children):
            if node == self.start:
                continue
            yield self._parents[node], node


class PostOrderEdges:
    """Yield ``(parent, child)`` pairs, ordered by the post-order of the child."""

    def __init__(
        self,
        start: int,
        children: Dict[int, ChildList],
        parents: Dict[int, Optional[int]],
    ) -> None:
        self.start = start
        self._children = children
        self._parents = parents

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for node in PostOrderNodes(self.start, self._children):
            if node == self.start:
                continue
            yield self._parents[node], node
