"""Fresh variable allocation."""

from __future__ import annotations

from typing import Iterable

from setsugar.core.ast import Node, Variable, collect_indices


class FreshVariables:
    """Hands out variable indices that occur nowhere in the tree being rewritten.

    One allocator belongs to one transformation call. Every index it returns
    is recorded as used straight away, so two allocations never collide.
    """

    def __init__(self, used: Iterable[int] = ()) -> None:
        self._used: set[int] = set(used)

    @classmethod
    def for_tree(cls, node: Node) -> FreshVariables:
        return cls(collect_indices(node))

    @property
    def used(self) -> frozenset[int]:
        return frozenset(self._used)

    def reset(self, node: Node) -> None:
        """Forget everything and record the indices of `node`."""
        self._used = collect_indices(node)

    def indices(self, count: int) -> list[int]:
        """Allocate `count` indices, smallest unused first.

        The result is in descending order of discovery.
        """
        result: list[int] = []
        candidate = 0
        while len(result) < count:
            if candidate not in self._used:
                self._used.add(candidate)
                result.append(candidate)
            candidate += 1
        result.reverse()
        return result

    def variable(self) -> Variable:
        (index,) = self.indices(1)
        return Variable(index)
