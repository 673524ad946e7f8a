"""Disjoint-set forest with path compression and union by rank."""

from typing import Dict, Generic, Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)


class UnionFind(Generic[T]):
    """Partition of hashable items into equivalence classes.

    Items are added lazily on first use. Classes are returned sorted so the
    output does not depend on insertion order.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._parent: Dict[T, T] = {}
        self._rank: Dict[T, int] = {}
        for item in items:
            self.add(item)

    def __contains__(self, item: T) -> bool:
        return item in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def add(self, item: T) -> None:
        if item not in self._parent:
            self._parent[item] = item
            self._rank[item] = 0

    def find(self, item: T) -> T:
        """Return the representative of the class containing item."""
        self.add(item)
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: T, b: T) -> T:
        """Merge the classes of a and b; returns the new representative."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return root_a
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        return root_a

    def connected(self, a: T, b: T) -> bool:
        return self.find(a) == self.find(b)

    def classes(self) -> List[List[T]]:
        """All classes, each sorted, ordered by their smallest member."""
        groups: Dict[T, List[T]] = {}
        for item in self._parent:
            groups.setdefault(self.find(item), []).append(item)
        return sorted((sorted(members) for members in groups.values()), key=lambda c: c[0])
