"""Unit tests for the disjoint-set forest."""

from primitives.union_find import UnionFind


def test_items_start_in_own_class() -> None:
    uf = UnionFind([1, 2, 3])
    assert not uf.connected(1, 2)
    assert uf.classes() == [[1], [2], [3]]


def test_union_is_transitive() -> None:
    """Joining (a, b) and (b, c) connects a and c."""
    uf = UnionFind()
    uf.union("a", "b")
    uf.union("b", "c")
    assert uf.connected("a", "c")
    assert uf.classes() == [["a", "b", "c"]]


def test_union_same_class_is_noop() -> None:
    uf = UnionFind()
    root = uf.union(1, 2)
    assert uf.union(2, 1) == root
    assert len(uf) == 2


def test_classes_sorted_independent_of_insertion() -> None:
    """Class order does not depend on the order unions were made."""
    first = UnionFind()
    first.union(5, 4)
    first.union(1, 3)
    second = UnionFind()
    second.union(3, 1)
    second.union(4, 5)
    assert first.classes() == second.classes() == [[1, 3], [4, 5]]


def test_find_adds_unknown_items() -> None:
    uf = UnionFind()
    assert uf.find(9) == 9
    assert 9 in uf
