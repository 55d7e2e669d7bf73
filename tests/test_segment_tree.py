"""Tests for segment_tree.py"""

import pytest
from hypothesis import given, settings, strategies as st

from segment_tree import LazySegmentTree, OutOfBoundsError


class TestConstruction:
    def test_queries_match_input(self):
        tree = LazySegmentTree([1, 2, 3, 4, 5])
        assert tree.query_range_sum(1, 3) == 9
        assert tree.query_range_sum(0, 4) == 15
        assert tree.query_range_sum(2, 2) == 3

    def test_length_and_padding(self):
        tree = LazySegmentTree([4, 5, 6])
        assert len(tree) == 3
        assert tree.capacity == 4
        assert tree.to_list() == [4, 5, 6]

    def test_single_element(self):
        tree = LazySegmentTree([7])
        assert tree.query_range_sum(0, 0) == 7
        tree.update_range(0, 0, 3)
        assert tree[0] == 10

    def test_rejects_nested_input(self):
        with pytest.raises(ValueError):
            LazySegmentTree([[1, 2], [3, 4]])

    @pytest.mark.parametrize("values", [[1.9, 2.9], ["3", "4"], [1, 2.5]])
    def test_rejects_non_integer_values(self, values):
        with pytest.raises(TypeError):
            LazySegmentTree(values)


class TestUpdates:
    def test_documented_example(self):
        tree = LazySegmentTree([1, 2, 3, 4, 5])
        tree.update_range(1, 3, 10)
        assert tree.query_range_sum(0, 4) == 45
        assert tree.query_range_sum(1, 3) == 39
        assert tree.query_range_sum(0, 0) == 1
        assert tree.query_range_sum(4, 4) == 5

    def test_whole_array_update(self):
        tree = LazySegmentTree([0] * 8)
        tree.update_range(0, 7, 2)
        assert tree.query_range_sum(0, 7) == 16
        assert tree.query_range_sum(3, 5) == 6

    def test_overlapping_updates(self):
        tree = LazySegmentTree(range(10))
        tree.update_range(0, 5, 1)
        tree.update_range(3, 9, -2)
        expected = [v + (1 if i <= 5 else 0) - (2 if i >= 3 else 0) for i, v in enumerate(range(10))]
        assert tree.to_list() == expected
        assert tree.query_range_sum(2, 7) == sum(expected[2:8])

    def test_repeated_queries_are_idempotent(self):
        tree = LazySegmentTree([3, 1, 4, 1, 5, 9, 2])
        tree.update_range(2, 5, 7)
        first = tree.query_range_sum(1, 6)
        assert tree.query_range_sum(1, 6) == first

    def test_stats_track_total(self):
        tree = LazySegmentTree([1, 2, 3, 4, 5])
        tree.update_range(1, 3, 10)
        stats = tree.stats()
        assert stats['size'] == 5
        assert stats['capacity'] == 8
        assert stats['height'] == 3
        assert stats['total'] == 45


class TestBounds:
    @pytest.mark.parametrize("left,right", [(-1, 2), (0, 5), (3, 2), (5, 5)])
    def test_invalid_ranges(self, left, right):
        tree = LazySegmentTree([1, 2, 3, 4, 5])
        with pytest.raises(OutOfBoundsError):
            tree.query_range_sum(left, right)
        with pytest.raises(OutOfBoundsError):
            tree.update_range(left, right, 1)

    def test_out_of_bounds_is_index_error(self):
        tree = LazySegmentTree([1])
        with pytest.raises(IndexError):
            tree[1]

    def test_empty_tree_rejects_everything(self):
        tree = LazySegmentTree([])
        assert len(tree) == 0
        assert tree.to_list() == []
        with pytest.raises(OutOfBoundsError):
            tree.query_range_sum(0, 0)

    def test_non_integer_index(self):
        tree = LazySegmentTree([1, 2, 3])
        with pytest.raises(TypeError):
            tree.query_range_sum(0.5, 2)


@st.composite
def arrays_with_operations(draw):
    values = draw(st.lists(st.integers(-1000, 1000), min_size=1, max_size=40))
    index = st.integers(0, len(values) - 1)
    span = st.tuples(index, index).map(sorted)
    operations = draw(st.lists(st.tuples(span, st.integers(-100, 100), span), max_size=25))
    return values, operations


@settings(max_examples=75, deadline=None)
@given(case=arrays_with_operations())
def test_matches_naive_array(case):
    values, operations = case
    tree = LazySegmentTree(values)
    naive = list(values)

    for (left, right), delta, (q_left, q_right) in operations:
        tree.update_range(left, right, delta)
        for i in range(left, right + 1):
            naive[i] += delta
        assert tree.query_range_sum(q_left, q_right) == sum(naive[q_left:q_right + 1])

    assert tree.query_range_sum(0, len(naive) - 1) == sum(naive)
    assert tree.to_list() == naive
