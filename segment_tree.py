"""
Lazy Propagation Segment Tree for O(log n) Range Updates and Range Sums

This module provides:
- Bottom-up O(n) construction over a fixed-size integer array
- Range-add updates with deferred (lazy) propagation
- Inclusive range-sum queries
- O(log n) per update and per query
"""

import logging
import operator
from typing import Dict, Iterable, List

import numpy as np

logger = logging.getLogger(__name__)


class OutOfBoundsError(IndexError):
    """Raised when a range does not lie inside the tree's index space."""


class LazySegmentTree:
    """
    Sum segment tree with range-add updates.

    Storage is two parallel buffers in a 1-based implicit binary layout:
    - values[i]: sum of the subtree rooted at node i, excluding deltas still
      pending on ancestors of i
    - pending[i]: delta applied to node i but not yet pushed to its children

    The leaf row is padded to a power of two so every internal node covers a
    contiguous block of 2^k leaves. Padding leaves hold 0 and are never
    addressable.

    Construction: O(n)
    Update: O(log n)
    Query: O(log n)
    """

    def __init__(self, values: Iterable[int]):
        """
        Build the tree bottom-up.

        Args:
            values: Initial array; its length is fixed for the tree's lifetime
        """
        initial = np.asarray(list(values))
        if initial.ndim != 1:
            raise ValueError("LazySegmentTree expects a flat sequence of integers")
        if initial.size and not np.issubdtype(initial.dtype, np.integer):
            raise TypeError(f"LazySegmentTree values must be integers, got dtype {initial.dtype}")
        initial = initial.astype(np.int64)

        self.size = int(initial.shape[0])
        self.capacity = 1
        while self.capacity < self.size:
            self.capacity *= 2
        self.height = self.capacity.bit_length() - 1

        self.values = np.zeros(2 * self.capacity, dtype=np.int64)
        self.pending = np.zeros(self.capacity, dtype=np.int64)

        # Leaves first, then every internal node from the bottom up
        self.values[self.capacity:self.capacity + self.size] = initial
        for i in range(self.capacity - 1, 0, -1):
            self.values[i] = self.values[2 * i] + self.values[2 * i + 1]

        logger.debug(f"Built segment tree over {self.size} elements (capacity {self.capacity})")

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> int:
        return self.query_range_sum(index, index)

    def _check_range(self, left: int, right: int):
        left = operator.index(left)
        right = operator.index(right)
        if left < 0 or right >= self.size:
            raise OutOfBoundsError(
                f"Range [{left}, {right}] outside [0, {self.size - 1}]"
            )
        if left > right:
            raise OutOfBoundsError(f"Range start {left} is after range end {right}")
        return left, right

    def _apply(self, index: int, delta: int, width: int):
        """Add delta to every leaf under index; internal nodes remember it."""
        self.values[index] += delta * width
        if index < self.capacity:
            self.pending[index] += delta

    def _push_down(self, leaf: int):
        """Push pending deltas from the root down to the parent of leaf."""
        for shift in range(self.height, 0, -1):
            node = leaf >> shift
            delta = self.pending[node]
            if delta != 0:
                child_width = 1 << (shift - 1)
                self._apply(2 * node, delta, child_width)
                self._apply(2 * node + 1, delta, child_width)
                self.pending[node] = 0

    def _rebuild(self, leaf: int):
        """Recompute every ancestor of leaf from its children."""
        node = leaf
        width = 1
        while node > 1:
            node >>= 1
            width <<= 1
            self.values[node] = (
                self.values[2 * node]
                + self.values[2 * node + 1]
                + self.pending[node] * width
            )

    def update_range(self, left: int, right: int, delta: int):
        """
        Add delta to every element in the inclusive range [left, right].

        Args:
            left: First index (0-based, inclusive)
            right: Last index (0-based, inclusive)
            delta: Amount added to each element
        """
        left, right = self._check_range(left, right)
        delta = operator.index(delta)

        lo = left + self.capacity
        hi = right + self.capacity
        self._push_down(lo)
        self._push_down(hi)

        l, r = lo, hi
        width = 1
        while l <= r:
            if l % 2 == 1:
                self._apply(l, delta, width)
                l += 1
            if r % 2 == 0:
                self._apply(r, delta, width)
                r -= 1
            l //= 2
            r //= 2
            width *= 2

        self._rebuild(lo)
        self._rebuild(hi)

    def query_range_sum(self, left: int, right: int) -> int:
        """
        Sum of the elements in the inclusive range [left, right].

        Args:
            left: First index (0-based, inclusive)
            right: Last index (0-based, inclusive)

        Returns:
            Exact sum reflecting every update applied so far
        """
        left, right = self._check_range(left, right)

        l = left + self.capacity
        r = right + self.capacity
        self._push_down(l)
        self._push_down(r)

        total = 0
        while l <= r:
            if l % 2 == 1:
                total += int(self.values[l])
                l += 1
            if r % 2 == 0:
                total += int(self.values[r])
                r -= 1
            l //= 2
            r //= 2
        return total

    def to_list(self) -> List[int]:
        """Current array contents with all pending updates applied."""
        for node in range(1, self.capacity):
            delta = self.pending[node]
            if delta != 0:
                child_width = (self.capacity >> (node.bit_length() - 1)) // 2
                self._apply(2 * node, delta, child_width)
                self._apply(2 * node + 1, delta, child_width)
                self.pending[node] = 0
        return [int(v) for v in self.values[self.capacity:self.capacity + self.size]]

    def stats(self) -> Dict:
        """Get statistics about the tree buffers."""
        return {
            'size': self.size,
            'capacity': self.capacity,
            'height': self.height,
            'pending_nodes': int(np.count_nonzero(self.pending)),
            'total': int(self.values[1]) if self.size else 0,
        }
