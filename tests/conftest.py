"""Shared fixtures: hand-written 2-3-4 trees and a random balanced generator."""

import random

import pytest

from btree import BTree


def random_balanced_nested(rng, depth):
    """
    Nested list form of a random 2-3-4 tree with every leaf at ``depth``.

    Items are filled in B-tree in-order, so they come out sorted
    and consecutive starting at 0.
    """
    counter = [0]

    def _shape(d):
        n = rng.randint(1, 3)
        return (n, [] if d == depth else [_shape(d + 1) for _ in range(n + 1)])

    def _fill(shape):
        n, kids = shape
        if not kids:
            items = list(range(counter[0], counter[0] + n))
            counter[0] += n
            return items
        items, children = [], []
        for i in range(n):
            children.append(_fill(kids[i]))
            items.append(counter[0])
            counter[0] += 1
        children.append(_fill(kids[n]))
        return (items, children)

    return _fill(_shape(0))


@pytest.fixture
def scenario_c():
    """2-item root [3, 7] over leaves [1], [5], [9]."""
    return BTree.from_nested(([3, 7], [[1], [5], [9]]))


@pytest.fixture
def mixed_tree():
    """Height-3 tree mixing 1-, 2- and 3-item nodes."""
    return BTree.from_nested(
        ([20], [
            ([5, 10, 15], [[1, 2], [6], [11, 12, 13], [16, 17]]),
            ([30, 40], [[25], [33, 36], [45, 50, 55]]),
        ]))


@pytest.fixture
def random_trees():
    """Fifty random balanced 2-3-4 trees of depth 0..4."""
    rng = random.Random(234)
    return [BTree.from_nested(random_balanced_nested(rng, rng.randint(0, 4)))
            for _ in range(50)]
