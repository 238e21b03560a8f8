"""Tests for MergeTable: bounds checks, growth and data preservation."""

import numpy as np
import pytest

from parlex import MergeTable, Transition, REJECT, BuildConfig


def fill(table, n):
    for i in range(n):
        for j in range(n):
            table.set(i, j, (i * 100 + j, (i + j) % 2 == 0))


def test_empty():
    table = MergeTable()
    assert table.states() == 0
    assert table.capacity == 0
    with pytest.raises(AssertionError):
        table.get(0, 0)


def test_first_allocation_uses_min_capacity():
    table = MergeTable(min_capacity=8, grow_factor=2)
    table.ensure_capacity(1)
    assert table.states() == 1
    assert table.capacity == 8


def test_grows_by_factor():
    table = MergeTable(min_capacity=4, grow_factor=2)
    table.ensure_capacity(5)
    assert table.capacity == 8
    table.ensure_capacity(9)
    assert table.capacity == 16
    table.ensure_capacity(100)
    assert table.capacity == 128


def test_within_capacity_only_moves_logical_size():
    table = MergeTable(min_capacity=8)
    table.ensure_capacity(2)
    table.ensure_capacity(7)
    assert table.capacity == 8
    assert table.states() == 7


def test_never_shrinks():
    table = MergeTable()
    table.ensure_capacity(5)
    table.ensure_capacity(2)
    assert table.states() == 5


def test_unset_cells_are_reject():
    table = MergeTable()
    table.ensure_capacity(3)
    assert table.get(2, 1) == Transition(REJECT, False)


def test_set_get():
    table = MergeTable()
    table.ensure_capacity(3)
    table.set(0, 2, Transition(1, True))
    table[2, 0] = (2, False)
    assert table.get(0, 2) == Transition(1, True)
    assert table[2, 0] == Transition(2, False)
    # not symmetric
    assert table.get(2, 0) != table.get(0, 2)


def test_out_of_bounds():
    table = MergeTable(min_capacity=8)
    table.ensure_capacity(3)
    # Inside the buffer, but outside the logical table.
    with pytest.raises(AssertionError):
        table.get(3, 0)
    with pytest.raises(AssertionError):
        table.set(0, 3, (0, False))
    with pytest.raises(AssertionError):
        table.get(-1, 0)


def test_growth_preserves_data():
    table = MergeTable(min_capacity=2, grow_factor=2)
    table.ensure_capacity(2)
    fill(table, 2)
    for n in [3, 5, 9, 17, 40]:
        old = table.states()
        before = {(i, j): table.get(i, j) for i in range(old) for j in range(old)}
        table.ensure_capacity(n)
        assert table.states() == n
        for (i, j), value in before.items():
            assert table.get(i, j) == value
        # new cells are untouched
        assert table.get(n - 1, 0) == Transition()
        fill(table, n)


def test_stride_follows_capacity():
    table = MergeTable(min_capacity=4)
    table.ensure_capacity(3)
    assert table.index(1, 2) == 1 + 2 * 4
    table.ensure_capacity(5)
    assert table.index(1, 2) == 1 + 2 * 8


def test_as_array_orientation():
    table = MergeTable(min_capacity=2)
    table.ensure_capacity(3)
    fill(table, 3)
    result, produces = table.as_array()
    assert result.shape == produces.shape == (3, 3)
    assert result[0, 2] == 2
    assert result[2, 0] == 200
    assert produces.dtype == np.bool_
    for i in range(3):
        for j in range(3):
            assert table.get(i, j) == (result[i, j], produces[i, j])


def test_from_config():
    table = MergeTable.from_config(BuildConfig(min_capacity=3, grow_factor=3))
    table.ensure_capacity(4)
    assert table.capacity == 9


def test_bad_config():
    with pytest.raises(AssertionError):
        BuildConfig(grow_factor=1)
    with pytest.raises(AssertionError):
        BuildConfig(min_capacity=0)
