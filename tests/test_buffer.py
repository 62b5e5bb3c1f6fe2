"""
Tests for the bounded series buffer.
"""

import pytest
import numpy as np

from pendulum_sim.buffer import SeriesBuffer


@pytest.fixture
def small_buffer():
    return SeriesBuffer(5)


def test_starts_empty(small_buffer):
    assert small_buffer.get() == []
    assert len(small_buffer) == 0
    assert small_buffer.last() is None
    assert small_buffer.as_array().shape == (0, 2)


@pytest.mark.parametrize("capacity", [0, -3, 2.5, True])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        SeriesBuffer(capacity)


def test_preserves_insertion_order(small_buffer):
    small_buffer.add(0.0, 1.0)
    small_buffer.add(0.1, 2.0)
    assert small_buffer.get() == [(0.0, 1.0), (0.1, 2.0)]
    assert small_buffer.last() == (0.1, 2.0)


@pytest.mark.parametrize("n_inserted", [5, 6, 17, 200])
def test_cap_keeps_most_recent_entries(small_buffer, n_inserted):
    samples = [(float(i), float(i * i)) for i in range(n_inserted)]
    for x, y in samples:
        small_buffer.add(x, y)
        assert len(small_buffer) <= small_buffer.max_points

    assert small_buffer.get() == samples[-5:]


def test_clear_then_reuse(small_buffer):
    for i in range(8):
        small_buffer.add(i, -i)
    small_buffer.clear()
    assert small_buffer.get() == []

    small_buffer.add(1.0, 2.0)
    assert small_buffer.get() == [(1.0, 2.0)]


def test_get_returns_snapshot(small_buffer):
    small_buffer.add(0.0, 0.0)
    snap = small_buffer.get()
    small_buffer.add(1.0, 1.0)
    assert snap == [(0.0, 0.0)]
    assert len(small_buffer) == 2


def test_as_array(small_buffer):
    small_buffer.add(0.5, -1.0)
    small_buffer.add(1.5, 2.0)
    np.testing.assert_array_equal(
        small_buffer.as_array(), np.array([[0.5, -1.0], [1.5, 2.0]])
    )
    assert list(small_buffer) == [(0.5, -1.0), (1.5, 2.0)]
