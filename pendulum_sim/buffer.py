"""
buffer.py

Fixed-capacity FIFO of (x, y) samples feeding the time-series and
phase-space displays.
"""

from collections import deque
from typing import List, Optional, Tuple

import numpy as np


Sample = Tuple[float, float]


class SeriesBuffer:
    """
    Chronological buffer of (x, y) pairs holding at most `max_points` entries.

    Once full, every insertion evicts the single oldest entry. Entries are
    never modified after insertion.
    """

    def __init__(self, max_points: int = 200):
        """
        Args:
            max_points: Capacity of the buffer, a positive integer.
        """
        if isinstance(max_points, bool) or int(max_points) != max_points or max_points <= 0:
            raise ValueError(f"max_points must be a positive integer, got {max_points}")
        self._max_points = int(max_points)
        self._data = deque(maxlen=self._max_points)

    @property
    def max_points(self) -> int:
        return self._max_points

    def add(self, x: float, y: float) -> None:
        self._data.append((float(x), float(y)))

    def clear(self) -> None:
        self._data.clear()

    def get(self) -> List[Sample]:
        """Returns a snapshot list of the stored samples, oldest first."""
        return list(self._data)

    def as_array(self) -> np.ndarray:
        """Returns the samples as an array of shape (n, 2)."""
        if not self._data:
            return np.empty((0, 2))
        return np.array(self._data, dtype=float)

    def last(self) -> Optional[Sample]:
        """The most recent sample, or None if the buffer is empty."""
        return self._data[-1] if self._data else None

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return iter(self.get())

    def __repr__(self) -> str:
        return f"SeriesBuffer(max_points={self._max_points}, size={len(self)})"
