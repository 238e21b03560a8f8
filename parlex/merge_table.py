"""
Growable dense square table for merging parallel functions.

The number of canonical functions is not known until the closure is done, but
cells are addressed at arbitrary ``(first, second)`` pairs, so the table is a
single flat buffer with an explicit stride::

    index(first, second) = first + second * capacity

``capacity`` only ever grows.  Growing allocates fresh buffers and copies every
logical cell across at the new stride, so ids handed out earlier stay valid.
"""

from __future__ import annotations

import numpy as np

from parlex.base import Transition
from parlex.config import REJECT, BuildConfig


class MergeTable:
    """``CanonicalId × CanonicalId → (CanonicalId, produces_lexeme)``.

    Two parallel numpy buffers hold the result ids and the flags.  Cells
    that were never set read as ``(REJECT, False)``.
    """

    def __init__(self, min_capacity: int = 8, grow_factor: int = 2):
        assert min_capacity >= 1 and grow_factor >= 2
        self.min_capacity = min_capacity
        self.grow_factor = grow_factor
        self.num_states = 0
        self.capacity = 0
        self._result = np.full(0, REJECT, dtype=np.int32)
        self._produces = np.zeros(0, dtype=bool)

    @classmethod
    def from_config(cls, config: BuildConfig) -> MergeTable:
        return cls(min_capacity=config.min_capacity, grow_factor=config.grow_factor)

    def ensure_capacity(self, new_num_states: int) -> None:
        "Make the logical size at least ``new_num_states``, growing the buffers if needed."
        if new_num_states <= self.num_states:
            return
        if new_num_states <= self.capacity:
            self.num_states = new_num_states
            return

        new_capacity = max(self.min_capacity, self.capacity)
        while new_capacity < new_num_states:
            new_capacity *= self.grow_factor

        result = np.full(new_capacity * new_capacity, REJECT, dtype=np.int32)
        produces = np.zeros(new_capacity * new_capacity, dtype=bool)

        n = self.num_states
        if n:
            # Viewed as a matrix, the flat buffer is indexed [second, first].
            old_result = self._result.reshape(self.capacity, self.capacity)
            old_produces = self._produces.reshape(self.capacity, self.capacity)
            result.reshape(new_capacity, new_capacity)[:n, :n] = old_result[:n, :n]
            produces.reshape(new_capacity, new_capacity)[:n, :n] = old_produces[:n, :n]

        self.num_states = new_num_states
        self.capacity = new_capacity
        self._result = result
        self._produces = produces

    def index(self, first: int, second: int) -> int:
        assert 0 <= first < self.num_states, (first, self.num_states)
        assert 0 <= second < self.num_states, (second, self.num_states)
        return first + second * self.capacity

    def get(self, first: int, second: int) -> Transition:
        k = self.index(first, second)
        return Transition(int(self._result[k]), bool(self._produces[k]))

    def set(self, first: int, second: int, value: tuple[int, bool]) -> None:
        result_state, produces_lexeme = value
        k = self.index(first, second)
        self._result[k] = result_state
        self._produces[k] = produces_lexeme

    def __getitem__(self, key):
        return self.get(*key)

    def __setitem__(self, key, value):
        self.set(*key, value)

    def states(self) -> int:
        return self.num_states

    def __len__(self):
        return self.num_states

    def as_array(self) -> tuple[np.ndarray, np.ndarray]:
        """Copy of the logical table as two ``n × n`` arrays indexed ``[first, second]``."""
        n = self.num_states
        # The flat buffer is laid out with `second` as the major axis.
        result = self._result.reshape(self.capacity, self.capacity)[:n, :n].T.copy()
        produces = self._produces.reshape(self.capacity, self.capacity)[:n, :n].T.copy()
        return result, produces

    def __repr__(self):
        return f'<{self.__class__.__name__} states={self.num_states} capacity={self.capacity}>'
