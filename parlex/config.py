"""Constants and build configuration for the parallel lexer tables."""

from dataclasses import dataclass


# Input symbols are bytes: every value in 0..MAX_SYM gets an initial function.
MAX_SYM = 255

# Automaton states are small ints; the start state is always 0.
START = 0

# Sentinel "state" reached after an invalid transition.  It has no outgoing
# edges, so looking it up in any function yields (REJECT, False).
REJECT = -1


@dataclass
class BuildConfig:
    """Knobs for building the merge table.

    Attributes
    ----------
    min_capacity : int
        Capacity of the merge table on its first allocation. Default: 8.
    grow_factor : int
        Multiplicative growth of the merge table capacity. Default: 2.
    progress : bool
        Show a tqdm progress bar while closing the merge table. Default: False.
    """

    min_capacity: int = 8
    grow_factor: int = 2
    progress: bool = False

    def __post_init__(self):
        assert self.min_capacity >= 1, self.min_capacity
        assert self.grow_factor >= 2, self.grow_factor
