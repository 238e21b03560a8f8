from typing import NamedTuple

from parlex.config import REJECT


class Transition(NamedTuple):
    """Outcome of stepping from one state: where we land, and whether the
    step closed a lexeme."""
    result_state: int = REJECT
    produces_lexeme: bool = False


class ParallelFunction:
    r"""
    A function from automaton state to :class:`Transition`, stored densely as
    a tuple indexed by source state.

    Reading a string $x_1 \cdots x_n$ with the automaton amounts to composing
    the functions of its characters,

    $$f_{x_1 \cdots x_n} = f_{x_1} \cdot f_{x_2} \cdots f_{x_n}$$

    where $(f \cdot g)(s) = g(f(s).\mathrm{result\_state})$.  Composition is
    associative but not commutative, which is what lets a parallel scan
    replace the sequential simulation.

    Two functions with the same entries are equal and hash alike, so they can
    be interned.
    """

    __slots__ = ('transitions', '_hash')

    def __init__(self, transitions):
        self.transitions = tuple(transitions)
        self._hash = hash(self.transitions)

    @classmethod
    def reject(cls, num_states):
        "The function sending every state to REJECT."
        return cls([Transition()] * num_states)

    @classmethod
    def identity(cls, num_states):
        return cls(Transition(s, False) for s in range(num_states))

    def __len__(self):
        return len(self.transitions)

    def __getitem__(self, state):
        assert state >= 0, 'use apply() to look up REJECT'
        return self.transitions[state]

    def __iter__(self):
        return iter(self.transitions)

    def apply(self, state):
        if state == REJECT:
            return Transition()
        return self.transitions[state]

    def merge(self, other):
        "Apply `self`, then `other`."
        assert len(self) == len(other), (len(self), len(other))
        return ParallelFunction(other.apply(t.result_state) for t in self.transitions)

    __mul__ = merge

    def __eq__(self, other):
        return isinstance(other, ParallelFunction) and self.transitions == other.transitions

    def __hash__(self):
        return self._hash

    def __repr__(self):
        def fmt(t):
            r = '⊥' if t.result_state == REJECT else t.result_state
            return f'{r}!' if t.produces_lexeme else f'{r}'
        return '[%s]' % ', '.join(f'{s}→{fmt(t)}' for s, t in enumerate(self.transitions))
