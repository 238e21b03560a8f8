"""
Merge tables for lexing with a parallel scan.

A sequential lexer reads one byte at a time, so each step depends on the
state left by the previous one.  To lex in parallel we instead map every byte
``a`` to the function ``f_a`` that says, for each automaton state, where the
automaton goes on ``a`` and whether that step closes a lexeme.  These functions
compose associatively, so a prefix scan over ``f_{x_1}, ..., f_{x_n}`` yields the
state after every prefix.

Storing functions as tuples during the scan would be far too expensive.  There
are, however, usually few *distinct* functions reachable by composition, so we

1. intern every function and refer to it by a small integer id
   (:class:`FunctionRegistry`),
2. close the set of ids under composition, recording the id of every pairwise
   composition in a dense table (:class:`~parlex.merge_table.MergeTable`).

The scan then needs only three tables:

- ``initial_states[a]``: the id of ``f_a`` and whether ``a`` alone, read from
  START, closes a lexeme;
- ``merge_table(i, j)``: the id of ``f_i · f_j`` and whether its START entry
  closes a lexeme;
- ``final_states[i]``: the lexeme accepted after reading ``f_i`` from START.

Usage::

    from parlex import LexerDFA, ParallelLexer

    lexer = ParallelLexer(dfa)
    lexer.dump_sizes()
"""

from __future__ import annotations

import sys
from collections import deque
from typing import Any, Iterator

import numpy as np
import tqdm
from arsenal import Integerizer

from parlex.base import ParallelFunction, Transition
from parlex.config import MAX_SYM, REJECT, START, BuildConfig
from parlex.merge_table import MergeTable


IDENTITY = 'identity'


class FunctionRegistry:
    """Hash-consing of :class:`ParallelFunction` values.

    Structurally equal functions always get the same id; ids are handed out
    in discovery order starting at 0 and never change.  The functions
    themselves are kept in a list indexed by id.
    """

    def __init__(self):
        self._ids = Integerizer()
        self.functions: list[ParallelFunction] = []

    def intern(self, function: ParallelFunction, tag=None) -> tuple[int, bool]:
        """Returns ``(id, is_new)``; ``is_new`` is True the first time `function` is seen.

        A function interned with a `tag` is keyed by ``(tag, function)``: it
        never shares an id with the untagged function of the same content.
        """
        n = len(self.functions)
        i = self._ids(function if tag is None else (tag, function))
        if i == n:
            self.functions.append(function)
            return i, True
        return i, False

    def lookup(self, function: ParallelFunction) -> int | None:
        if function not in self._ids:
            return None
        return self._ids(function)

    def __contains__(self, function) -> bool:
        return function in self._ids

    def __getitem__(self, i: int) -> ParallelFunction:
        return self.functions[i]

    def __len__(self) -> int:
        return len(self.functions)

    def __iter__(self) -> Iterator[ParallelFunction]:
        return iter(self.functions)


class ParallelLexer:
    """Builds the initial-function, merge and final-lexeme tables for `dfa`.

    `dfa` only needs ``num_states()``, ``arcs(i)`` yielding
    ``(symbol, destination, produces_lexeme)`` and ``lexeme(i)``; see
    :class:`parlex.dfa.LexerDFA`.
    """

    def __init__(self, dfa, config: BuildConfig | None = None):
        self.dfa = dfa
        self.config = config if config is not None else BuildConfig()
        self.num_dfa_states = dfa.num_states()
        assert self.num_dfa_states >= 1, 'automaton has no start state'

        self.functions = FunctionRegistry()
        self.merge_table = MergeTable.from_config(self.config)
        self._pending: deque[int] = deque()

        self.initial_states: list[Transition] = self._build_initial_states()

        # The unit of the scan gets an id of its own, even when some symbol
        # leaves every state unchanged: that symbol still composes generically.
        identity = ParallelFunction.identity(self.num_dfa_states)
        self.identity_state_index, _ = self._enqueue(identity, tag=IDENTITY)

        self._close()

        self.final_states: list[Any] = [
            self._lexeme(f[START].result_state) for f in self.functions
        ]

    def _lexeme(self, state: int) -> Any:
        return None if state == REJECT else self.dfa.lexeme(state)

    def _enqueue(self, function: ParallelFunction, tag=None) -> tuple[int, bool]:
        i, is_new = self.functions.intern(function, tag)
        if is_new:
            self.merge_table.ensure_capacity(i + 1)
            self._pending.append(i)
        return i, is_new

    def _build_initial_states(self) -> list[Transition]:
        n = self.num_dfa_states
        table = [[Transition()] * n for _ in range(MAX_SYM + 1)]
        for src in range(n):
            for sym, dst, produces_lexeme in self.dfa.arcs(src):
                assert isinstance(sym, int) and 0 <= sym <= MAX_SYM, f'symbol {sym!r} out of range'
                assert 0 <= dst < n, f'transition {src} -> {dst} leaves the automaton'
                assert table[sym][src] == Transition(), f'two transitions from {src} on {sym!r}; not a DFA'
                table[sym][src] = Transition(dst, bool(produces_lexeme))

        initial_states = []
        for sym in range(MAX_SYM + 1):
            f = ParallelFunction(table[sym])
            i, _ = self._enqueue(f)
            initial_states.append(Transition(i, f[START].produces_lexeme))
        return initial_states

    def merge(self, i: int, j: int) -> Transition:
        """Compute (and intern, if new) the composition of functions `i` then `j`.

        The identity must be special-cased: the generic rule copies the
        flags of the right operand, which for the identity are all False.
        """
        if i == self.identity_state_index:
            result = j
        elif j == self.identity_state_index:
            result = i
        else:
            result, _ = self._enqueue(self.functions[i].merge(self.functions[j]))
        return Transition(result, self.functions[result][START].produces_lexeme)

    def _close(self) -> None:
        # Invariant: every pair of ids in `done` has both of its merges in the
        # table.  Processing an id merges it against all of `done` (and
        # itself), which may discover new ids; those join the queue.
        done: list[int] = []
        pbar = tqdm.tqdm(desc='Generating merge table', disable=not self.config.progress)
        while self._pending:
            i = self._pending.popleft()
            done.append(i)
            for j in done:
                self.merge_table.set(i, j, self.merge(i, j))
                self.merge_table.set(j, i, self.merge(j, i))
            pbar.total = len(self.functions)
            pbar.update(1)
        pbar.close()
        assert len(done) == len(self.functions) == self.merge_table.states()

    # ── Output ─────────────────────────────────────────────────────────

    def num_functions(self) -> int:
        return len(self.functions)

    def combine(self, left: Transition, right: Transition) -> Transition:
        "The scan operator on ``(id, produces_lexeme)`` pairs."
        return self.merge_table.get(left.result_state, right.result_state)

    def tables(self) -> dict[str, Any]:
        """The three tables as arrays, ready to hand to a scan runtime."""
        merge_result, merge_produces = self.merge_table.as_array()
        return {
            'initial_result': np.array([t.result_state for t in self.initial_states], dtype=np.int32),
            'initial_produces': np.array([t.produces_lexeme for t in self.initial_states], dtype=bool),
            'merge_result': merge_result,
            'merge_produces': merge_produces,
            'final_states': list(self.final_states),
            'identity': self.identity_state_index,
        }

    def dump_sizes(self, out=sys.stdout) -> None:
        k = self.merge_table.states()
        print(f'Initial states table: {len(self.initial_states)} elements', file=out)
        print(f'Merge table: {k}² elements = {k * k} elements', file=out)
        print(f'Final states table: {len(self.final_states)} elements', file=out)

    def __repr__(self):
        return (f'<{self.__class__.__name__} dfa_states={self.num_dfa_states}'
                f' functions={len(self.functions)} identity={self.identity_state_index}>')
