"""Tests for LexerDFA, the automaton consumed by ParallelLexer."""

import pytest

from parlex import LexerDFA, Transition, Token, START, REJECT
from parlex.dfa import as_symbol
from parlex import examples


def test_as_symbol():
    assert as_symbol(97) == 97
    assert as_symbol('a') == 97
    assert as_symbol(b'a') == 97
    assert as_symbol('\xff') == 255
    for bad in [256, -1, 'ab', '', b'', 'λ', 1.0]:
        with pytest.raises(ValueError):
            as_symbol(bad)


def test_construction():
    m = LexerDFA(2)
    assert m.num_states() == 2
    s = m.add_state(Token.user('x'))
    assert s == 2
    m.add(START, 'x', s)
    m.add(s, 'x', s, produces_lexeme=True)
    assert set(m.arcs(START)) == {(ord('x'), s, False)}
    assert set(m.arcs()) == {(START, ord('x'), s, False), (s, ord('x'), s, True)}
    assert m.syms == {ord('x')}
    assert m.lexeme(s) == Token.user('x')
    assert m.is_final(s)
    assert not m.is_final(START)
    assert m.lexeme(REJECT) is None


def test_not_deterministic():
    m = LexerDFA(2)
    m.add(0, 'a', 1)
    with pytest.raises(ValueError):
        m.add(0, 'a', 0)


def test_needs_a_start_state():
    with pytest.raises(ValueError):
        LexerDFA(0)


def test_unknown_state():
    m = LexerDFA(2)
    with pytest.raises(ValueError):
        m.add(0, 'a', 2)
    with pytest.raises(ValueError):
        m.set_lexeme(5, Token.user('a'))


def test_run():
    m = examples.ident_ws()
    assert m.run('') == Transition(START, False)
    assert m.run(b'ab') == Transition(1, False)
    assert m.run('ab ') == Transition(2, True)
    assert m.run('ab?') == Transition(REJECT, False)
    assert m.run('ab?a') == Transition(REJECT, False)
    assert m.step(REJECT, 'a') == Transition()


def test_restart_edges():
    m = examples.single_a(restart=False)
    assert list(m.arcs(1)) == []
    examples.add_restart_edges(m)
    assert list(m.arcs(1)) == [(ord('a'), 1, True)]


def test_repr():
    r = repr(examples.single_a())
    assert '^0:' in r
    assert "'a' -> 1 !" in r


def test_graphviz():
    g = examples.keywords().graphviz()
    src = g.source
    assert 'if' in src
    assert 'peripheries=2' in src
    assert 'dashed' in src
