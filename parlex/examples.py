import random

from parlex.config import START
from parlex.dfa import LexerDFA
from parlex.token_mapping import Token


def add_restart_edges(dfa):
    """Let every accepting state begin a new lexeme.

    Wherever an accepting state has no edge on a symbol that START does,
    add one to START's successor that produces a lexeme.
    """
    start_arcs = {a: j for a, j, _ in dfa.arcs(START)}
    for i in range(dfa.num_states()):
        if not dfa.is_final(i):
            continue
        for a, j in start_arcs.items():
            if a not in dfa.edges[i]:
                dfa.add(i, a, j, produces_lexeme=True)
    return dfa


def single_a(restart=True):
    "Lexes 'a' as a one-character token."
    m = LexerDFA(2)
    m.add(START, 'a', 1, produces_lexeme=True)
    m.set_lexeme(1, Token.user('a'))
    if restart:
        m.add(1, 'a', 1, produces_lexeme=True)
    return m


def trivial():
    "A single state that lexes every 'x' as a token."
    m = LexerDFA(1)
    m.add(START, 'x', START, produces_lexeme=True)
    m.set_lexeme(START, Token.user('x'))
    return m


def ident_ws(letters='abc', spaces=' '):
    "Identifiers over `letters` separated by runs of `spaces`."
    m = LexerDFA(3)
    m.set_lexeme(1, Token.user('ident'))
    m.set_lexeme(2, Token.user('ws'))
    for a in letters:
        m.add(START, a, 1)
        m.add(1, a, 1)
    for a in spaces:
        m.add(START, a, 2)
        m.add(2, a, 2)
    return add_restart_edges(m)


def keywords():
    "The keyword 'if' among identifiers over {i, f, x}, plus whitespace."
    ident = Token.user('ident')
    m = LexerDFA(5)
    m.set_lexeme(1, ident)
    m.set_lexeme(2, Token.user('if'))
    m.set_lexeme(3, ident)
    m.set_lexeme(4, Token.user('ws'))
    m.add(START, 'i', 1)
    m.add(START, 'f', 3)
    m.add(START, 'x', 3)
    m.add(1, 'f', 2)
    m.add(1, 'i', 3)
    m.add(1, 'x', 3)
    for a in 'ifx':
        m.add(2, a, 3)
        m.add(3, a, 3)
    m.add(START, ' ', 4)
    m.add(4, ' ', 4)
    return add_restart_edges(m)


def arith():
    "Integers, the four operators, parentheses and spaces."
    m = LexerDFA(1)
    number = m.add_state(Token.user('number'))
    space = m.add_state(Token.user('space'))
    for d in '0123456789':
        m.add(START, d, number)
        m.add(number, d, number)
    m.add(START, ' ', space)
    m.add(space, ' ', space)
    for op in '+-*/()':
        m.add(START, op, m.add_state(Token.user(op)))
    return add_restart_edges(m)


def random_dfa(num_states, alphabet='ab', seed=0, density=0.7, final=0.4):
    "A random automaton; edges produce lexemes at random."
    rng = random.Random(seed)
    m = LexerDFA(num_states)
    for i in range(num_states):
        if rng.random() < final:
            m.set_lexeme(i, Token.user(f'tok{i}'))
        for a in alphabet:
            if rng.random() < density:
                m.add(i, a, rng.randrange(num_states), produces_lexeme=rng.random() < 0.3)
    return m
