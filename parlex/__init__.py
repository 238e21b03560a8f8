from parlex.config import MAX_SYM, START, REJECT, BuildConfig
from parlex.base import Transition, ParallelFunction
from parlex.merge_table import MergeTable
from parlex.dfa import LexerDFA
from parlex.parallel_lexer import FunctionRegistry, ParallelLexer
from parlex.token_mapping import Token, TokenType, TokenMapping

from arsenal import colors


def check_properties(lexer, throw=False):
    """Verify the algebra built by `lexer` and print a report.

    Checks that the merge table is closed, that the identity is a two-sided
    unit, that every cell agrees with sequential simulation from every
    automaton state, and that no function was interned twice.
    """
    functions = lexer.functions
    table = lexer.merge_table
    n = len(functions)
    e = lexer.identity_state_index

    ok = True
    print('check properties:')

    z = table.states() == n and all(
        0 <= table.get(i, j).result_state < n for i in range(n) for j in range(n)
    )
    print('├─', colors.mark(z), f'merge table closed over {n} functions')
    ok &= z

    z = all(table.get(e, x).result_state == x and table.get(x, e).result_state == x for x in range(n))
    print('├─', colors.mark(z), 'identity laws')
    ok &= z

    bad = []
    for i in range(n):
        for j in range(n):
            cell = table.get(i, j)
            f = functions[cell.result_state]
            if cell.produces_lexeme != f[START].produces_lexeme:
                bad.append((i, j))
                continue
            # The identity is a unit on either side; every other pair composes.
            if i == e:
                expect = functions[j]
            elif j == e:
                expect = functions[i]
            else:
                expect = functions[i] * functions[j]
            if f != expect:
                bad.append((i, j))
    z = not bad
    print('├─', colors.mark(z), 'merges agree with sequential composition')
    for i, j in bad[:5]:
        print('│  ', colors.light.red % 'mismatch', (i, j))
    ok &= z

    # The identity is tagged apart, so only it may repeat the content of
    # another function.
    z = len({f for x, f in enumerate(functions) if x != e}) == n - 1
    print('├─', colors.mark(z), 'functions are unique')
    ok &= z

    print('└─ overall:', colors.mark(ok))
    assert not throw or ok
    return ok
