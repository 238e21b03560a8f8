#!/usr/bin/env python3
"""End-to-end example: merge tables for an arithmetic lexer.

Demonstrates the pipeline a parallel lexer is built from:

  1. Build a lexer automaton for integers, operators and spaces
  2. Compile it into the initial, merge and final tables
  3. Verify the tables form a monoid that agrees with the automaton
  4. Lex a string by scanning the merge table, and compare with
     one-byte-at-a-time simulation

Key concept: each byte maps to a canonical function id, and the merge table
composes two ids in one lookup.  Because composition is associative, the
prefix results below could be computed by any parallel scan.

Usage:
    python examples/hello_world.py
"""

import itertools

from parlex import ParallelLexer, BuildConfig, check_properties, examples


def main():

    # --- Step 1: Build the automaton ---
    dfa = examples.arith()
    print(f'Automaton: {dfa.num_states()} state(s)')
    print()

    # --- Step 2: Compile the tables ---
    lexer = ParallelLexer(dfa, BuildConfig(progress=True))
    print(lexer)
    lexer.dump_sizes()
    print()

    # --- Step 3: Check the algebra ---
    check_properties(lexer, throw=True)
    print()

    # --- Step 4: Lex ---
    text = b'12 + (3*45)'
    prefixes = itertools.accumulate((lexer.initial_states[a] for a in text), lexer.combine)

    start = 0
    for k, t in enumerate(prefixes):
        # A lexeme ends right before byte k when the prefix through k produces one.
        if t.produces_lexeme and k > start:
            print(f'  {text[start:k]!r}')
            start = k
    print(f'  {text[start:]!r}')

    assert dfa.run(text).result_state == lexer.functions[t.result_state][0].result_state
    print('final lexeme:', lexer.final_states[t.result_state])


if __name__ == '__main__':
    main()
