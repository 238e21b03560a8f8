import io

import pytest

from parlex import Token, TokenType, TokenMapping


def test_insert_and_ids():
    tm = TokenMapping()
    assert tm.insert(Token.user('ident')) == 0
    assert tm.insert(Token.END_OF_INPUT) == 1
    assert tm.insert(Token.user('ident')) == 0
    assert tm.num_tokens() == 2
    assert tm.token_id(Token.END_OF_INPUT) == 1
    assert tm.contains(Token.user('ident'))
    assert Token.INVALID not in tm


def test_unknown_token():
    tm = TokenMapping([Token.user('a')])
    with pytest.raises(KeyError):
        tm.token_id(Token.user('b'))
    # a failed lookup must not insert
    assert tm.num_tokens() == 1


def test_special_tokens_differ_from_user_tokens():
    assert Token.INVALID.type is TokenType.INVALID
    assert Token.user('invalid') != Token.INVALID
    assert Token.START_OF_INPUT != Token.END_OF_INPUT


def test_backing_type_bits():
    tm = TokenMapping()
    assert tm.backing_type_bits() == 8
    for i in range(256):
        tm.insert(Token.user(str(i)))
    assert tm.backing_type_bits() == 8
    tm.insert(Token.INVALID)
    assert tm.backing_type_bits() == 16


def test_print_tokens():
    tm = TokenMapping([Token.user('number'), Token.END_OF_INPUT])
    out = io.StringIO()
    tm.print_tokens(out)
    assert out.getvalue() == '0: number\n1: <end of input>\n'
