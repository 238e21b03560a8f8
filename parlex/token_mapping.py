"""Dense integer ids for the token kinds a lexer can produce."""

import sys
from enum import Enum
from typing import NamedTuple

from arsenal import Integerizer


class TokenType(Enum):
    USER_DEFINED = 'user_defined'
    INVALID = 'invalid'
    START_OF_INPUT = 'start_of_input'
    END_OF_INPUT = 'end_of_input'


class Token(NamedTuple):
    type: TokenType
    name: str

    @classmethod
    def user(cls, name):
        return cls(TokenType.USER_DEFINED, name)

    def __str__(self):
        if self.type is TokenType.USER_DEFINED:
            return self.name
        return f'<{self.name}>'


Token.INVALID = Token(TokenType.INVALID, 'invalid')
Token.START_OF_INPUT = Token(TokenType.START_OF_INPUT, 'start of input')
Token.END_OF_INPUT = Token(TokenType.END_OF_INPUT, 'end of input')


class TokenMapping:
    """
    Assigns each distinct :class:`Token` an id in insertion order.

    >>> tm = TokenMapping()
    >>> tm.insert(Token.user('ident'))
    0
    >>> tm.token_id(Token.user('ident'))
    0
    """

    def __init__(self, tokens=()):
        self._ids = Integerizer()
        for token in tokens:
            self.insert(token)

    def insert(self, token):
        return self._ids(token)

    def contains(self, token):
        return token in self._ids

    __contains__ = contains

    def token_id(self, token):
        if token not in self._ids:
            raise KeyError(f'Unknown token {token!r}')
        return self._ids(token)

    def num_tokens(self):
        return len(self._ids)

    __len__ = num_tokens

    def __iter__(self):
        return iter(self._ids)

    def backing_type_bits(self):
        "Width of the smallest unsigned integer type that holds every id."
        for bits in (8, 16, 32, 64):
            if self.num_tokens() <= 1 << bits:
                return bits
        raise OverflowError(self.num_tokens())

    def print_tokens(self, out=sys.stdout):
        for i, token in enumerate(self._ids):
            print(f'{i}: {token}', file=out)
