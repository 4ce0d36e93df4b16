"""
Text front end for expression trees.

Turns typed arithmetic such as a dimension value like ``sqrt(2)/2`` into an
expression tree without using eval().
"""

from .tokens import Token, TokenType
from .lexer import Lexer, lex, parse_number
from .parser import ShuntingYardParser, ParseResult, parse_tokens, parse_expression

__all__ = [
    'Token', 'TokenType', 'Lexer', 'lex', 'parse_number',
    'ShuntingYardParser', 'ParseResult', 'parse_tokens', 'parse_expression'
]
