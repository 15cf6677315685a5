"""
dbseed - Seed a database from selected rows of another

Selections are written as a small command-line language, e.g.
"org 123 / deduction latest 1000".
"""

__version__ = '0.1.0'

from dbseed.parser import (
    ParseError, Span, Tokenizer, lex, TokenStream, SelectionArgs,
    parse_comma, parse_slash, parse_period, parse_gt, parse_lt,
    parse_comparator, parse_identifier, optional, Punctuated, Sequence,
)
from dbseed.selection import (
    Selector, Id, Rand, Latest, Limit, Sort, Expr, Selection,
    RawSelector, RawSelection, parse_selector, parse_selection,
    parse_stream, parse_selections,
)
from dbseed.sanitize import SanitizeConfig, TableConfig, ColumnConfig

__all__ = [
    'ParseError', 'Span', 'Tokenizer', 'lex', 'TokenStream', 'SelectionArgs',
    'parse_comma', 'parse_slash', 'parse_period', 'parse_gt', 'parse_lt',
    'parse_comparator', 'parse_identifier', 'optional', 'Punctuated', 'Sequence',
    'Selector', 'Id', 'Rand', 'Latest', 'Limit', 'Sort', 'Expr', 'Selection',
    'RawSelector', 'RawSelection', 'parse_selector', 'parse_selection',
    'parse_stream', 'parse_selections',
    'SanitizeConfig', 'TableConfig', 'ColumnConfig',
]
