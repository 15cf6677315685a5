"""
Selection model - Grammar rules for clauses and selectors, and typed results

A full input is a slash-separated list of clauses:

    org 123 / deduction latest 1000, sort created_at desc

Each clause names a table followed by comma-separated selectors. A selector
is a keyword token followed by argument tokens up to the next ',' or '/'.
"""

from typing import List, Sequence as SequenceOf
from dataclasses import dataclass, field

from loguru import logger

from .config import (
    CLAUSE_SEPARATOR, SELECTOR_SEPARATOR,
    KEYWORD_RAND, KEYWORD_LATEST, KEYWORD_LIMIT, KEYWORD_SORT, SORT_DESCENDING,
)
from .parser import ParseError, TokenStream, SelectionArgs, Punctuated, parse_comma, parse_slash


# ============================================================================
# Selectors (typed)
# ============================================================================

class Selector:
    """Base class for row filter/limit rules on one table"""
    pass


@dataclass
class Id(Selector):
    """Select the row with this primary key"""
    value: str


@dataclass
class Rand(Selector):
    """Select N random rows"""
    count: int


@dataclass
class Latest(Selector):
    """Select the N most recent rows"""
    count: int


@dataclass
class Limit(Selector):
    """Select at most N rows"""
    count: int


@dataclass
class Sort(Selector):
    """Order rows by column"""
    column: str
    descending: bool = False


@dataclass
class Expr(Selector):
    """Free-form filter expression (placeholder, carries no data)"""
    pass


@dataclass
class Selection:
    """One table and the selectors applied to it, in input order"""
    table: str
    selectors: List[Selector] = field(default_factory=list)


# ============================================================================
# Raw forms (parse results before conversion)
# ============================================================================

def _count(keyword: str, text: str) -> int:
    # An optional leading plus sign is accepted
    digits = text[1:] if text.startswith('+') else text
    if not (digits.isascii() and digits.isdigit()):
        raise ParseError(f"expected a non-negative integer after '{keyword}', got {text!r}")
    return int(text)


@dataclass
class RawSelector:
    """Keyword token plus its argument tokens"""
    keyword: str
    args: List[str]

    def to_selector(self) -> Selector:
        if not self.args:
            return Id(self.keyword)
        elif self.keyword == KEYWORD_RAND:
            return Rand(_count(self.keyword, self.args[0]))
        elif self.keyword == KEYWORD_LATEST:
            return Latest(_count(self.keyword, self.args[0]))
        elif self.keyword == KEYWORD_LIMIT:
            return Limit(_count(self.keyword, self.args[0]))
        elif self.keyword == KEYWORD_SORT:
            descending = len(self.args) > 1 and self.args[1] == SORT_DESCENDING
            return Sort(self.args[0], descending)
        else:
            return Expr()


@dataclass
class RawSelection:
    """Table token plus its raw selectors"""
    table: str
    selectors: List[RawSelector]

    def to_selection(self) -> Selection:
        return Selection(self.table, [s.to_selector() for s in self.selectors])


# ============================================================================
# Grammar rules
# ============================================================================

def _is_argument(token: str) -> bool:
    return token != SELECTOR_SEPARATOR and token != CLAUSE_SEPARATOR


def parse_selector(stream: TokenStream) -> RawSelector:
    """selector := KEYWORD arg*"""
    tt = stream.clone()
    keyword = tt.next()
    if keyword is None:
        raise ParseError("expected selector, got nothing")
    if keyword == CLAUSE_SEPARATOR:
        raise ParseError(f"expected selector, got '{CLAUSE_SEPARATOR}'")
    args = []
    while True:
        token = tt.next_if(_is_argument)
        if token is None:
            break
        args.append(token)
    stream.commit(tt)
    return RawSelector(keyword, args)


parse_selector_list = Punctuated(parse_comma, parse_selector)


def parse_selection(stream: TokenStream) -> RawSelection:
    """clause := TABLE_NAME selector_list"""
    tt = stream.clone()
    table = tt.next()
    if table is None:
        raise ParseError("expected table name, got nothing")
    selectors = parse_selector_list(tt)
    stream.commit(tt)
    return RawSelection(table, selectors)


parse_selection_list = Punctuated(parse_slash, parse_selection)


def parse_stream(stream: TokenStream) -> List[Selection]:
    """Parse a whole token stream into typed selections.

    Nothing is returned unless every token is consumed and every selector
    converts cleanly.
    """
    tt = stream.clone()
    raw = parse_selection_list(tt)
    if not tt.at_end():
        raise ParseError(f"unexpected token {tt.peek()!r}")
    selections = [r.to_selection() for r in raw]
    stream.commit(tt)
    return selections


def parse_selections(args: SequenceOf[str]) -> List[Selection]:
    """Parse shell-split argument strings into typed selections"""
    selection_args = SelectionArgs(args)
    selections = parse_stream(selection_args.token_stream())
    logger.debug("parsed {} selections: {}", len(selections),
                 [s.table for s in selections])
    return selections
