"""
Selection Parser - Tokenizer, token cursor and backtracking parser combinators

This module provides:
- Tokenizer: Lexical analysis (argument strings → token spans)
- TokenStream: Duplicable forward cursor over the token list
- Matchers: Parse functions for punctuation, comparators and identifiers
- Punctuated / Sequence: Repetition combinators built on the matchers

Every parse function takes a TokenStream, returns the decoded value and
advances the stream past the recognized tokens. On failure it raises
ParseError and leaves the stream exactly where it was.
"""

from typing import Callable, List, Optional, Sequence as SequenceOf, TypeVar
from dataclasses import dataclass
import shlex

from loguru import logger

from .config import (
    DELIMITERS, CLAUSE_SEPARATOR, SELECTOR_SEPARATOR, PERIOD,
    GT_SPELLINGS, LT_SPELLINGS,
)

T = TypeVar('T')


class ParseError(Exception):
    """Raised when a grammar unit cannot be recognized"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"parse error: {self.message}"


# ============================================================================
# Tokenizer
# ============================================================================

@dataclass(frozen=True)
class Span:
    """Token boundaries inside one argument string"""
    arg: int    # Index of the argument the token came from
    start: int
    end: int

    def text(self, args: SequenceOf[str]) -> str:
        return args[self.arg][self.start:self.end]


class Tokenizer:
    """Lexical analyzer - splits argument strings into token spans"""

    def __init__(self, args: SequenceOf[str]):
        self.args = args
        self.spans: List[Span] = []

    def tokenize(self) -> List[Span]:
        """Split every argument, in order, into punctuation and runs"""
        self.spans = []
        for index, arg in enumerate(self.args):
            self._tokenize_arg(index, arg)
        return self.spans

    def _tokenize_arg(self, index: int, arg: str):
        last = 0
        for i, char in enumerate(arg):
            if char in DELIMITERS:
                # Flush the pending run, then the delimiter itself
                if last != i:
                    self.spans.append(Span(index, last, i))
                self.spans.append(Span(index, i, i + 1))
                last = i + 1
        if last < len(arg):
            self.spans.append(Span(index, last, len(arg)))


def lex(args: SequenceOf[str]) -> List[str]:
    """Tokenize argument strings into a flat list of token texts"""
    spans = Tokenizer(args).tokenize()
    return [span.text(args) for span in spans]


# ============================================================================
# Token Cursor
# ============================================================================

class TokenStream:
    """Forward-only cursor over an immutable token list"""

    def __init__(self, tokens: SequenceOf[str], position: int = 0):
        self.tokens = tokens
        self.position = position

    def __repr__(self):
        return f"TokenStream(position={self.position}, remaining={self.remaining()!r})"

    def clone(self) -> 'TokenStream':
        """Duplicate the cursor; the token list is shared, not copied"""
        return TokenStream(self.tokens, self.position)

    def commit(self, fork: 'TokenStream'):
        """Move this cursor to where a clone of it has advanced"""
        if fork.tokens is not self.tokens:
            raise ValueError("Cannot commit a cursor over a different token list")
        self.position = fork.position

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def remaining(self) -> List[str]:
        return list(self.tokens[self.position:])

    def peek(self) -> Optional[str]:
        """Return the next token without consuming it (None when exhausted)"""
        if self.at_end():
            return None
        return self.tokens[self.position]

    def next(self) -> Optional[str]:
        """Consume and return the next token (None when exhausted)"""
        token = self.peek()
        if token is not None:
            self.position += 1
        return token

    def next_if(self, predicate: Callable[[str], bool]) -> Optional[str]:
        """Consume the next token only if predicate(token) holds"""
        token = self.peek()
        if token is None or not predicate(token):
            return None
        self.position += 1
        return token


class SelectionArgs:
    """Owns the raw argument strings and their token spans"""

    def __init__(self, args: SequenceOf[str]):
        self.args = list(args)
        self.spans = Tokenizer(self.args).tokenize()
        logger.debug("lexed {} tokens from {} arguments", len(self.spans), len(self.args))

    @classmethod
    def from_shell(cls, line: str) -> 'SelectionArgs':
        """Split one command line the way a POSIX shell would"""
        return cls(shlex.split(line))

    @property
    def tokens(self) -> List[str]:
        return [span.text(self.args) for span in self.spans]

    def token_stream(self) -> TokenStream:
        return TokenStream(self.tokens)


# ============================================================================
# Primitive Matchers
# ============================================================================

def _describe(token: Optional[str]) -> str:
    return "nothing" if token is None else repr(token)


def _spelled(spellings: SequenceOf[str], name: str) -> Callable[[TokenStream], str]:
    """Build a matcher for one token with any of the given spellings.

    The first spelling is the canonical one and is what the matcher returns.
    """

    def parse(stream: TokenStream) -> str:
        tt = stream.clone()
        token = tt.next()
        if token not in spellings:
            raise ParseError(f"expected {name}, got {_describe(token)}")
        stream.commit(tt)
        return spellings[0]

    parse.__name__ = f"parse_{name}"
    return parse


parse_comma = _spelled((SELECTOR_SEPARATOR,), 'comma')
parse_slash = _spelled((CLAUSE_SEPARATOR,), 'slash')
parse_period = _spelled((PERIOD,), 'period')
parse_gt = _spelled(GT_SPELLINGS, 'gt')
parse_lt = _spelled(LT_SPELLINGS, 'lt')


def parse_comparator(stream: TokenStream) -> str:
    """Match '>'/'gt' or '<'/'lt', returning the symbol"""
    for matcher in (parse_gt, parse_lt):
        try:
            return matcher(stream)
        except ParseError:
            continue
    raise ParseError(f"expected comparator, got {_describe(stream.peek())}")


def parse_identifier(stream: TokenStream) -> str:
    """Match one token made only of alphanumerics and underscores"""
    tt = stream.clone()
    token = tt.next()
    if token is None:
        raise ParseError("expected identifier, got nothing")
    if not all(c.isalnum() or c == '_' for c in token):
        raise ParseError(f"expected identifier, got {token!r}")
    stream.commit(tt)
    return token


def optional(parser: Callable[[TokenStream], T], stream: TokenStream) -> Optional[T]:
    """Attempt parser once; a failure is discarded and yields None"""
    try:
        return parser(stream)
    except ParseError:
        return None


# ============================================================================
# Combinators
# ============================================================================

class Punctuated:
    """Items optionally separated by a delimiter. Never fails.

    At most one leading delimiter is skipped. After each item one trailing
    delimiter is skipped if present. Repetition ends at the first item that
    fails to parse, leaving the cursor just past the last item or delimiter.
    An item that succeeds without consuming anything also ends it.
    """

    def __init__(self, delimiter: Callable[[TokenStream], object],
                 item: Callable[[TokenStream], T]):
        self.delimiter = delimiter
        self.item = item

    def __call__(self, stream: TokenStream) -> List[T]:
        return self.parse(stream)

    def parse(self, stream: TokenStream) -> List[T]:
        tt = stream.clone()
        optional(self.delimiter, tt)
        items = []
        while True:
            before = tt.position
            try:
                value = self.item(tt)
            except ParseError:
                break
            if tt.position == before:
                break
            items.append(value)
            optional(self.delimiter, tt)
        stream.commit(tt)
        return items


class Sequence:
    """Items back to back with no delimiter. Never fails."""

    def __init__(self, item: Callable[[TokenStream], T]):
        self.item = item

    def __call__(self, stream: TokenStream) -> List[T]:
        return self.parse(stream)

    def parse(self, stream: TokenStream) -> List[T]:
        tt = stream.clone()
        items = []
        while True:
            before = tt.position
            try:
                value = self.item(tt)
            except ParseError:
                break
            if tt.position == before:
                break
            items.append(value)
        stream.commit(tt)
        return items
