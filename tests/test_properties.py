"""
Property-based tests for the tokenizer, Punctuated and selector conversion

Run with: pytest tests/test_properties.py --hypothesis-show-statistics
"""

import pytest
from hypothesis import given, strategies as st

from dbseed.parser import ParseError, lex, TokenStream, Punctuated, parse_comma, parse_identifier
from dbseed.selection import RawSelector, parse_selections


# =============================================================================
# Strategies
# =============================================================================

punctuation = st.text(alphabet="(),/", max_size=30)

# Shell-split words never contain whitespace
words = st.text(
    alphabet=st.characters(blacklist_categories=("Zs", "Cc", "Zl", "Zp", "Cs")),
    max_size=20,
)
arguments = st.lists(words, max_size=8)

token_lists = st.lists(st.sampled_from(["a", "b_1", ",", "(", "-", "x.y"]), max_size=15)


def is_identifier(token):
    return all(c.isalnum() or c == '_' for c in token)


# =============================================================================
# Tokenizer
# =============================================================================

@given(punctuation)
def test_punctuation_is_one_token_per_char(text):
    assert lex([text]) == list(text)


@given(arguments)
def test_tokens_are_nonempty_and_cover_input(args):
    tokens = lex(args)
    assert all(tokens)
    assert "".join(tokens) == "".join(args)


@given(arguments)
def test_relexing_is_idempotent(args):
    tokens = lex(args)
    assert lex(tokens) == tokens


# =============================================================================
# Punctuated
# =============================================================================

@given(token_lists)
def test_punctuated_never_fails(tokens):
    tt = TokenStream(tokens)
    items = Punctuated(parse_comma, parse_identifier)(tt)

    # Walk the tokens by hand: one optional leading comma, then items each
    # followed by one optional comma
    position = 1 if tokens[:1] == [","] else 0
    expected = []
    while position < len(tokens) and is_identifier(tokens[position]):
        expected.append(tokens[position])
        position += 1
        if position < len(tokens) and tokens[position] == ",":
            position += 1

    assert items == expected
    assert tt.position == position
    if not tt.at_end():
        assert not is_identifier(tt.peek())


# =============================================================================
# Selectors
# =============================================================================

@given(st.sampled_from(["rand", "latest", "limit", "sort", "id", "x"]),
       st.lists(st.sampled_from(["1", "20", "desc", "asc", "col"]), max_size=3))
def test_selector_conversion_is_deterministic(keyword, args):
    raw = RawSelector(keyword, args)
    try:
        first = raw.to_selector()
    except ParseError:
        with pytest.raises(ParseError):
            raw.to_selector()
        return
    assert raw.to_selector() == first


@given(st.lists(st.sampled_from(["org", "1", "/", ",", "latest", "5", "sort", "id"]), max_size=12))
def test_parsing_is_repeatable(args):
    try:
        first = parse_selections(args)
    except ParseError:
        return
    assert parse_selections(args) == first
