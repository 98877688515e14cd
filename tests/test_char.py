from hypothesis import given
from hypothesis import strategies as st

from listparsec.Char import (
    any_char,
    char,
    digit,
    letter,
    newline,
    none_of,
    one_of,
    satisfy,
    spaces,
    string,
)
from listparsec.Prim import apply, run_parser
from listparsec.Stream import Stream


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- Basic Character Parsers ---


@given(st.characters())
def test_char_parser(c):
    # Should match the character
    res, err = run(char(c), c)
    assert res == c
    assert err is None

    # Should fail on different character
    diff = chr(ord(c) + 1) if ord(c) < 0x10FFFF else chr(ord(c) - 1)
    res_fail, err_fail = run(char(c), diff)
    assert res_fail is None
    assert err_fail is not None


@given(st.characters(), st.text())
def test_satisfy(c, text):
    # Predicate: matches specific char
    p = satisfy(lambda x: x == c)

    if text.startswith(c):
        res, _ = run(p, text)
        assert res == c
    else:
        res, err = run(p, text)
        assert res is None
        assert err is not None


@given(st.text(min_size=1))
def test_satisfy_consumes_exactly_one_character(text):
    stream = Stream.of(text)
    (value, rest), = list(satisfy(lambda _: True)(stream))
    assert value == text[0]
    assert rest.offset == 1
    assert rest.remaining == text[1:]


@given(st.text())
def test_failed_match_consumes_nothing(text):
    outcome = apply(satisfy(lambda _: False), text)
    assert not outcome
    assert list(outcome) == []
    assert outcome.error.pos.offset == 0


@given(st.text(min_size=1))
def test_one_of(text):
    p = one_of(text)

    res, _ = run(p, text[0])
    assert res == text[0]


@given(st.text(min_size=1))
def test_none_of(text):
    p = none_of(text)

    # Should fail for char in list
    res, err = run(p, text[0])
    assert res is None
    assert err is not None


# --- String Parsers ---


@given(st.text())
def test_string_parser(s):
    p = string(s)

    res, err = run(p, s + "suffix")
    assert res == s
    assert err is None

    if s:
        partial = s[:-1] + (chr(ord(s[-1]) + 1) if ord(s[-1]) < 0x10FFFF else 'a')
        res_fail, err_fail = run(p, partial)
        assert res_fail is None
        assert repr(s) in str(err_fail)
        # Nothing is consumed on a partial match
        assert err_fail.pos.offset == 0


# --- Whitespace & Newlines ---


def test_newline():
    res, _ = run(newline(), "\n")
    assert res == "\n"


def test_spaces():
    # Matches zero spaces
    res0, err0 = run(spaces(), "abc")
    assert res0 is None and err0 is None

    p = spaces() > char("a")
    res2, _ = run(p, "   a")
    assert res2 == "a"


# --- Classification Parsers ---


@given(st.sampled_from("0123456789"))
def test_digit(c):
    res, _ = run(digit(), c)
    assert res == c


def test_digit_is_ascii_only():
    assert run(digit(), "٣")[0] is None
    assert run(digit(), "x")[0] is None


@given(st.characters(whitelist_categories=("L",)))
def test_letter(c):
    res, _ = run(letter(), c)
    assert res == c


def test_any_char():
    res, _ = run(any_char(), "?")
    assert res == "?"

    # Fails on empty
    res_empty, err = run(any_char(), "")
    assert res_empty is None
    assert "end of input" in str(err)


def test_char_error_names_expectation():
    _, err = run(char('x'), "y")
    assert err.expected == ("'x'",)
    assert err.unexpected == "'y'"
    assert str(err) == "Parse error at line 1, column 1: unexpected 'y'; expecting 'x'"
