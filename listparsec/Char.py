from typing import Callable, Iterable

from .Parsec import ParseError, ParseOutcome, Parsec
from .Prim import skip_many
from .Stream import Stream


# Core function: Succeeds if the character satisfies a predicate
def satisfy(f: Callable[[str], bool]) -> Parsec[str]:
    """Succeeds for any character where f returns True. Returns the parsed character."""
    def parse(stream: Stream) -> ParseOutcome[str]:
        head = stream.head()
        if head is None:
            return ParseOutcome.failure(ParseError(stream.pos, "end of input"))
        if f(head.value):
            return ParseOutcome.success(head.value, stream.advance())
        return ParseOutcome.failure(ParseError(stream.pos, repr(head.value)))
    return Parsec(parse)


# Helper function: Parses a single character
def char(c: str) -> Parsec[str]:
    """Parses a single character c and returns it."""
    return satisfy(lambda x: x == c).label(repr(c))


def one_of(cs: Iterable[str]) -> Parsec[str]:
    """Succeeds if the current character is in cs. Returns the parsed character."""
    cs = ''.join(cs)
    return satisfy(lambda c: c in cs).label(f"one of {cs!r}")


def none_of(cs: Iterable[str]) -> Parsec[str]:
    """Succeeds if the current character is not in cs. Returns the parsed character."""
    cs = ''.join(cs)
    return satisfy(lambda c: c not in cs).label(f"none of {cs!r}")


def space() -> Parsec[str]:
    return satisfy(str.isspace).label("space")


def spaces() -> Parsec[None]:
    """Skips zero or more whitespace characters."""
    return skip_many(space()).label("white space")


def newline() -> Parsec[str]:
    return char('\n').label("lf new-line")


def letter() -> Parsec[str]:
    return satisfy(str.isalpha).label("letter")


def alpha_num() -> Parsec[str]:
    return satisfy(str.isalnum).label("letter or digit")


def digit() -> Parsec[str]:
    """Parses an ASCII digit and returns it."""
    return satisfy(lambda c: '0' <= c <= '9').label("digit")


def any_char() -> Parsec[str]:
    """Parses any character and returns it."""
    return satisfy(lambda _: True)


def string(s: str) -> Parsec[str]:
    """Parses the exact string s and returns it. Consumes nothing on a mismatch."""
    def parse(stream: Stream) -> ParseOutcome[str]:
        rest = stream
        for expected in s:
            head = rest.head()
            if head is None or head.value != expected:
                found = repr(stream.remaining[:len(s)]) if not stream.at_end else "end of input"
                return ParseOutcome.failure(ParseError(stream.pos, found, (repr(s),)))
            rest = rest.advance()
        return ParseOutcome.success(s, rest)
    return Parsec(parse)
