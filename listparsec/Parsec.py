from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, List, NamedTuple, Optional, Tuple, TypeVar, Union

from .Stream import SourcePos, Stream

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


class ParserDefinitionError(Exception):
    """Raised when a parser is misconstructed, e.g. a deferred parser that is never defined."""


@dataclass(frozen=True)
class ParseError:
    """Represents a parsing failure at a position."""
    pos: SourcePos
    unexpected: str = ""
    expected: Tuple[str, ...] = ()
    message: str = ""

    @staticmethod
    def merge(e1: Optional['ParseError'], e2: Optional['ParseError']) -> Optional['ParseError']:
        """Keep the error that got furthest; combine expectations on a tie."""
        if e1 is None:
            return e2
        if e2 is None:
            return e1
        if e1.pos.offset > e2.pos.offset:
            return e1
        if e2.pos.offset > e1.pos.offset:
            return e2
        expected = e1.expected + tuple(x for x in e2.expected if x not in e1.expected)
        return ParseError(e1.pos, e1.unexpected or e2.unexpected, expected, e1.message or e2.message)

    def expecting(self, msg: str) -> 'ParseError':
        return ParseError(self.pos, self.unexpected, (msg,), self.message)

    def __str__(self) -> str:
        parts = []
        if self.unexpected:
            parts.append(f"unexpected {self.unexpected}")
        if self.expected:
            parts.append("expecting " + " or ".join(self.expected))
        if self.message:
            parts.append(self.message)
        return f"Parse error at {self.pos}: {'; '.join(parts) or 'unknown parse error'}"


class Success(NamedTuple):
    """A parsed value and the stream left after it."""
    value: Any
    remaining: Stream


class ParseOutcome(Generic[T]):
    """
    The successes of one parser application, produced lazily.

    An outcome is a finite sequence of `Success` pairs; an empty outcome is a
    failure. Pairs are cached as they are produced so the outcome can be
    iterated more than once. `error` reports the furthest failure met while
    producing the outcome: `sources` returns the ParseErrors, and the
    outcomes whose errors count towards it.
    """

    def __init__(self,
                 successes: Iterable[Success] = (),
                 sources: Callable[[], Iterable[Union[ParseError, 'ParseOutcome[Any]', None]]] = tuple):
        self._pending: Optional[Iterator[Success]] = iter(successes)
        self._cache: List[Success] = []
        self._sources = sources
        self._error: Optional[ParseError] = None
        self._error_known = False

    @staticmethod
    def success(value: T, remaining: Stream) -> 'ParseOutcome[T]':
        return ParseOutcome([Success(value, remaining)])

    @staticmethod
    def failure(error: ParseError) -> 'ParseOutcome[Any]':
        return ParseOutcome((), lambda: (error,))

    def _pull(self) -> bool:
        """Produce one more pair; False once the successes are exhausted."""
        if self._pending is None:
            return False
        try:
            self._cache.append(next(self._pending))
        except StopIteration:
            self._pending = None
            return False
        return True

    def _drain(self) -> List[Success]:
        while self._pull():
            pass
        return self._cache

    def __iter__(self) -> Iterator[Success]:
        i = 0
        while i < len(self._cache) or self._pull():
            yield self._cache[i]
            i += 1

    def __bool__(self) -> bool:
        return bool(self._cache) or self._pull()

    def __len__(self) -> int:
        return len(self._drain())

    def first(self) -> Optional[Success]:
        return self._cache[0] if self else None

    def values(self) -> List[T]:
        return [value for value, _ in self]

    @property
    def error(self) -> Optional[ParseError]:
        if self._error_known:
            return self._error
        # Walked with an explicit stack: outcomes of deep grammars nest as
        # deeply as the input does.
        error = None
        seen = set()
        stack: List[Any] = [self]
        while stack:
            item = stack.pop()
            if item is None:
                continue
            if isinstance(item, ParseError):
                error = ParseError.merge(error, item)
                continue
            if id(item) in seen:
                continue
            seen.add(id(item))
            if item._error_known:
                error = ParseError.merge(error, item._error)
                continue
            # Every success has to be produced before all the sources are known.
            item._drain()
            stack.extend(reversed(list(item._sources())))
        self._error = error
        self._error_known = True
        return error

    def __repr__(self) -> str:
        if not self:
            return f"ParseOutcome(failure: {self.error})"
        return f"ParseOutcome({list(self)!r})"


class Parsec(Generic[T]):
    """A parser: a pure function from a Stream to a ParseOutcome."""
    def __init__(self, parse_fn: Callable[[Stream], ParseOutcome[T]]):
        if not callable(parse_fn):
            raise TypeError(f"parser function must be callable, got {parse_fn!r}")
        self.parse_fn = parse_fn

    def __call__(self, stream: Stream) -> ParseOutcome[T]:
        return self.parse_fn(stream)

    # The combinators below call parse_fn directly: recursive grammars nest
    # one Python frame per parser that way, not two.

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(stream: Stream) -> ParseOutcome[U]:
            first = self.parse_fn(stream)
            pairs = first._drain()
            if not pairs:
                return first
            if len(pairs) == 1:
                # Deterministic step: run the rest now and keep only its pairs.
                value, rest = pairs[0]
                outcome = f(value).parse_fn(rest)
                return ParseOutcome(list(outcome), lambda: (first, outcome))

            tried: List[ParseOutcome[U]] = []

            def successes() -> Iterator[Success]:
                for value, rest in pairs:
                    outcome = f(value).parse_fn(rest)
                    tried.append(outcome)
                    yield from outcome

            return ParseOutcome(successes(), lambda: [first] + tried)
        return Parsec(parse)

    # fmap: same as bind(lambda a: pure(f(a)))
    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(stream: Stream) -> ParseOutcome[U]:
            outcome = self.parse_fn(stream)
            return ParseOutcome((Success(f(value), rest) for value, rest in outcome),
                                lambda: (outcome,))
        return Parsec(parse)

    # Alternative (<|>): the first parser that succeeds wins
    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        def parse(stream: Stream) -> ParseOutcome[T]:
            outcome = self.parse_fn(stream)
            if outcome:
                return outcome
            # Streams are immutable, so the failed attempt left `stream` as it was.
            alternative = other.parse_fn(stream)
            return ParseOutcome(alternative, lambda: (outcome, alternative))
        return Parsec(parse)

    # Sequence (&)
    # self: Parsec[T], other: Parsec[U] -> result: Parsec[Tuple[T, U]]
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        return self.bind(lambda a: other.map(lambda b: (a, b)))

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        return self.bind(lambda _: other)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        return self.bind(lambda a: other.map(lambda _: a))

    # Monadic bind also available as >>
    def __rshift__(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        return self.bind(f)

    # Label (<?>)
    def label(self, msg: str) -> 'Parsec[T]':
        def parse(stream: Stream) -> ParseOutcome[T]:
            outcome = self.parse_fn(stream)
            if outcome:
                return outcome
            err = outcome.error
            if err is None:
                return ParseOutcome.failure(ParseError(stream.pos, expected=(msg,)))
            if err.pos.offset == stream.offset:  # Failed without getting anywhere
                return ParseOutcome.failure(err.expecting(msg))
            return outcome
        return Parsec(parse)
