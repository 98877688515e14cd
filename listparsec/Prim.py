import logging
from typing import Any, Callable, List, Optional, Tuple, TypeVar, Union

from .Parsec import ParseError, ParseOutcome, Parsec, ParserDefinitionError, Success, T
from .Stream import Stream

logger = logging.getLogger(__name__)

ItemType = TypeVar('ItemType')
AccType = TypeVar('AccType')


def create(parse_fn: Callable[[Stream], ParseOutcome[T]]) -> Parsec[T]:
    """Wrap a function from Stream to ParseOutcome as a parser."""
    return Parsec(parse_fn)


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(stream: Stream) -> ParseOutcome[T]:
        return ParseOutcome.success(value, stream)
    return Parsec(parse)


def fail(msg: str) -> Parsec[Any]:
    """A parser that always fails with a message."""
    def parse(stream: Stream) -> ParseOutcome[Any]:
        return ParseOutcome.failure(ParseError(stream.pos, message=msg))
    return Parsec(parse)


def deferred() -> Tuple[Parsec[T], Callable[[Parsec[T]], None]]:
    """
    Declare a parser now and define it later.

    Returns a placeholder parser and a setter. The placeholder forwards to
    whatever parser the setter was given, so grammar rules can refer to each
    other before all of them exist:

        expr, define_expr = deferred()
        ...
        define_expr(term.bind(...))

    The setter may be called once. Applying the placeholder before it is
    defined raises ParserDefinitionError.
    """
    slot: List[Parsec[T]] = []

    def parse(stream: Stream) -> ParseOutcome[T]:
        if not slot:
            raise ParserDefinitionError("deferred parser applied before it was defined")
        return slot[0].parse_fn(stream)

    placeholder: Parsec[T] = Parsec(parse)

    def define(parser: Parsec[T]) -> None:
        if slot:
            raise ParserDefinitionError("deferred parser is already defined")
        if not isinstance(parser, Parsec):
            raise TypeError(f"expected a parser, got {parser!r}")
        logger.debug("defining deferred parser %r", parser)
        slot.append(parser)
        # From now on the placeholder runs the definition without forwarding.
        placeholder.parse_fn = parser.parse_fn

    return placeholder, define


def lazy(thunk: Callable[[], Parsec[T]]) -> Parsec[T]:
    """Build the parser returned by `thunk` on first use, for recursive grammars."""
    cache: List[Parsec[T]] = []

    def parse(stream: Stream) -> ParseOutcome[T]:
        if not cache:
            cache.append(thunk())
        return cache[0](stream)
    return Parsec(parse)


def look_ahead(parser: Parsec[T]) -> Parsec[T]:
    """Parse without consuming input."""
    def parse(stream: Stream) -> ParseOutcome[T]:
        outcome = parser(stream)
        return ParseOutcome((Success(value, stream) for value, _ in outcome),
                            lambda: (outcome,))
    return Parsec(parse)


def _many_accum(
    acc_func: Callable[[ItemType, AccType], AccType],
    p: Parsec[ItemType],
    empty_acc_value: AccType
) -> Parsec[AccType]:
    def parse_accum(stream: Stream) -> ParseOutcome[AccType]:
        current_acc: AccType = empty_acc_value
        accum_stream = stream

        while True:
            outcome = p(accum_stream)
            step = outcome.first()
            if step is None:
                # 'p' failed: stop here, keeping its error for diagnostics
                return ParseOutcome([Success(current_acc, accum_stream)], lambda: (outcome,))

            if step.remaining.offset == accum_stream.offset:
                # Succeeding without consuming would repeat forever.
                logger.debug("many: parser succeeded without consuming input at %s, stopping",
                             accum_stream.pos)
                return ParseOutcome.success(current_acc, accum_stream)

            current_acc = acc_func(step.value, current_acc)
            accum_stream = step.remaining
    return Parsec(parse_accum)


def many(p: Parsec[T]) -> Parsec[List[T]]:
    """Parse zero or more occurrences of `p`."""
    def append(item, lst):
        lst.append(item)
        return lst
    # The accumulator is mutated in place, so each application gets a fresh list.
    return Parsec(lambda stream: _many_accum(append, p, [])(stream))


def many1(p: Parsec[T]) -> Parsec[List[T]]:
    """Parse one or more occurrences of `p`."""
    return p.bind(lambda x: many(p).map(lambda xs: [x] + xs))


some = many1


def skip_many(parser: Parsec[Any]) -> Parsec[None]:
    """Skips zero or more occurrences of `parser`."""
    return _many_accum(lambda item, acc: None, parser, None)


def apply(parser: Parsec[T], source: Union[Stream, str]) -> ParseOutcome[T]:
    """Run `parser` on a Stream, or on text lifted into one."""
    if isinstance(source, str):
        source = Stream.of(source)
    return parser(source)


def run_parser(parser: Parsec[T],
               input_str: str,
               source_name: str = "") -> Tuple[Optional[T], Optional[ParseError]]:
    """Return the first parsed value, or None and the furthest error."""
    stream = Stream.of(input_str, source_name)
    outcome = parser(stream)
    first = outcome.first()
    if first is None:
        return None, outcome.error or ParseError(stream.pos)
    return first.value, None


def parse_test(parser: Parsec[T], input: str) -> None:
    """Test a parser and print the result."""
    value, err = run_parser(parser, input)
    if err:
        print(err)
    else:
        print(value)
