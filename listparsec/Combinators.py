import logging
from typing import Any, Callable, List, Optional, Sequence

from .Parsec import ParseError, ParseOutcome, Parsec, T
from .Prim import fail, lazy, many, many1, pure
from .Stream import Stream

logger = logging.getLogger(__name__)


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: Sequence[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds.
    Returns the successes of the first parser that has any, or fails if none do.
    """
    if not parsers:
        return fail("no alternatives")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parsec[T]) -> Parsec[List[T]]:
    """
    Applies p n times, following the first success of each step.
    """
    if n <= 0:
        return pure([])

    def parse(stream: Stream) -> ParseOutcome[List[T]]:
        results: List[T] = []
        current = stream
        for _ in range(n):
            outcome = p(current)
            step = outcome.first()
            if step is None:
                return ParseOutcome((), lambda: (outcome,))
            results.append(step.value)
            current = step.remaining
        return ParseOutcome.success(results, current)
    return Parsec(parse)


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parsec[Any], close: Parsec[Any], p: Parsec[T]) -> Parsec[T]:
    """
    Parses 'open', then 'p', then 'close', returning the result of 'p'.
    """
    return open.bind(lambda _: p.bind(lambda x: close.bind(lambda _: pure(x))))


# 4. option: Tries a parser, returning a default value on failure
def option(x: T, p: Parsec[T]) -> Parsec[T]:
    return p | pure(x)


def option_maybe(p: Parsec[T]) -> Parsec[Optional[T]]:
    """
    Tries parser p; returns the value if successful, else None.
    """
    return p | pure(None)


def optional(p: Parsec[T]) -> Parsec[None]:
    """
    Tries parser p; returns None whether it succeeds or fails.
    """
    return p.map(lambda _: None) | pure(None)


def skip_many1(p: Parsec[Any]) -> Parsec[None]:
    """
    Applies parser p one or more times, discarding results.
    """
    return many1(p).map(lambda _: None)


def sep_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """
    Parses zero or more occurrences of p separated by sep, returning a list of p's results.
    """
    return sep_by1(p, sep) | pure([])


def sep_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return p.bind(lambda x: many(sep.bind(lambda _: p)).map(lambda xs: [x] + xs))


def end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """
    Parses zero or more occurrences of p, each followed by sep, returning a list of p's results.
    """
    return many(p.bind(lambda x: sep.bind(lambda _: pure(x))))


# chainl1: Left-associative operator chain
def chainl1(p: Parsec[T], op: Parsec[Callable[[T, T], T]]) -> Parsec[T]:
    """
    Parses one or more p separated by op, applying op left-associatively.

    Follows the first success of each step. An operator with no right operand
    is left unconsumed.
    """
    def parse(stream: Stream) -> ParseOutcome[T]:
        outcome = p(stream)
        first = outcome.first()
        if first is None:
            return outcome

        current_value, current_stream = first
        while True:
            op_step = op(current_stream).first()
            if op_step is None:
                break
            func_op, after_op = op_step
            operand_step = p(after_op).first()
            if operand_step is None:
                break
            current_value = func_op(current_value, operand_step.value)
            current_stream = operand_step.remaining
        return ParseOutcome.success(current_value, current_stream)
    return Parsec(parse)


# chainr1: Right-associative operator chain
def chainr1(p: Parsec[T], op: Parsec[Callable[[T, T], T]]) -> Parsec[T]:
    """
    Parses one or more p separated by op, applying op right-associatively.
    """
    def rest(x: T) -> Parsec[T]:
        return op.bind(lambda f: scan.map(lambda y: f(x, y))) | pure(x)
    scan: Parsec[T] = lazy(lambda: p.bind(rest))
    return scan


def end_of_input() -> Parsec[None]:
    """
    Succeeds with None, consuming nothing, only if no input remains.
    """
    def parse(stream: Stream) -> ParseOutcome[None]:
        head = stream.head()
        if head is None:
            return ParseOutcome.success(None, stream)
        return ParseOutcome.failure(ParseError(stream.pos, repr(head.value), ("end of input",)))
    return Parsec(parse)


eof = end_of_input


def any_token() -> Parsec[str]:
    """
    Accepts any single character from the input, returning it.
    """
    def parse(stream: Stream) -> ParseOutcome[str]:
        head = stream.head()
        if head is None:
            return ParseOutcome.failure(ParseError(stream.pos, "end of input"))
        return ParseOutcome.success(head.value, stream.advance())
    return Parsec(parse)


# notFollowedBy: Succeeds if a parser fails, consuming nothing either way
def not_followed_by(p: Parsec[Any]) -> Parsec[None]:
    def parse(stream: Stream) -> ParseOutcome[None]:
        found = p(stream).first()
        if found is None:
            return ParseOutcome.success(None, stream)
        return ParseOutcome.failure(ParseError(stream.pos, repr(found.value)))
    return Parsec(parse)


# manyTill: Parses p zero or more times until end succeeds
def many_till(p: Parsec[T], end: Parsec[Any]) -> Parsec[List[T]]:
    """
    Applies p zero or more times until end succeeds, returning a list of p's results.
    """
    def parse(stream: Stream) -> ParseOutcome[List[T]]:
        results: List[T] = []
        current = stream
        while True:
            end_outcome = end(current)
            finish = end_outcome.first()
            if finish is not None:
                return ParseOutcome.success(results, finish.remaining)

            outcome = p(current)
            step = outcome.first()
            if step is None:
                return ParseOutcome((), lambda: (end_outcome, outcome))
            if step.remaining.offset == current.offset:
                # Without progress 'end' would never be reached.
                return ParseOutcome.failure(ParseError(
                    current.pos, message="many_till: parser succeeded without consuming input"))
            results.append(step.value)
            current = step.remaining
    return Parsec(parse)


# parserTrace: Debugging parser that logs the remaining input
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(stream: Stream) -> ParseOutcome[None]:
        upcoming = stream.remaining
        logger.debug("%s: %r%s at %s", label_str, upcoming[:30],
                     '...' if len(upcoming) > 30 else '', stream.pos)
        return ParseOutcome.success(None, stream)
    return Parsec(parse)


# parserTraced: Debugging parser that traces execution and backtracking
def parser_traced(label_str: str, p: Parsec[T]) -> Parsec[T]:
    trace_enter = parser_trace(label_str)
    on_backtrack = parser_trace(f"{label_str} backtracked") > fail(f"{label_str} failed")
    return trace_enter > (p | on_backtrack)
