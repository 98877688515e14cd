"""
An arithmetic evaluator built from the combinators alone.

    Expr   := Term   ( '+' Expr | pure(0) )
    Term   := Factor ( '*' Term | pure(1) )
    Factor := Digit | '(' Expr ')'

Term binds tighter than Expr, so precedence comes from the shape of the
grammar. The rules are right-recursive; each tail defaults to the identity of
its operator when no operator follows.
"""
from typing import Optional, Tuple

from .Char import char, digit
from .Combinators import between, end_of_input
from .Parsec import ParseError, Parsec
from .Prim import apply, deferred, pure, run_parser


def arithmetic_grammar() -> Parsec[int]:
    """Build the Expr parser. Expr, Term and Factor refer to each other through deferred parsers."""
    expr, define_expr = deferred()
    term, define_term = deferred()

    factor = digit().map(int) | between(char('('), char(')'), expr)
    define_term(factor.bind(lambda x: ((char('*') > term) | pure(1)).map(lambda y: x * y)))
    define_expr(term.bind(lambda x: ((char('+') > expr) | pure(0)).map(lambda y: x + y)))
    return expr


expression = arithmetic_grammar()
complete_expression = expression < end_of_input()


def evaluate(text: str, allow_trailing: bool = False) -> Optional[int]:
    """
    Evaluate `text` as an arithmetic expression.

    Returns None unless the whole of `text` is an expression. With
    `allow_trailing`, the value of the first expression parsed from the start
    of `text` is returned whatever follows it.
    """
    parser = expression if allow_trailing else complete_expression
    first = apply(parser, text).first()
    if first is None:
        return None
    return first.value


def parse_expression(text: str, source_name: str = "") -> Tuple[Optional[int], Optional[ParseError]]:
    """Like evaluate, but report where parsing failed."""
    return run_parser(complete_expression, text, source_name)
