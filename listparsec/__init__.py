# Core
from .Stream import Stream, StreamChar, SourcePos
from .Parsec import Parsec, ParseOutcome, Success, ParseError, ParserDefinitionError
from .Prim import (
    create, apply, run_parser, parse_test, pure, fail, deferred, lazy,
    look_ahead, many, many1, some, skip_many
)

# Characters
from .Char import (
    satisfy, char, string, digit, letter, alpha_num,
    any_char, one_of, none_of, space, spaces, newline
)

# Combinators
from .Combinators import (
    choice, count, between, option, option_maybe, optional,
    skip_many1, sep_by, sep_by1, end_by, chainl1, chainr1,
    end_of_input, eof, any_token, not_followed_by, many_till,
    parser_trace, parser_traced
)

# Arithmetic grammar
from .Expr import arithmetic_grammar, expression, evaluate, parse_expression
