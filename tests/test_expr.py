from hypothesis import given, strategies as st

from listparsec.Expr import arithmetic_grammar, evaluate, expression, parse_expression
from listparsec.Prim import apply


def test_arithmetic_precedence():
    assert evaluate("2*3+4") == 10
    assert evaluate("2+3*4") == 14
    assert evaluate("2*(3+4)") == 14
    assert evaluate("(2+3)*4") == 20


def test_chains():
    assert evaluate("1+2+3") == 6
    assert evaluate("2*3*4") == 24
    assert evaluate("1+2*3+4*5") == 27


def test_single_digit_and_parens():
    assert evaluate("7") == 7
    assert evaluate("((7))") == 7


def test_no_result():
    assert evaluate("") is None
    assert evaluate("(2+3") is None
    assert evaluate("+") is None
    assert evaluate("2+") is None
    assert evaluate("x") is None


def test_trailing_input_is_rejected_by_default():
    assert evaluate("2+3)") is None
    assert evaluate("12") is None


def test_trailing_input_allowed_when_asked():
    assert evaluate("2+3)", allow_trailing=True) == 5
    # Digits are single characters, so "12" is 1 followed by "2"
    assert evaluate("12", allow_trailing=True) == 1
    # "2+" falls back to the empty tail and leaves the '+'
    assert evaluate("2+", allow_trailing=True) == 2
    assert evaluate("", allow_trailing=True) is None


def test_expression_leaves_unparsed_tail():
    (value, rest), = list(apply(expression, "2*3+4;rest"))
    assert value == 10
    assert rest.remaining == ";rest"


def test_parse_expression_reports_position():
    value, err = parse_expression("(2+3", "calc")
    assert value is None
    assert err.pos.offset == 4
    assert "')'" in err.expected
    assert str(err).startswith("Parse error at calc line 1, column 5")

    assert parse_expression("2*(3+4)") == (14, None)


def test_grammars_are_independent():
    g1 = arithmetic_grammar()
    g2 = arithmetic_grammar()
    assert apply(g1, "1+1").first().value == apply(g2, "1+1").first().value == 2


digits = st.integers(min_value=0, max_value=9)


@st.composite
def sums_of_products(draw):
    terms = draw(st.lists(st.lists(digits, min_size=1, max_size=3), min_size=1, max_size=4))
    text = "+".join("*".join(str(d) for d in term) for term in terms)
    total = 0
    for term in terms:
        product = 1
        for d in term:
            product *= d
        total += product
    return text, total


@given(sums_of_products())
def test_evaluate_matches_arithmetic(case):
    text, total = case
    assert evaluate(text) == total
    assert evaluate(f"({text})") == total


def test_long_flat_chains():
    assert evaluate("+".join(["1"] * 200)) == 200
    assert evaluate("*".join(["1"] * 200)) == 1
    assert evaluate("+".join(["2*3"] * 100)) == 600


def test_long_chain_failure_reports_position():
    text = "+".join(["1"] * 200) + ")"
    assert evaluate(text) is None
    value, err = parse_expression(text)
    assert value is None
    assert err.pos.offset == len(text) - 1
    assert "end of input" in err.expected


def test_nested_parentheses():
    assert evaluate("(" * 100 + "7" + ")" * 100) == 7
