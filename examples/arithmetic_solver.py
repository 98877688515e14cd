from listparsec.Expr import evaluate, parse_expression

if __name__ == "__main__":
    test_cases = [
        "2+3",          # 5
        "2*3",          # 6
        "2+3*4",        # 14 (Precedence check)
        "(2+3)*4",      # 20 (Parens check)
        "1+2+3",        # 6
        "2*(3+4",       # Error: unbalanced
        "2+3)",         # Error: trailing input
    ]

    print(f"{'Expression':<20} | {'Result':<10}")
    print("-" * 35)

    for expr_str in test_cases:
        # parse_expression returns (Result, Error)
        result, err = parse_expression(expr_str)
        if err:
            print(f"{expr_str:<20} | Error: {err}")
        else:
            print(f"{expr_str:<20} | {result}")

    # Accepting whatever expression the input starts with instead
    print()
    print(f"{'2+3)':<20} | {evaluate('2+3)', allow_trailing=True)} (trailing input allowed)")
