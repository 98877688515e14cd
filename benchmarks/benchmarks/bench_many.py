from listparsec.Char import char
from listparsec.Expr import evaluate
from listparsec.Parsec import ParseOutcome, Success
from listparsec.Prim import apply, create, many, run_parser


class TimeMany:
    def setup(self):
        self.parser = many(char("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeEvaluate:
    def setup(self):
        self.flat = "+".join(["2*3"] * 30)
        self.nested = "(" * 15 + "1" + ")" * 15

    def time_evaluate_flat(self):
        evaluate(self.flat)

    def time_evaluate_nested(self):
        evaluate(self.nested)


def prefixes(c):
    """Every count of leading `c`s, longest first, produced on demand."""
    def parse(stream):
        def successes():
            ends = [stream]
            while True:
                head = ends[-1].head()
                if head is None or head.value != c:
                    break
                ends.append(ends[-1].advance())
            for n in range(len(ends) - 1, -1, -1):
                yield Success(n, ends[n])
        return ParseOutcome(successes())
    return create(parse)


class TimeAmbiguous:
    def setup(self):
        self.pairs = prefixes("a").bind(lambda n: prefixes("a").map(lambda m: (n, m)))
        self.text = "a" * 200

    def time_all_splits(self):
        len(apply(self.pairs, self.text))

    def time_first_split(self):
        apply(self.pairs, self.text).first()
