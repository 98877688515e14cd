# tests/conftest.py
import pytest
from hypothesis import settings

from listparsec.Parsec import ParseOutcome
from listparsec.Stream import SourcePos, Stream

settings.register_profile("default", max_examples=200, deadline=None)
settings.load_profile("default")


def assert_outcome_eq(res1: ParseOutcome, res2: ParseOutcome):
    """
    Deep comparison of two ParseOutcomes.
    """
    pairs1, pairs2 = list(res1), list(res2)
    assert len(pairs1) == len(pairs2), f"Success count mismatch: {len(pairs1)} != {len(pairs2)}"
    for (v1, s1), (v2, s2) in zip(pairs1, pairs2):
        assert v1 == v2
        assert s1.pos == s2.pos
        assert s1.remaining == s2.remaining


@pytest.fixture
def stream():
    def _make(input_data):
        return Stream(input_data, SourcePos(1, 1, 0, "test"))

    return _make
