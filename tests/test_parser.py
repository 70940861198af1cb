"""
Tests for the chain description parser.
"""

import pytest

from chains import parse, parse_or_raise, ParseErrorKind, ChainParseError, Transition


VALID = """States: A, B, C
Initial distribution: A : 0.5, B : 0.3, C : 0.2
Rates: A -> B : 2.5, B -> C : 1.0, C -> A : 0.5"""


class TestValidDescriptions:
    """Well-formed descriptions reproduce the declared values."""

    def test_round_trip(self):
        result = parse(VALID)

        assert result.ok, result.error
        chain = result.chain
        assert chain.states == ('A', 'B', 'C')
        assert chain.initial_distribution == {'A': 0.5, 'B': 0.3, 'C': 0.2}
        assert chain.transitions == (
            Transition('A', 'B', 2.5),
            Transition('B', 'C', 1.0),
            Transition('C', 'A', 0.5),
        )

    def test_uniform_initial_distribution(self):
        chain = parse_or_raise("States: A, B, C, D\nInitial distribution: uniform\nRates: A -> B : 1")

        assert all(p == pytest.approx(0.25) for p in chain.initial_distribution.values())

    def test_unmentioned_states_default_to_zero(self):
        chain = parse_or_raise("States: A, B, C\nInitial distribution: B : 1.0\nRates:")

        assert chain.initial_distribution == {'A': 0.0, 'B': 1.0, 'C': 0.0}
        assert chain.transitions == ()

    def test_headers_case_insensitive_and_singular_rate(self):
        text = "states: X, Y\nINITIAL DISTRIBUTION: X : 1\nrate: X -> Y : 3"
        chain = parse_or_raise(text)

        assert chain.states == ('X', 'Y')
        assert chain.transitions == (Transition('X', 'Y', 3.0),)

    def test_sections_span_lines_and_blank_lines(self):
        text = """
States:
  A, B,
  C

Initial distribution:
  A : 0.5
  C : 0.5
Rates:
  A -> B : 1.0,
  B -> C : 2.0

  , C -> A : 3.0
"""
        chain = parse_or_raise(text)

        assert chain.states == ('A', 'B', 'C')
        assert chain.initial_distribution['C'] == 0.5
        assert len(chain.transitions) == 3

    def test_compact_syntax(self):
        chain = parse_or_raise("States: A,B\nInitial distribution: A:0.25 B:0.75\nRates: A->B:1, B->A:2e-1")

        assert chain.initial_distribution == {'A': 0.25, 'B': 0.75}
        assert chain.transitions[1] == Transition('B', 'A', 0.2)

    def test_duplicate_transitions_kept(self):
        chain = parse_or_raise("States: A, B\nInitial distribution: A : 1\nRates: A -> B : 1, A -> B : 2")

        assert len(chain.transitions) == 2

    def test_index_lookup(self):
        chain = parse_or_raise(VALID)

        assert [chain.index_of(s) for s in chain.states] == [0, 1, 2]
        assert list(chain.initial_vector()) == [0.5, 0.3, 0.2]


class TestMalformedDescriptions:
    """Each malformed variant reports its own error category."""

    @pytest.mark.parametrize("text, kind", [
        ("", ParseErrorKind.EMPTY_INPUT),
        ("   \n  ", ParseErrorKind.EMPTY_INPUT),
        ("States: A, A\nInitial distribution: A : 1\nRates: A -> A : 1", ParseErrorKind.DUPLICATE_STATE),
        ("States: A, B\nInitial distribution: A : 1", ParseErrorKind.MISSING_SECTION),
        ("States: A, B\nRates: A -> B : 1", ParseErrorKind.MISSING_SECTION),
        ("Initial distribution: A : 1\nStates: A\nRates:", ParseErrorKind.MISSING_SECTION),
        ("States: A, B\nRates: A -> B : 1\nInitial distribution: A : 1", ParseErrorKind.MISSING_SECTION),
        ("A, B\nStates: A, B", ParseErrorKind.MISSING_SECTION),
        ("States: , ,\nInitial distribution: uniform\nRates:", ParseErrorKind.EMPTY_STATES),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> B : 0", ParseErrorKind.INVALID_RATE),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> B : -2", ParseErrorKind.INVALID_RATE),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> B : inf", ParseErrorKind.INVALID_RATE),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> B : fast", ParseErrorKind.INVALID_RATE),
        ("States: A, B\nInitial distribution: A : 1\nRates: A to B", ParseErrorKind.INVALID_RATE),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> A : 1", ParseErrorKind.SELF_LOOP),
        ("States: A, B\nInitial distribution: A : 1\nRates: A -> C : 1", ParseErrorKind.UNKNOWN_STATE),
        ("States: A, B\nInitial distribution: Z : 1\nRates: A -> B : 1", ParseErrorKind.UNKNOWN_STATE),
        ("States: A, B\nInitial distribution: A : 0.6, B : 0.3\nRates: A -> B : 1", ParseErrorKind.DISTRIBUTION_SUM),
        ("States: A, B\nInitial distribution: A : 1.5\nRates: A -> B : 1", ParseErrorKind.INVALID_PROBABILITY),
        ("States: A, B\nInitial distribution: A : -0.5, B : 1.5\nRates:", ParseErrorKind.INVALID_PROBABILITY),
        ("States: A, B\nInitial distribution: A : half\nRates:", ParseErrorKind.INVALID_PROBABILITY),
    ])
    def test_error_category(self, text, kind):
        result = parse(text)

        assert not result.ok
        assert result.chain is None
        assert result.kind == kind, result.error
        assert result.error

    def test_distribution_summing_to_point_nine(self):
        result = parse("States: A, B, C\nInitial distribution: A : 0.4, B : 0.3, C : 0.2\nRates:")

        assert result.kind == ParseErrorKind.DISTRIBUTION_SUM
        assert "0.9000" in result.error

    def test_sum_within_tolerance_accepted(self):
        result = parse("States: A, B\nInitial distribution: A : 0.3333333, B : 0.6666667\nRates:")

        assert result.ok

    def test_parse_or_raise_carries_kind(self):
        with pytest.raises(ChainParseError) as excinfo:
            parse_or_raise("States: A\nInitial distribution: A : 1\nRates: A -> A : 1")

        assert excinfo.value.kind == ParseErrorKind.SELF_LOOP
        assert isinstance(excinfo.value, ValueError)
