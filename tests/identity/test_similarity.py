"""Tests for name similarity scoring."""

import pytest

from src.identity.similarity import (
    CONTAINMENT_WEIGHT,
    TOKEN_WEIGHT,
    name_similarity,
)


class TestExactMatch:
    """Equal names score 1.0."""

    @pytest.mark.parametrize("name", ["Budi", "BUDI SANTOSO", "a", "Keyla Putri"])
    def test_identical_names_score_1_0(self, name: str):
        """A name is always fully similar to itself."""
        assert name_similarity(name, name) == 1.0

    def test_case_insensitive(self):
        """Case differences still count as exact."""
        assert name_similarity("BUDI SANTOSO", "budi santoso") == 1.0


class TestContainment:
    """One name contained in the other scores by length ratio."""

    def test_prefix_fragment(self):
        """ABC in ABCDEF scores 0.8 * 3/6."""
        assert name_similarity("ABC", "ABCDEF") == pytest.approx(0.4)

    def test_containment_is_symmetric(self):
        """Either argument may be the shorter one."""
        assert name_similarity("ABCDEF", "ABC") == name_similarity("ABC", "ABCDEF")

    def test_longer_submission_contains_roster_name(self):
        """A trailing typo still scores high via reversed containment."""
        score = name_similarity("BUDI SANTOSO", "Budi Santosoo")

        assert score == pytest.approx(CONTAINMENT_WEIGHT * 12 / 13)

    def test_single_initial_scores_low(self):
        """A lone initial inside a full name is penalized by length."""
        score = name_similarity("BUDI SANTOSO", "b")

        assert score == pytest.approx(CONTAINMENT_WEIGHT / 12)
        assert score < 0.1

    def test_empty_against_name_scores_zero(self):
        """The empty string is contained in everything but has no length."""
        assert name_similarity("BUDI", "") == 0.0


class TestTokenOverlap:
    """Word-level overlap is capped at TOKEN_WEIGHT."""

    def test_one_shared_token_of_two(self):
        """One hit out of two tokens scores 0.5 * 0.6."""
        score = name_similarity("Ahmad Budi", "Budi Santoso")

        assert score == pytest.approx(0.3)

    def test_reordered_name_scores_full_token_weight(self):
        """All tokens hit regardless of order."""
        score = name_similarity("Santoso Budi", "Budi Santoso")

        assert score == pytest.approx(TOKEN_WEIGHT)

    def test_partial_token_containment_counts_as_hit(self):
        """'Santo' inside 'Santoso' counts as a hit."""
        score = name_similarity("Budi Santoso", "Santo Budiman")

        assert score == pytest.approx(TOKEN_WEIGHT)

    def test_short_tokens_never_hit(self):
        """Initials are ignored for hits but count in the denominator."""
        score = name_similarity("BUDI SANTOSO", "Budi S.")

        assert score == pytest.approx(0.5 * TOKEN_WEIGHT)

    def test_short_tokens_on_both_sides_do_not_match(self):
        """Two-letter tokens never match each other."""
        assert name_similarity("Al Bo", "Bo Al") == 0.0

    def test_unrelated_names_score_zero(self):
        """No overlap scores 0.0."""
        assert name_similarity("Keyla Putri", "Rayhan Khadafi") == 0.0

    def test_whitespace_only_names(self):
        """Names with no tokens at all do not divide by zero."""
        assert name_similarity("   ", "\t") == 0.0

    def test_token_score_below_containment_ceiling(self):
        """Token matches always score below strong containment."""
        assert TOKEN_WEIGHT < CONTAINMENT_WEIGHT


class TestDeterminism:
    """Same inputs give same outputs."""

    def test_repeated_calls_are_stable(self):
        """Scores do not vary between calls."""
        scores = {name_similarity("Anri Rachman", "Rachman Anri") for _ in range(5)}

        assert len(scores) == 1

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("Budi", "Budi Santoso"),
            ("Ahmad Budi", "Budi Santoso"),
            ("x", "yz"),
            ("", ""),
        ],
    )
    def test_score_in_unit_interval(self, a: str, b: str):
        """Scores stay within [0, 1]."""
        assert 0.0 <= name_similarity(a, b) <= 1.0
