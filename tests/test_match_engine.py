"""Unit tests for the EMC scoring engine — style affinity, niche match, ranking."""
import uuid

import pytest

from editmatch.exceptions import ValidationFailedError
from editmatch.services import match_engine
from editmatch.services.match_engine import (
    Candidate,
    Requester,
    final_score,
    niche_match_score,
    parse_style_ids,
    rank,
    soft_matches,
    style_affinity_score,
)


def _candidate(styles, niche):
    return Candidate(id=uuid.uuid4(), style_ids=frozenset(styles), niche=niche)


class TestAffinityTable:
    """Tests for the static, one-directional affinity table."""

    def test_known_rows(self):
        assert soft_matches(1) == {2, 3}
        assert soft_matches(2) == {1}
        assert soft_matches(3) == {4}
        assert soft_matches(4) == {3}
        assert soft_matches(7) == {1}

    def test_defined_for_styles_one_to_nine(self):
        assert set(match_engine.STYLE_AFFINITY) == set(range(1, 10))

    def test_not_symmetrised(self):
        """7 -> 1 exists but 1 -> 7 does not; 1 -> 3 exists but 3 -> 1 does not."""
        assert 7 not in soft_matches(1)
        assert 1 not in soft_matches(3)

    def test_unknown_style_has_no_soft_matches(self):
        assert soft_matches(42) == frozenset()
        assert soft_matches(0) == frozenset()

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            match_engine.STYLE_AFFINITY[1] = frozenset({9})


class TestStyleAffinityScore:
    """Tests for the 70 / 40 / 10 style scorer."""

    @pytest.mark.parametrize("style", range(1, 10))
    def test_exact_match_dominates(self, style):
        """A creator offering the requester's style always scores 70."""
        others = {s for s in range(1, 10) if s != style}
        assert style_affinity_score(style, {style}) == 70
        assert style_affinity_score(style, {style} | others) == 70

    def test_soft_match(self):
        assert style_affinity_score(1, {2}) == 40
        assert style_affinity_score(1, {3, 9}) == 40

    def test_weak_default(self):
        assert style_affinity_score(1, {5}) == 10

    def test_empty_candidate_styles_is_weak(self):
        assert style_affinity_score(1, set()) == 10

    def test_asymmetry_follows_requester_row(self):
        assert style_affinity_score(3, {4}) == 40
        assert style_affinity_score(4, {3}) == 40  # 4 -> 3 is in the table
        assert style_affinity_score(3, {1}) == 10  # 1 -> 3 is, 3 -> 1 is not
        assert style_affinity_score(7, {1}) == 40
        assert style_affinity_score(1, {7}) == 10

    def test_unknown_requester_style(self):
        assert style_affinity_score(42, {1, 2, 3}) == 10
        assert style_affinity_score(42, {42}) == 70

    def test_accepts_any_iterable(self):
        assert style_affinity_score(2, [1, 1]) == 40


class TestNicheMatchScore:
    """Tests for the binary niche matcher."""

    @pytest.mark.parametrize("niche", ["WeddingFilm", "DroneOperator", "eLearning"])
    def test_equal_niches(self, niche):
        assert niche_match_score(niche, niche) == 100

    def test_different_niches(self):
        assert niche_match_score("WeddingFilm", "Documentary") == 0

    def test_case_sensitive(self):
        assert niche_match_score("WeddingFilm", "weddingfilm") == 0

    @pytest.mark.parametrize("a,b", [("", ""), ("", "Colourist"), ("Colourist", ""), (None, "Colourist"), ("Colourist", None), (None, None)])
    def test_empty_or_missing_side(self, a, b):
        assert niche_match_score(a, b) == 0


class TestFinalScore:
    def test_weights(self):
        assert match_engine.NICHE_WEIGHT == 0.6
        assert match_engine.STYLE_WEIGHT == 0.4

    def test_weighted_sum(self):
        assert final_score(100, 40) == pytest.approx(76.0)
        assert final_score(100, 70) == pytest.approx(88.0)
        assert final_score(0, 10) == pytest.approx(4.0)


class TestRank:
    """Tests for the ranking aggregator."""

    def test_worked_scenario(self):
        """Style 1 / RunAndGunSocial vs A, B, C -> A=88, C=76, B=4."""
        requester = Requester(user_id=uuid.uuid4(), style_id=1, niche="RunAndGunSocial")
        a = _candidate({1}, "RunAndGunSocial")
        b = _candidate({5}, "Colourist")
        c = _candidate({2}, "RunAndGunSocial")

        ranked = rank(requester, [a, b, c])

        assert [r.candidate_id for r in ranked] == [a.id, c.id, b.id]
        assert [r.final_score for r in ranked] == pytest.approx([88.0, 76.0, 4.0])
        assert [r.style_score for r in ranked] == [70, 40, 10]
        assert [r.niche_match_score for r in ranked] == [100, 100, 0]

    def test_sorted_descending(self):
        requester = Requester(user_id=None, style_id=1, niche="WeddingFilm")
        mid = _candidate({2}, "WeddingFilm")      # 76
        low = _candidate({5}, "Documentary")      # 4
        high = _candidate({1}, "WeddingFilm")     # 88

        ranked = rank(requester, [mid, low, high])

        assert [r.final_score for r in ranked] == pytest.approx([88.0, 76.0, 4.0])

    def test_ties_keep_fetch_order(self):
        requester = Requester(user_id=None, style_id=1, niche="WeddingFilm")
        first = _candidate({1}, "WeddingFilm")
        second = _candidate({1, 4}, "WeddingFilm")

        assert [r.candidate_id for r in rank(requester, [first, second])] == [first.id, second.id]
        assert [r.candidate_id for r in rank(requester, [second, first])] == [second.id, first.id]

    def test_returns_every_candidate(self):
        requester = Requester(user_id=None, style_id=3, niche="Wildlife")
        candidates = [_candidate({s}, "Wildlife") for s in range(1, 10)] * 3
        assert len(rank(requester, candidates)) == 27

    def test_no_candidates(self):
        requester = Requester(user_id=None, style_id=1, niche="WeddingFilm")
        assert rank(requester, []) == []

    def test_missing_style_rejected(self):
        requester = Requester(user_id=None, style_id=None, niche="WeddingFilm")
        with pytest.raises(ValidationFailedError) as exc:
            rank(requester, [_candidate({1}, "WeddingFilm")])
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("niche", [None, ""])
    def test_missing_niche_rejected(self, niche):
        requester = Requester(user_id=None, style_id=1, niche=niche)
        with pytest.raises(ValidationFailedError):
            rank(requester, [_candidate({1}, "WeddingFilm")])

    def test_result_fields(self):
        requester = Requester(user_id=None, style_id=1, niche="WeddingFilm")
        cand = _candidate({2}, "WeddingFilm")
        result = rank(requester, [cand])[0]
        assert result.candidate_id == cand.id
        assert result.final_score == pytest.approx(76.0)
        assert (result.style_score, result.niche_match_score) == (40, 100)


class TestParseStyleIds:
    def test_integers_and_digit_strings(self):
        assert parse_style_ids([1, "2", " 3 ", 4.0]) == [1, 2, 3, 4]

    def test_non_integers_skipped(self):
        assert parse_style_ids([1.9, True, False, "x", "1.5", None, 7]) == [7]

    @pytest.mark.parametrize("raw", [None, "1", 1, {"id": 1}])
    def test_not_a_list(self, raw):
        assert parse_style_ids(raw) == []
