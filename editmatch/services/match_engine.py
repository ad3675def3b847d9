"""
EditMatch — Editor/Creator Match (EMC) scoring engine.

Ranks a pool of creators against one requester by combining two signals:

  1. Style affinity — the requester's single artwork style against the
     creator's one-to-three styles:
       exact match  -> 70
       soft match   -> 40   (via the one-directional affinity table)
       otherwise    -> 10   (every pairing earns *some* score)
  2. Niche match — exact, case-sensitive equality: 100 or 0.

  final_score = 0.6 × niche_match_score + 0.4 × style_score

Everything here is pure and holds no mutable state; the module can be
shared freely across concurrent requests.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

import structlog

from editmatch.exceptions import ValidationFailedError

logger = structlog.get_logger("editmatch.match_engine")

# ──────────────────────────────────────────────────────────────────────────────
# Weights & scores
# ──────────────────────────────────────────────────────────────────────────────

NICHE_WEIGHT: float = 0.6
STYLE_WEIGHT: float = 0.4

EXACT_STYLE_SCORE: int = 70
SOFT_STYLE_SCORE: int = 40
WEAK_STYLE_SCORE: int = 10

NICHE_MATCH_SCORE: int = 100
NICHE_MISS_SCORE: int = 0

# ──────────────────────────────────────────────────────────────────────────────
# Affinity table: style id -> styles that softly match it.
# Read in one direction only (row of the requester's style).  Not symmetric:
# 7 -> 1 has no 1 -> 7, and 1 -> 3 has no 3 -> 1.
# ──────────────────────────────────────────────────────────────────────────────

# fmt: off
STYLE_AFFINITY: Mapping[int, frozenset[int]] = MappingProxyType({
    1: frozenset({2, 3}),
    2: frozenset({1}),
    3: frozenset({4}),
    4: frozenset({3}),
    5: frozenset({6}),
    6: frozenset({5, 8}),
    7: frozenset({1}),
    8: frozenset({9}),
    9: frozenset({8}),
})
# fmt: on

_NO_SOFT_MATCHES: frozenset[int] = frozenset()


@dataclass(frozen=True)
class Requester:
    """The project owner's stored selection."""

    user_id: uuid.UUID | None
    style_id: int | None
    niche: str | None


@dataclass(frozen=True)
class Candidate:
    """An active, non-banned creator as fetched for ranking."""

    id: uuid.UUID
    style_ids: frozenset[int]
    niche: str | None


@dataclass(frozen=True)
class MatchResult:
    candidate_id: uuid.UUID
    final_score: float
    style_score: int
    niche_match_score: int


# ──────────────────────────────────────────────────────────────────────────────
# Scorers
# ──────────────────────────────────────────────────────────────────────────────

def parse_style_ids(raw: Any) -> list[int]:
    """Style ids from a stored ``artworks`` JSON value.

    Integers, integral floats and decimal-digit strings are kept.  Anything
    else is skipped with a warning, so ``1.9`` or ``true`` never turn into
    style 1.
    """
    if not isinstance(raw, list):
        return []
    style_ids: list[int] = []
    for value in raw:
        if isinstance(value, int) and not isinstance(value, bool):
            style_ids.append(value)
        elif isinstance(value, float) and value.is_integer():
            style_ids.append(int(value))
        elif isinstance(value, str) and value.strip().isdecimal():
            style_ids.append(int(value))
        else:
            logger.warning("artwork_id_not_integer", value=value)
    return style_ids


def soft_matches(style_id: int) -> frozenset[int]:
    """Return the styles that softly match ``style_id`` (empty if unknown)."""
    return STYLE_AFFINITY.get(style_id, _NO_SOFT_MATCHES)


def style_affinity_score(requester_style: int, candidate_styles: Iterable[int]) -> int:
    """Score one requester style against a creator's style set.

    Exact containment wins outright; otherwise any overlap with the
    requester style's affinity row is a soft match; otherwise weak.
    """
    styles = frozenset(candidate_styles)
    if requester_style in styles:
        return EXACT_STYLE_SCORE
    if styles & soft_matches(requester_style):
        return SOFT_STYLE_SCORE
    return WEAK_STYLE_SCORE


def niche_match_score(requester_niche: str | None, candidate_niche: str | None) -> int:
    if requester_niche and candidate_niche and requester_niche == candidate_niche:
        return NICHE_MATCH_SCORE
    return NICHE_MISS_SCORE


def final_score(niche_score: int, style_score: int) -> float:
    return NICHE_WEIGHT * niche_score + STYLE_WEIGHT * style_score


# ──────────────────────────────────────────────────────────────────────────────
# Ranking
# ──────────────────────────────────────────────────────────────────────────────

def score_candidate(requester: Requester, candidate: Candidate) -> MatchResult:
    style = style_affinity_score(requester.style_id, candidate.style_ids)
    niche = niche_match_score(requester.niche, candidate.niche)
    return MatchResult(
        candidate_id=candidate.id,
        final_score=round(final_score(niche, style), 4),
        style_score=style,
        niche_match_score=niche,
    )


def rank(requester: Requester, candidates: Sequence[Candidate]) -> list[MatchResult]:
    """Score every candidate and order them by ``final_score`` descending.

    Candidates with equal final scores keep their relative input order
    (``sorted`` is stable).  No truncation: the caller decides how many
    results to display.

    Raises
    ------
    ValidationFailedError
        If the requester has no style or no niche recorded.
    """
    if requester.style_id is None or not requester.niche:
        raise ValidationFailedError("User missing artwork or niche")

    results = [score_candidate(requester, c) for c in candidates]
    ranked = sorted(results, key=lambda r: r.final_score, reverse=True)

    logger.debug(
        "rank_complete",
        requester_id=str(requester.user_id) if requester.user_id else None,
        candidate_count=len(ranked),
        top_score=ranked[0].final_score if ranked else None,
    )
    return ranked
