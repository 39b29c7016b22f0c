"""Heuristic lead quality scoring for place candidates.

Scoring is a pure function of the candidate: the breakdown is recomputed on
every call and nothing outside the record influences the result.

Points:
    phone (national or international)  +2
    website                            +2
    at least one review                +1
    rating above 4.0                   +1
    more than 50 reviews               +2  (more than 20: +1)
    open right now                     +1

The review volume tier is additive with the "at least one review" point, so
the maximum score is 9.
"""

from lead_dashboard.models import COLD, HOT, WARM, PlaceCandidate, ScoreBreakdown, ScoredLead

MAX_SCORE = 9
HOT_THRESHOLD = 7
WARM_THRESHOLD = 4


def compute_breakdown(candidate: PlaceCandidate) -> ScoreBreakdown:
    review_count = candidate.review_count or 0

    review_volume = None
    if review_count > 50:
        review_volume = "high"
    elif review_count > 20:
        review_volume = "medium"

    return ScoreBreakdown(
        has_phone=bool(candidate.national_phone or candidate.international_phone),
        has_website=bool(candidate.website),
        has_reviews=review_count > 0,
        high_rating=candidate.rating is not None and candidate.rating > 4.0,
        review_volume=review_volume,
        currently_open=candidate.open_now is True,
    )


def points_for(breakdown: ScoreBreakdown) -> int:
    score = 0
    if breakdown.has_phone:
        score += 2
    if breakdown.has_website:
        score += 2
    if breakdown.has_reviews:
        score += 1
    if breakdown.high_rating:
        score += 1
    if breakdown.review_volume == "high":
        score += 2
    elif breakdown.review_volume == "medium":
        score += 1
    if breakdown.currently_open:
        score += 1
    return score


def label_for_score(score: int) -> str:
    """Map a score onto its band; each band includes its lower bound."""
    if score >= HOT_THRESHOLD:
        return HOT
    if score >= WARM_THRESHOLD:
        return WARM
    return COLD


def score_candidate(candidate: PlaceCandidate) -> ScoredLead:
    breakdown = compute_breakdown(candidate)
    score = points_for(breakdown)
    return ScoredLead(candidate=candidate, score=score, label=label_for_score(score), breakdown=breakdown)
