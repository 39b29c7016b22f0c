import itertools

import pytest

from lead_dashboard.models import COLD, HOT, WARM, PlaceCandidate
from lead_dashboard.scoring import lead_score


def make_candidate(phone=False, website=False, review_count=None, rating=None, open_now=None):
    return PlaceCandidate(
        place_id="pid",
        national_phone="(512) 555-0100" if phone else None,
        website="https://example.com" if website else None,
        review_count=review_count,
        rating=rating,
        open_now=open_now,
    )


def test_example_warm_lead():
    candidate = make_candidate(phone=True, review_count=30, rating=4.5, open_now=True)

    lead = lead_score.score_candidate(candidate)

    assert lead.score == 6
    assert lead.label == WARM
    assert lead.breakdown.has_phone is True
    assert lead.breakdown.has_website is False
    assert lead.breakdown.review_volume == "medium"


def test_empty_candidate_scores_zero():
    lead = lead_score.score_candidate(PlaceCandidate(place_id="pid"))
    assert lead.score == 0
    assert lead.label == COLD


def test_perfect_candidate_scores_nine():
    lead = lead_score.score_candidate(make_candidate(True, True, 51, 4.9, True))
    assert lead.score == lead_score.MAX_SCORE
    assert lead.label == HOT


def test_international_phone_counts():
    candidate = PlaceCandidate(place_id="pid", international_phone="+1 512-555-0100")
    assert lead_score.compute_breakdown(candidate).has_phone is True


@pytest.mark.parametrize(
    "review_count, volume, points",
    [(None, None, 0), (0, None, 0), (1, None, 1), (20, None, 1), (21, "medium", 2), (50, "medium", 2), (51, "high", 3)],
)
def test_review_tiers_are_additive(review_count, volume, points):
    breakdown = lead_score.compute_breakdown(make_candidate(review_count=review_count))
    assert breakdown.review_volume == volume
    assert lead_score.points_for(breakdown) == points


@pytest.mark.parametrize("rating, expected", [(None, False), (4.0, False), (4.01, True), (5.0, True)])
def test_high_rating_is_strictly_above_four(rating, expected):
    assert lead_score.compute_breakdown(make_candidate(rating=rating)).high_rating is expected


def test_open_now_false_or_unknown_scores_nothing():
    assert lead_score.compute_breakdown(make_candidate(open_now=False)).currently_open is False
    assert lead_score.compute_breakdown(make_candidate(open_now=None)).currently_open is False


@pytest.mark.parametrize(
    "score, label",
    [(0, COLD), (3, COLD), (4, WARM), (6, WARM), (7, HOT), (9, HOT)],
)
def test_label_band_boundaries(score, label):
    assert lead_score.label_for_score(score) == label


def test_labels_partition_full_range():
    labels = [lead_score.label_for_score(s) for s in range(lead_score.MAX_SCORE + 1)]
    assert labels == [COLD] * 4 + [WARM] * 3 + [HOT] * 3


def test_score_bounded_and_monotonic_over_flag_combinations():
    review_levels = [None, 1, 21, 51]
    for phone, website, reviews, high, open_now in itertools.product(
        (False, True), (False, True), range(len(review_levels)), (False, True), (False, True)
    ):
        base = make_candidate(phone, website, review_levels[reviews], 4.5 if high else 3.0, open_now)
        score = lead_score.score_candidate(base).score
        assert 0 <= score <= lead_score.MAX_SCORE

        upgrades = [
            make_candidate(True, website, review_levels[reviews], 4.5 if high else 3.0, open_now),
            make_candidate(phone, True, review_levels[reviews], 4.5 if high else 3.0, open_now),
            make_candidate(phone, website, review_levels[min(reviews + 1, 3)], 4.5 if high else 3.0, open_now),
            make_candidate(phone, website, review_levels[reviews], 4.5, open_now),
            make_candidate(phone, website, review_levels[reviews], 4.5 if high else 3.0, True),
        ]
        for upgraded in upgrades:
            assert lead_score.score_candidate(upgraded).score >= score


def test_scoring_is_pure():
    candidate = make_candidate(True, True, 30, 4.2, False)
    assert lead_score.score_candidate(candidate) == lead_score.score_candidate(candidate)
