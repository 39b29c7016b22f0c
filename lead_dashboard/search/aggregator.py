"""Fan-out lead search: build queries, run them concurrently, merge and rank."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from lead_dashboard.etl.transform import to_place_candidates
from lead_dashboard.models import PlaceCandidate, ScoredLead
from lead_dashboard.scoring.lead_score import score_candidate
from lead_dashboard.search.industries import INDUSTRY_QUERIES
from lead_dashboard.vendors import google_places

logger = logging.getLogger(__name__)

OPERATIONAL = "OPERATIONAL"

SearchProvider = Callable[[str], List[PlaceCandidate]]


class InvalidSearchError(ValueError):
    """Raised when the search request itself is unusable (e.g. no location)."""


def google_places_provider(api_key: str, max_result_count: int = 20) -> SearchProvider:
    """Return a provider that runs one Places text search per query."""

    def _search(query: str) -> List[PlaceCandidate]:
        places = google_places.search_text(query, api_key=api_key, max_result_count=max_result_count)
        return to_place_candidates(places)

    return _search


def validate_location(location: object) -> str:
    if not isinstance(location, str) or not location.strip():
        raise InvalidSearchError("Location is required")
    return location.strip()


def build_queries(
    location: str,
    industries: Optional[Iterable[str]] = None,
    custom_query: Optional[str] = None,
) -> List[str]:
    """Expand industry keys (None means every known industry) into text queries."""
    location = validate_location(location)
    keys = list(INDUSTRY_QUERIES) if industries is None else list(industries)

    queries: List[str] = []
    for key in keys:
        templates = INDUSTRY_QUERIES.get(key)
        if not templates:
            logger.debug("Ignoring unknown industry key=%s", key)
            continue
        queries.extend(f"{template} in {location}" for template in templates)

    if isinstance(custom_query, str) and custom_query.strip():
        queries.append(f"{custom_query.strip()} in {location}")
    return queries


def _run_query(provider: SearchProvider, query: str) -> List[PlaceCandidate]:
    try:
        return list(provider(query) or [])
    except Exception as exc:  # noqa: BLE001
        logger.warning("Search failed for query=%s: %s", query, exc)
        return []


def fetch_all(provider: SearchProvider, queries: Sequence[str], max_workers: int = 8) -> List[List[PlaceCandidate]]:
    """Run every query concurrently; results come back in query order."""
    if not queries:
        return []
    workers = max(1, min(max_workers, len(queries)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda q: _run_query(provider, q), queries))


def merge_candidates(batches: Iterable[Iterable[PlaceCandidate]]) -> List[PlaceCandidate]:
    """Flatten and dedupe by place id; the last record seen for an id wins."""
    merged: Dict[str, PlaceCandidate] = {}
    for batch in batches:
        for candidate in batch:
            if not candidate.place_id:
                continue
            merged[candidate.place_id] = candidate
    return list(merged.values())


def is_operational(candidate: PlaceCandidate) -> bool:
    return not candidate.business_status or candidate.business_status == OPERATIONAL


def rank_candidates(candidates: Iterable[PlaceCandidate]) -> List[ScoredLead]:
    scored = [score_candidate(c) for c in candidates if is_operational(c)]
    return sorted(scored, key=lambda lead: lead.score, reverse=True)


def aggregate_leads(
    location: str,
    industries: Optional[Iterable[str]],
    custom_query: Optional[str],
    provider: SearchProvider,
    max_workers: int = 8,
) -> List[ScoredLead]:
    queries = build_queries(location, industries, custom_query)
    if not queries:
        logger.info("No queries resolved for location=%s; skipping upstream search", location)
        return []

    logger.info("Running %d text searches for location=%s", len(queries), location)
    batches = fetch_all(provider, queries, max_workers=max_workers)
    unique = merge_candidates(batches)
    leads = rank_candidates(unique)
    logger.info(
        "Aggregated %d raw results into %d unique, %d ranked leads",
        sum(len(batch) for batch in batches),
        len(unique),
        len(leads),
    )
    return leads
