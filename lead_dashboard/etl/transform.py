"""Utilities for transforming Places API payloads into pipeline models."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from lead_dashboard.models import PlaceCandidate, Review

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    """Places wraps localized strings as ``{"text": ..., "languageCode": ...}``."""
    if isinstance(value, dict):
        value = value.get("text")
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_review(raw: Dict[str, Any]) -> Review:
    author = raw.get("authorAttribution") or {}
    return Review(
        text=_text(raw.get("text")) or "",
        rating=_safe_float(raw.get("rating")),
        author=author.get("displayName") or "",
        time_description=raw.get("relativePublishTimeDescription") or "",
    )


def to_place_candidate(raw: Dict[str, Any]) -> Optional[PlaceCandidate]:
    """Build a PlaceCandidate from a ``places[]`` entry, or None when it lacks an id."""
    place_id = raw.get("id")
    if not place_id:
        logger.debug("Skipping place without id: %s", raw.get("displayName"))
        return None

    current_hours = raw.get("currentOpeningHours") or {}
    regular_hours = raw.get("regularOpeningHours") or {}
    open_now = current_hours.get("openNow")

    return PlaceCandidate(
        place_id=place_id,
        name=_text(raw.get("displayName")),
        address=_text(raw.get("formattedAddress")),
        national_phone=_text(raw.get("nationalPhoneNumber")),
        international_phone=_text(raw.get("internationalPhoneNumber")),
        website=_text(raw.get("websiteUri")),
        maps_url=_text(raw.get("googleMapsUri")),
        rating=_safe_float(raw.get("rating")),
        review_count=_safe_int(raw.get("userRatingCount")),
        business_status=raw.get("businessStatus") or None,
        open_now=bool(open_now) if open_now is not None else None,
        types=tuple(raw.get("types") or ()),
        primary_type=_text(raw.get("primaryTypeDisplayName")),
        description=_text(raw.get("editorialSummary")),
        weekday_hours=tuple(regular_hours.get("weekdayDescriptions") or ()),
        reviews=tuple(_to_review(r) for r in raw.get("reviews") or () if isinstance(r, dict)),
    )


def to_place_candidates(places: Iterable[Dict[str, Any]]) -> List[PlaceCandidate]:
    candidates = []
    for raw in places or []:
        if not isinstance(raw, dict):
            continue
        candidate = to_place_candidate(raw)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def to_suggestions(raw_suggestions: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Reshape autocomplete suggestions, keeping only place predictions."""
    suggestions = []
    for item in raw_suggestions or []:
        prediction = item.get("placePrediction") if isinstance(item, dict) else None
        if not prediction:
            continue
        suggestions.append(
            {
                "description": _text(prediction.get("text")) or "",
                "place_id": prediction.get("placeId") or "",
            }
        )
    return suggestions
