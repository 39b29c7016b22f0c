"""Client utilities for the Google Places API (v1)."""

import logging
from typing import Any, Dict, List

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
# One connection per concurrent text search in a fan-out.
_SESSION.mount("https://", HTTPAdapter(pool_connections=4, pool_maxsize=32))
_BASE_URL = "https://places.googleapis.com/v1/places"
REQUEST_TIMEOUT = 10

FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.nationalPhoneNumber",
        "places.internationalPhoneNumber",
        "places.rating",
        "places.userRatingCount",
        "places.websiteUri",
        "places.googleMapsUri",
        "places.types",
        "places.businessStatus",
        "places.currentOpeningHours",
        "places.editorialSummary",
        "places.reviews",
        "places.primaryTypeDisplayName",
        "places.regularOpeningHours",
    ]
)

AUTOCOMPLETE_TYPES = ["locality", "sublocality", "administrative_area_level_1", "postal_code"]


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def _post(path: str, body: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
    response = _SESSION.post(f"{_BASE_URL}:{path}", json=body, headers=headers, timeout=REQUEST_TIMEOUT)
    if not response.ok:
        logger.error("%s failed: status=%s, body=%s", path, response.status_code, response.text[:300])
        raise GooglePlacesError(f"{path} returned HTTP {response.status_code}")
    return response.json() or {}


def search_text(query: str, api_key: str, max_result_count: int = 20) -> List[Dict[str, Any]]:
    """Run one text search and return the raw ``places`` list."""
    headers = {
        "Content-Type": "application/json",
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": FIELD_MASK,
    }
    body = {"textQuery": query, "maxResultCount": max_result_count, "rankPreference": "RELEVANCE"}
    payload = _post("searchText", body, headers)
    return payload.get("places") or []


def autocomplete(input_text: str, api_key: str) -> List[Dict[str, Any]]:
    headers = {"Content-Type": "application/json", "X-Goog-Api-Key": api_key}
    body = {"input": input_text, "includedPrimaryTypes": AUTOCOMPLETE_TYPES}
    payload = _post("autocomplete", body, headers)
    return payload.get("suggestions") or []
