"""Core data models shared by the lead search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

HOT = "Hot"
WARM = "Warm"
COLD = "Cold"


@dataclass(frozen=True, slots=True)
class Review:
    text: str = ""
    rating: Optional[float] = None
    author: str = ""
    time_description: str = ""


@dataclass(frozen=True, slots=True)
class PlaceCandidate:
    """Normalized snapshot of a business returned by the Places text search."""

    place_id: str
    name: Optional[str] = None
    address: Optional[str] = None
    national_phone: Optional[str] = None
    international_phone: Optional[str] = None
    website: Optional[str] = None
    maps_url: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    business_status: Optional[str] = None
    open_now: Optional[bool] = None
    types: Tuple[str, ...] = ()
    primary_type: Optional[str] = None
    description: Optional[str] = None
    weekday_hours: Tuple[str, ...] = ()
    reviews: Tuple[Review, ...] = field(default=(), repr=False)

    @property
    def phone(self) -> str:
        return self.international_phone or self.national_phone or ""


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    has_phone: bool
    has_website: bool
    has_reviews: bool
    high_rating: bool
    review_volume: Optional[str]  # "high", "medium" or None
    currently_open: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_phone": self.has_phone,
            "has_website": self.has_website,
            "has_reviews": self.has_reviews,
            "high_rating": self.high_rating,
            "review_volume": self.review_volume or False,
            "currently_open": self.currently_open,
        }


@dataclass(frozen=True, slots=True)
class ScoredLead:
    """A place candidate annotated with its lead quality score."""

    candidate: PlaceCandidate
    score: int
    label: str
    breakdown: ScoreBreakdown

    @property
    def place_id(self) -> str:
        return self.candidate.place_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the JSON shape served by the search API and read by the exporters."""
        place = self.candidate
        recent = place.reviews[0] if place.reviews else None
        return {
            "id": place.place_id,
            "name": place.name or "Unknown",
            "address": place.address or "",
            "phone": place.phone,
            "rating": place.rating,
            "review_count": place.review_count,
            "website": place.website or "",
            "maps_url": place.maps_url or "",
            "types": list(place.types),
            "open_now": place.open_now,
            "description": place.description or "",
            "business_type": place.primary_type or "",
            "weekday_hours": list(place.weekday_hours),
            "lead_score": self.score,
            "lead_label": self.label,
            "score_breakdown": self.breakdown.to_dict(),
            "recent_review": (
                {
                    "text": recent.text,
                    "rating": recent.rating,
                    "author": recent.author,
                    "time_description": recent.time_description,
                }
                if recent
                else None
            ),
        }
