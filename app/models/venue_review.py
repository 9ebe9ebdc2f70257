"""Venue detail and review models for Google Places details data."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.models.congestion import ReviewCrowdSignal


class VenueReview(BaseModel):
    """A single user review from Google Places."""
    author_name: str = ""
    rating: Optional[int] = None
    text: str = ""
    relative_time: str = ""
    language: Optional[str] = None


class VenueDetails(BaseModel):
    """Details for one venue as returned by the detail transport."""
    venue_id: str
    weekday_text: list[str] = Field(default_factory=list)  # Monday first
    reviews: list[VenueReview] = Field(default_factory=list)  # Newest first
    types: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    map_url: Optional[str] = None

    def review_texts(self) -> list[str]:
        """Review bodies in the order supplied."""
        return [review.text for review in self.reviews]


class SmokingPolicy(str, Enum):
    """Smoking policy label read from reviews."""
    ALLOWED = "喫煙可"
    SEPARATED = "分煙"
    PROHIBITED = "禁煙"


class VenueDetailView(BaseModel):
    """Derived detail data for one selected venue.

    Any field may be absent when the detail fetch failed; the view is still valid.
    """
    venue_id: str
    details_available: bool = False
    today_hours: Optional[str] = None
    appeal_tags: list[str] = Field(default_factory=list)
    ambience_tags: list[str] = Field(default_factory=list)
    smoking_policy: Optional[SmokingPolicy] = None
    review_crowd: ReviewCrowdSignal = ReviewCrowdSignal.UNKNOWN
    website: Optional[str] = None
    phone: Optional[str] = None
    map_url: Optional[str] = None
    navigation_url: Optional[str] = None
    tabelog_url: Optional[str] = None
