"""Venue candidate data models using Pydantic."""
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from app.models.congestion import CongestionVerdict
from app.models.opening_hours import OpenStatus


class GeoPoint(BaseModel):
    """A latitude/longitude pair in degrees."""
    lat: float
    lng: float

    model_config = ConfigDict(frozen=True)


class Candidate(BaseModel):
    """A nearby venue plus the signals derived for one search request.

    Built from a raw Places nearby-search record. ``distance_m``,
    ``open_status`` and ``congestion`` are filled in by the search pipeline;
    the ``*_text``/``*_time`` fields are presentation extras added by the handler.
    """

    venue_id: str
    name: str = ""
    rating: Optional[float] = None  # 0-5, absent when unrated
    rating_count: int = 0
    price_level: Optional[int] = None  # 0-4, absent when unknown
    location: GeoPoint
    address: str = ""
    types: list[str] = Field(default_factory=list)

    # Monday-first weekday text when the record carries it
    weekly_hours: Optional[list[str]] = None
    # Record-level opening_hours.open_now; used only when weekly_hours is absent
    open_now_hint: Optional[bool] = None
    # Newest first
    reviews: list[str] = Field(default_factory=list)

    photo_url: Optional[str] = None
    icon: Optional[str] = None

    # Derived per request
    distance_m: Optional[float] = None
    open_status: OpenStatus = OpenStatus.UNKNOWN
    congestion: Optional[CongestionVerdict] = None

    # Presentation
    price_text: str = ""
    distance_text: Optional[str] = None
    walk_time: Optional[str] = None
    taxi_time: Optional[str] = None

    def __str__(self) -> str:
        return (
            f"Candidate(name={self.name}, rating={self.rating}, "
            f"rating_count={self.rating_count}, distance_m={self.distance_m})"
        )
