"""Data models package for the Let's Eat server."""
from app.models.venue import (
    Candidate,
    GeoPoint,
)
from app.models.opening_hours import (
    OpenStatus,
    TimeRange,
    WeeklyHours,
)
from app.models.congestion import (
    CongestionLevel,
    CongestionVerdict,
    ReviewCrowdSignal,
)
from app.models.venue_filter import (
    BUDGET_PRICE_MAP,
    Category,
    FilterCriteria,
    PriceRange,
    SmokingPreference,
)
from app.models.venue_review import (
    SmokingPolicy,
    VenueDetails,
    VenueDetailView,
    VenueReview,
)

__all__ = [
    # Venue models
    "Candidate",
    "GeoPoint",
    # Opening hours models
    "OpenStatus",
    "TimeRange",
    "WeeklyHours",
    # Congestion models
    "CongestionLevel",
    "CongestionVerdict",
    "ReviewCrowdSignal",
    # Filter models
    "BUDGET_PRICE_MAP",
    "Category",
    "FilterCriteria",
    "PriceRange",
    "SmokingPreference",
    # Detail models
    "SmokingPolicy",
    "VenueDetails",
    "VenueDetailView",
    "VenueReview",
]
