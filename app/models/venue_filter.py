"""Search filter criteria models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_DISTANCE_M = 400  # walking 5 minutes


class Category(str, Enum):
    """Venue category; values double as Places API ``type``."""
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    BAR = "bar"


class SmokingPreference(str, Enum):
    """User smoking preference."""
    ANY = "any"
    ALLOWED = "allowed"
    PROHIBITED = "no-smoking"


# Search keyword appended for each smoking preference
SMOKING_KEYWORDS: dict[SmokingPreference, str] = {
    SmokingPreference.ALLOWED: "喫煙可",
    SmokingPreference.PROHIBITED: "禁煙",
}


class PriceRange(BaseModel):
    """Inclusive price tier range (0..4)."""
    min: int = Field(ge=0, le=4)
    max: int = Field(ge=0, le=4)

    model_config = ConfigDict(frozen=True)

    def contains(self, price_level: int) -> bool:
        return self.min <= price_level <= self.max


# Budget bucket (yen per person) -> price tier range
BUDGET_PRICE_MAP: dict[str, PriceRange] = {
    "1000": PriceRange(min=0, max=1),
    "3000": PriceRange(min=1, max=2),
    "5000": PriceRange(min=2, max=3),
    "10000": PriceRange(min=3, max=4),
    "10001": PriceRange(min=3, max=4),
}


class FilterCriteria(BaseModel):
    """Immutable user search constraints.

    category and max_distance always carry a default; everything else is optional.
    """

    category: Category = Category.RESTAURANT
    max_distance: int = Field(default=DEFAULT_MAX_DISTANCE_M, gt=0)  # Meters
    price_range: Optional[PriceRange] = None
    smoking: SmokingPreference = SmokingPreference.ANY
    cuisine: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        distance: Optional[str] = None,
        budget: Optional[str] = None,
        smoking: Optional[str] = None,
        cuisine: Optional[str] = None,
        default_category: str = Category.RESTAURANT.value,
        default_max_distance: int = DEFAULT_MAX_DISTANCE_M,
    ) -> "FilterCriteria":
        """Build criteria from raw query-string values.

        Unknown categories and non-numeric distances fall back to the defaults,
        an unknown budget bucket means no price constraint, and a cuisine is
        only kept for restaurants.
        """
        try:
            resolved_category = Category(category or default_category)
        except ValueError:
            resolved_category = Category(default_category)

        try:
            max_distance = int(distance) if distance else default_max_distance
        except ValueError:
            max_distance = default_max_distance
        if max_distance <= 0:
            max_distance = default_max_distance

        try:
            resolved_smoking = SmokingPreference(smoking or SmokingPreference.ANY.value)
        except ValueError:
            resolved_smoking = SmokingPreference.ANY

        if resolved_category != Category.RESTAURANT:
            cuisine = None

        return cls(
            category=resolved_category,
            max_distance=max_distance,
            price_range=BUDGET_PRICE_MAP.get(budget) if budget else None,
            smoking=resolved_smoking,
            cuisine=cuisine or None,
        )

    def search_keyword(self) -> Optional[str]:
        """Keyword for the upstream search: cuisine plus smoking keyword."""
        keywords = []
        if self.cuisine:
            keywords.append(self.cuisine)
        smoking_keyword = SMOKING_KEYWORDS.get(self.smoking)
        if smoking_keyword:
            keywords.append(smoking_keyword)
        return " ".join(keywords) if keywords else None
