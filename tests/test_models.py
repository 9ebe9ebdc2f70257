"""Unit tests for Pydantic data models."""
import pytest
from pydantic import ValidationError

from app.models import (
    Candidate,
    Category,
    CongestionLevel,
    FilterCriteria,
    GeoPoint,
    OpenStatus,
    PriceRange,
    SmokingPreference,
    TimeRange,
    WeeklyHours,
)
from app.services.congestion_estimator import VERDICTS


class TestFilterCriteria:
    """Test filter criteria construction."""

    def test_defaults(self):
        filters = FilterCriteria()
        assert filters.category == Category.RESTAURANT
        assert filters.max_distance == 400
        assert filters.price_range is None
        assert filters.smoking == SmokingPreference.ANY
        assert filters.cuisine is None

    def test_frozen(self):
        filters = FilterCriteria()
        with pytest.raises(ValidationError):
            filters.max_distance = 800

    def test_from_query_budget_bucket(self):
        filters = FilterCriteria.from_query(budget="3000")
        assert filters.price_range == PriceRange(min=1, max=2)

    def test_from_query_unknown_budget_means_no_range(self):
        assert FilterCriteria.from_query(budget="42").price_range is None

    def test_from_query_bad_values_fall_back(self):
        filters = FilterCriteria.from_query(
            category="karaoke", distance="far", smoking="maybe"
        )
        assert filters.category == Category.RESTAURANT
        assert filters.max_distance == 400
        assert filters.smoking == SmokingPreference.ANY

    def test_from_query_distance(self):
        assert FilterCriteria.from_query(distance="1200").max_distance == 1200

    def test_from_query_drops_cuisine_outside_restaurants(self):
        filters = FilterCriteria.from_query(category="bar", cuisine="ラーメン")
        assert filters.category == Category.BAR
        assert filters.cuisine is None

    def test_search_keyword_combines_cuisine_and_smoking(self):
        filters = FilterCriteria.from_query(cuisine="ラーメン", smoking="allowed")
        assert filters.search_keyword() == "ラーメン 喫煙可"

    def test_search_keyword_no_smoking(self):
        filters = FilterCriteria(smoking=SmokingPreference.PROHIBITED)
        assert filters.search_keyword() == "禁煙"

    def test_search_keyword_none(self):
        assert FilterCriteria().search_keyword() is None


class TestOpeningHoursModels:
    """Test opening hours models."""

    def test_time_range_bounds(self):
        with pytest.raises(ValidationError):
            TimeRange(open_minute=0, close_minute=1440)

    def test_weekly_hours_day_text(self):
        hours = WeeklyHours(weekday_text=["月曜日: 定休日", ""])
        assert hours.has_hours()
        assert hours.get_day_text(0) == "月曜日: 定休日"
        assert hours.get_day_text(1) is None
        assert hours.get_day_text(6) is None

    def test_weekly_hours_empty(self):
        assert not WeeklyHours().has_hours()


class TestCandidate:
    """Test candidate model."""

    def test_defaults_are_unknown_not_closed(self):
        candidate = Candidate(venue_id="v1", location=GeoPoint(lat=35.0, lng=139.0))
        assert candidate.open_status == OpenStatus.UNKNOWN
        assert candidate.congestion is None
        assert candidate.reviews == []

    def test_serializes_enums_as_values(self):
        candidate = Candidate(
            venue_id="v1",
            location=GeoPoint(lat=35.0, lng=139.0),
            open_status=OpenStatus.OPEN,
            congestion=VERDICTS[CongestionLevel.LOW],
        )
        data = candidate.model_dump(mode="json")
        assert data["open_status"] == "open"
        assert data["congestion"] == {"level": "low", "label": "普通", "color": "#81c784"}

    def test_to_string(self):
        candidate = Candidate(venue_id="v1", name="蕎麦処", location=GeoPoint(lat=35.0, lng=139.0))
        assert "蕎麦処" in str(candidate)
