"""Unit tests for the venue router."""
import pytest
from unittest.mock import AsyncMock, Mock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.errors import PositionError, PositionErrorKind, TransportError, TransportErrorKind
from app.middleware import normalize_endpoint
from app.models import (
    Candidate,
    Category,
    GeoPoint,
    OpenStatus,
    SmokingPreference,
    VenueDetailView,
)
from app.routers import set_venue_handler, venue_router


@pytest.fixture
def mock_handler():
    """Create mock VenueHandler."""
    handler = Mock()
    handler.search_venues = AsyncMock(return_value=[])
    handler.get_venue_details = AsyncMock()
    handler.ping.return_value = {"status": "pong"}
    return handler


@pytest.fixture
def client(mock_handler):
    """Test client with the router mounted and the handler injected."""
    app = FastAPI()
    app.include_router(venue_router)
    set_venue_handler(mock_handler)
    yield TestClient(app)
    set_venue_handler(None)


class TestSearchEndpoint:
    """Test GET /v1/venues/search."""

    def test_returns_candidates(self, client, mock_handler):
        mock_handler.search_venues.return_value = [
            Candidate(
                venue_id="v1",
                name="蕎麦処",
                rating=4.2,
                location=GeoPoint(lat=35.0, lng=139.0),
                open_status=OpenStatus.OPEN,
            )
        ]

        response = client.get("/v1/venues/search", params={"lat": 35.0, "lng": 139.0})

        assert response.status_code == 200
        body = response.json()
        assert body[0]["venue_id"] == "v1"
        assert body[0]["open_status"] == "open"

    def test_query_becomes_filters(self, client, mock_handler):
        client.get(
            "/v1/venues/search",
            params={
                "lat": 35.0,
                "lng": 139.0,
                "category": "cafe",
                "distance": "800",
                "budget": "1000",
                "smoking": "no-smoking",
            },
        )

        geo_provider, filters = mock_handler.search_venues.call_args.args
        assert geo_provider.get_current_position() == GeoPoint(lat=35.0, lng=139.0)
        assert filters.category == Category.CAFE
        assert filters.max_distance == 800
        assert filters.price_range.max == 1
        assert filters.smoking == SmokingPreference.PROHIBITED

    def test_position_error_is_422(self, client, mock_handler):
        mock_handler.search_venues.side_effect = PositionError(PositionErrorKind.DENIED)

        response = client.get("/v1/venues/search", params={"position_error": "denied"})

        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "denied"

    @pytest.mark.parametrize(
        "kind,status_code",
        [
            (TransportErrorKind.QUOTA_EXCEEDED, 429),
            (TransportErrorKind.DENIED, 403),
            (TransportErrorKind.INVALID_REQUEST, 400),
            (TransportErrorKind.UNAVAILABLE, 503),
        ],
    )
    def test_transport_errors_map_to_status(self, client, mock_handler, kind, status_code):
        mock_handler.search_venues.side_effect = TransportError(kind)

        response = client.get("/v1/venues/search", params={"lat": 35.0, "lng": 139.0})

        assert response.status_code == status_code
        assert response.json()["detail"]["message"] == TransportError(kind).message

    def test_unexpected_error_is_500(self, client, mock_handler):
        mock_handler.search_venues.side_effect = RuntimeError("boom")

        response = client.get("/v1/venues/search", params={"lat": 35.0, "lng": 139.0})

        assert response.status_code == 500


class TestDetailsEndpoint:
    """Test GET /v1/venues/{venue_id}/details."""

    def test_passes_name_and_location(self, client, mock_handler):
        mock_handler.get_venue_details.return_value = VenueDetailView(venue_id="v1")

        response = client.get(
            "/v1/venues/v1/details", params={"name": "蕎麦処", "lat": 35.0, "lng": 139.0}
        )

        assert response.status_code == 200
        assert response.json()["details_available"] is False
        mock_handler.get_venue_details.assert_awaited_once_with(
            "v1", name="蕎麦処", location=GeoPoint(lat=35.0, lng=139.0)
        )

    def test_location_requires_both_coordinates(self, client, mock_handler):
        mock_handler.get_venue_details.return_value = VenueDetailView(venue_id="v1")

        client.get("/v1/venues/v1/details", params={"lat": 35.0})

        assert mock_handler.get_venue_details.call_args.kwargs["location"] is None


class TestHandlerInjection:
    """Test behavior before the handler is injected."""

    def test_ping(self, client):
        assert client.get("/ping").json() == {"status": "pong"}

    def test_not_ready_is_503(self):
        app = FastAPI()
        app.include_router(venue_router)
        set_venue_handler(None)

        response = TestClient(app).get("/v1/venues/search", params={"lat": 35.0, "lng": 139.0})

        assert response.status_code == 503


class TestNormalizeEndpoint:
    """Test metrics path normalization."""

    def test_place_id_collapsed(self):
        assert (
            normalize_endpoint("/v1/venues/ChIJN1t_tDeuEmsRUsoyG83frY4/details")
            == "/v1/venues/{id}/details"
        )

    def test_static_paths_kept(self):
        assert normalize_endpoint("/v1/venues/search") == "/v1/venues/search"
