"""Google Places API client for nearby venue search and venue details."""
import logging
import time
from typing import Any, Optional

import httpx

from app.errors import TransportError, TransportErrorKind
from app.metrics import (
    GOOGLE_PLACES_API_CALLS_TOTAL,
    GOOGLE_PLACES_API_CALL_DURATION_SECONDS,
    GOOGLE_PLACES_API_ERRORS_TOTAL,
)
from app.models import Candidate, GeoPoint, VenueDetails, VenueReview

logger = logging.getLogger(__name__)

# Google Places API (legacy JSON web service) base URL
GOOGLE_PLACES_API_BASE = "https://maps.googleapis.com/maps/api/place"

# Fields requested for the detail view
DETAIL_FIELDS = ",".join([
    "opening_hours",
    "reviews",
    "types",
    "editorial_summary",
    "website",
    "formatted_phone_number",
    "url",
])

PHOTO_MAX_WIDTH = 600

# Places status -> transport error kind
STATUS_ERROR_KINDS: dict[str, TransportErrorKind] = {
    "OVER_QUERY_LIMIT": TransportErrorKind.QUOTA_EXCEEDED,
    "REQUEST_DENIED": TransportErrorKind.DENIED,
    "INVALID_REQUEST": TransportErrorKind.INVALID_REQUEST,
}


class GooglePlacesAPIClient:
    """Async HTTP client for the Google Places nearby search and details endpoints.

    Nearby search failures are raised as categorized TransportError; detail
    failures are logged and reported as None so the detail view can degrade.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = GOOGLE_PLACES_API_BASE,
        language: str = "ja",
        timeout: float = 10.0,
    ):
        """Initialize Google Places API client.

        Args:
            api_key: Google Maps/Places API key
            base_url: Base URL for the Places web service
            language: Response language
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout

        # Create async HTTP client with connection pooling
        self.client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
        )

    async def close(self):
        """Close the HTTP client and clean up resources."""
        await self.client.aclose()

    async def _get(self, endpoint: str, params: dict[str, str]) -> dict:
        """GET a Places endpoint and return its JSON body.

        Raises:
            TransportError: UNAVAILABLE on HTTP, timeout or connection errors
        """
        url = f"{self.base_url}/{endpoint}/json"
        query = {**params, "language": self.language, "key": self.api_key}

        logger.debug(f"[GooglePlacesAPIClient] GET {endpoint} params={params}")

        start_time = time.perf_counter()
        error_type = None

        try:
            response = await self.client.get(url, params=query)
            logger.debug(f"[GooglePlacesAPIClient] Response status: {response.status_code}")
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            error_type = "http_error"
            logger.error(f"[GooglePlacesAPIClient] HTTP error on {endpoint}: {e}")
            raise TransportError(TransportErrorKind.UNAVAILABLE, status=str(e.response.status_code))
        except httpx.TimeoutException as e:
            error_type = "timeout"
            logger.error(f"[GooglePlacesAPIClient] Timeout on {endpoint}: {e}")
            raise TransportError(TransportErrorKind.UNAVAILABLE, status="TIMEOUT")
        except httpx.RequestError as e:
            error_type = "connection_error"
            logger.error(f"[GooglePlacesAPIClient] Request error on {endpoint}: {e}")
            raise TransportError(TransportErrorKind.UNAVAILABLE, status="CONNECTION_ERROR")
        except ValueError as e:
            error_type = "invalid_json"
            logger.error(f"[GooglePlacesAPIClient] Invalid JSON from {endpoint}: {e}")
            raise TransportError(TransportErrorKind.UNAVAILABLE, status="INVALID_JSON")
        finally:
            duration = time.perf_counter() - start_time
            GOOGLE_PLACES_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            if error_type:
                GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
                GOOGLE_PLACES_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type=error_type).inc()
            else:
                GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="success").inc()

    async def nearby_search(
        self,
        location: GeoPoint,
        radius: int,
        place_type: str,
        keyword: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Search venues around a location.

        The request asks for open venues only, but callers re-derive open status
        from each record themselves.

        Args:
            location: Search center
            radius: Search radius in meters
            place_type: Places API type (restaurant, cafe, bar)
            keyword: Optional free-text keyword

        Returns:
            Raw place records; empty list for ZERO_RESULTS

        Raises:
            TransportError: Categorized by the Places status
        """
        params = {
            "location": f"{location.lat},{location.lng}",
            "radius": str(radius),
            "type": place_type,
            "opennow": "true",
        }
        if keyword:
            params["keyword"] = keyword

        data = await self._get("nearbysearch", params)
        status = data.get("status", "")

        if status == "OK":
            results = data.get("results", [])
            logger.info(f"[GooglePlacesAPIClient] nearby_search: {len(results)} results")
            return results

        if status == "ZERO_RESULTS":
            logger.info("[GooglePlacesAPIClient] nearby_search: zero results")
            return []

        kind = STATUS_ERROR_KINDS.get(status, TransportErrorKind.UNAVAILABLE)
        GOOGLE_PLACES_API_ERRORS_TOTAL.labels(endpoint="nearbysearch", error_type=kind.value).inc()
        logger.error(
            f"[GooglePlacesAPIClient] nearby_search failed: status={status}, "
            f"error_message={data.get('error_message', '')}"
        )
        raise TransportError(kind, status=status)

    async def get_place_details(self, place_id: str) -> Optional[VenueDetails]:
        """Fetch hours, reviews and links for one venue.

        Args:
            place_id: Google Place ID

        Returns:
            VenueDetails, or None on any failure
        """
        params = {
            "place_id": place_id,
            "fields": DETAIL_FIELDS,
            "reviews_sort": "newest",
        }

        try:
            data = await self._get("details", params)
        except TransportError as e:
            logger.warning(f"[GooglePlacesAPIClient] Details unavailable for {place_id}: {e.status}")
            return None

        status = data.get("status", "")
        if status != "OK" or not isinstance(data.get("result"), dict):
            logger.warning(f"[GooglePlacesAPIClient] Details failed for {place_id}: status={status}")
            return None

        return self._parse_place_details(place_id, data["result"])

    def _parse_place_details(self, place_id: str, result: dict) -> VenueDetails:
        """Parse a Places details result into our model."""
        opening_hours = result.get("opening_hours") or {}

        editorial_summary_obj = result.get("editorial_summary") or {}
        summary = None
        if isinstance(editorial_summary_obj, dict):
            summary = editorial_summary_obj.get("overview")

        reviews = [
            VenueReview(
                author_name=r.get("author_name", ""),
                rating=r.get("rating"),
                text=r.get("text", "") or "",
                relative_time=r.get("relative_time_description", ""),
                language=r.get("language"),
            )
            for r in result.get("reviews", []) or []
        ]

        return VenueDetails(
            venue_id=place_id,
            weekday_text=opening_hours.get("weekday_text", []) or [],
            reviews=reviews,
            types=result.get("types", []) or [],
            summary=summary,
            website=result.get("website"),
            phone=result.get("formatted_phone_number"),
            map_url=result.get("url"),
        )

    def parse_candidate(self, raw: dict[str, Any]) -> Optional[Candidate]:
        """Convert a raw nearby-search record into a Candidate.

        Returns:
            Candidate, or None when the record has no id or geometry
        """
        place_id = raw.get("place_id")
        geo_location = (raw.get("geometry") or {}).get("location") or {}
        if not place_id or "lat" not in geo_location or "lng" not in geo_location:
            logger.debug(f"[GooglePlacesAPIClient] Skipping malformed record: {raw.get('name')}")
            return None

        opening_hours = raw.get("opening_hours") or {}

        return Candidate(
            venue_id=place_id,
            name=raw.get("name", ""),
            rating=raw.get("rating") or None,
            rating_count=raw.get("user_ratings_total") or 0,
            price_level=raw.get("price_level"),
            location=GeoPoint(lat=geo_location["lat"], lng=geo_location["lng"]),
            address=raw.get("vicinity", ""),
            types=raw.get("types", []) or [],
            weekly_hours=opening_hours.get("weekday_text") or None,
            open_now_hint=opening_hours.get("open_now"),
            photo_url=self._photo_url(raw.get("photos") or []),
            icon=raw.get("icon"),
        )

    def _photo_url(self, photos: list[dict]) -> Optional[str]:
        """URL of the first photo, if any."""
        if not photos or not photos[0].get("photo_reference"):
            return None
        return (
            f"{self.base_url}/photo?maxwidth={PHOTO_MAX_WIDTH}"
            f"&photo_reference={photos[0]['photo_reference']}&key={self.api_key}"
        )
