"""Venue handler for HTTP requests."""
import logging
from datetime import datetime
from typing import Optional

import pytz

from app.api import GeoProvider, GooglePlacesAPIClient
from app.metrics import DETAIL_FETCH_RESULTS
from app.models import Candidate, FilterCriteria, GeoPoint, VenueDetailView
from app.services import SearchPipeline, congestion_estimator, hours_oracle, signal_extractor
from app.services.geo import (
    estimate_taxi_time,
    estimate_walk_time,
    format_distance,
    format_price_level,
    navigation_url,
    tabelog_search_url,
)

logger = logging.getLogger(__name__)


class VenueHandler:
    """Handler for venue search and detail requests.

    Owns the boundary: it reads the clock once per request, calls the Places
    transport and hands already-fetched data to the synchronous pipeline.
    """

    def __init__(
        self,
        places_client: GooglePlacesAPIClient,
        pipeline: SearchPipeline,
        venue_timezone: str = "Asia/Tokyo",
        review_window: int = congestion_estimator.REVIEW_WINDOW,
    ):
        """Initialize venue handler.

        Args:
            places_client: Google Places API client
            pipeline: Search pipeline
            venue_timezone: Timezone the venues' opening hours are written in
            review_window: Newest reviews read for the crowd signal
        """
        self.places_client = places_client
        self.pipeline = pipeline
        self.review_window = review_window

        try:
            self.tz = pytz.timezone(venue_timezone)
        except pytz.UnknownTimeZoneError:
            logger.error(
                f"[VenueHandler] Unknown timezone {venue_timezone}. Falling back to UTC."
            )
            self.tz = pytz.UTC

    def now(self) -> datetime:
        """Current wall-clock time in the venue timezone."""
        return datetime.now(self.tz)

    async def search_venues(
        self,
        geo_provider: GeoProvider,
        filters: FilterCriteria,
        now: Optional[datetime] = None,
    ) -> list[Candidate]:
        """Find, filter and rank venues near the user.

        Flow:
        1. Resolve the user position
        2. Nearby search through the Places transport
        3. Derive signals, filter and sort in the pipeline
        4. Add distance/travel-time text for display

        Raises:
            PositionError: The user position is unavailable
            TransportError: The venue search failed
        """
        now = now or self.now()
        position = geo_provider.get_current_position()

        logger.info(
            f"[VenueHandler] SearchVenues: lat={position.lat:.6f}, lng={position.lng:.6f}, "
            f"filters={filters.model_dump(mode='json')}, now={now.isoformat()}"
        )

        raw_places = await self.places_client.nearby_search(
            location=position,
            radius=filters.max_distance,
            place_type=filters.category.value,
            keyword=filters.search_keyword(),
        )
        if not raw_places:
            logger.info("[VenueHandler] No raw matches")
            return []

        candidates = [
            c for c in (self.places_client.parse_candidate(raw) for raw in raw_places)
            if c is not None
        ]

        ranked = self.pipeline.search(candidates, position, filters, now)
        result = [self._decorate(c) for c in ranked]

        logger.info(f"[VenueHandler] Returning {len(result)} venues")
        return result

    async def get_venue_details(
        self,
        venue_id: str,
        name: Optional[str] = None,
        location: Optional[GeoPoint] = None,
        now: Optional[datetime] = None,
    ) -> VenueDetailView:
        """Build the detail view for one venue.

        A failed detail fetch never raises; the view comes back with
        details_available=False and only the link fields that need no fetch.
        """
        now = now or self.now()

        view = VenueDetailView(
            venue_id=venue_id,
            navigation_url=navigation_url(venue_id, location) if location else None,
            tabelog_url=tabelog_search_url(name) if name else None,
        )

        details = await self.places_client.get_place_details(venue_id)
        if details is None:
            DETAIL_FETCH_RESULTS.labels(result="unavailable").inc()
            logger.info(f"[VenueHandler] Details unavailable for {venue_id}")
            return view

        DETAIL_FETCH_RESULTS.labels(result="success").inc()
        review_texts = details.review_texts()

        return view.model_copy(
            update={
                "details_available": True,
                "today_hours": hours_oracle.today_hours_text(details.weekday_text, now),
                "appeal_tags": signal_extractor.build_appeal_tags(
                    details.summary, details.types, review_texts
                ),
                "ambience_tags": signal_extractor.extract_ambience_tags(review_texts),
                "smoking_policy": signal_extractor.extract_smoking_policy(review_texts),
                "review_crowd": congestion_estimator.estimate_from_reviews(
                    review_texts, window=self.review_window
                ),
                "website": details.website,
                "phone": details.phone,
                "map_url": details.map_url,
            }
        )

    def ping(self) -> dict[str, str]:
        """Health check endpoint.

        Returns:
            {"status": "pong"}
        """
        logger.debug("[VenueHandler] Ping")
        return {"status": "pong"}

    def _decorate(self, candidate: Candidate) -> Candidate:
        """Add display text for price and distance."""
        update = {"price_text": format_price_level(candidate.price_level)}
        if candidate.distance_m is not None:
            update.update(
                {
                    "distance_text": format_distance(candidate.distance_m),
                    "walk_time": estimate_walk_time(candidate.distance_m),
                    "taxi_time": estimate_taxi_time(candidate.distance_m),
                }
            )
        return candidate.model_copy(update=update)
