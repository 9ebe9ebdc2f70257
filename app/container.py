"""Dependency injection container for application components."""
import logging

from app.api import GooglePlacesAPIClient
from app.config import Settings
from app.handlers import VenueHandler
from app.services import SearchPipeline

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Initializes and wires up all application dependencies.
    """

    def __init__(self, settings: Settings):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        if not settings.places_enabled:
            logger.warning(
                "[Container] GOOGLE_PLACES_API_KEY not set - searches will fail with REQUEST_DENIED"
            )

        # Initialize Google Places API client
        self.google_places_api = GooglePlacesAPIClient(
            api_key=settings.google_places_api_key,
            base_url=settings.google_places_endpoint_base,
            language=settings.places_language,
            timeout=settings.places_timeout_seconds,
        )
        logger.info("[Container] Google Places API client initialized")

        # Initialize search pipeline
        self.search_pipeline = SearchPipeline()

        # Initialize handler
        self.venue_handler = VenueHandler(
            self.google_places_api,
            self.search_pipeline,
            venue_timezone=settings.venue_timezone,
            review_window=settings.review_window,
        )

        logger.info("[Container] Container initialized successfully")

    async def shutdown(self):
        """Clean up resources."""
        logger.info("[Container] Shutting down")
        await self.google_places_api.close()
        logger.info("[Container] Shutdown complete")
