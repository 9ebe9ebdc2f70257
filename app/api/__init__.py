"""External API clients package."""
from app.api.geo_provider import GeoProvider, RequestGeoProvider
from app.api.google_places_client import GooglePlacesAPIClient

__all__ = ["GeoProvider", "GooglePlacesAPIClient", "RequestGeoProvider"]
