"""User position providers."""
import logging
from typing import Optional, Protocol

from app.errors import PositionError, PositionErrorKind
from app.models import GeoPoint

logger = logging.getLogger(__name__)


class GeoProvider(Protocol):
    """Source of the user's current position."""

    def get_current_position(self) -> GeoPoint:
        """Return the current position or raise PositionError."""
        ...


class RequestGeoProvider:
    """Position reported by the client device in the request.

    The device performs the actual geolocation; a missing coordinate means it
    could not (or was not allowed to) provide one.
    """

    def __init__(
        self,
        lat: Optional[float],
        lng: Optional[float],
        error: Optional[str] = None,
    ):
        """Initialize provider.

        Args:
            lat: Latitude from the request
            lng: Longitude from the request
            error: Geolocation failure code forwarded by the client
                   (denied, unavailable, timeout), if any
        """
        self.lat = lat
        self.lng = lng
        self.error = error

    def get_current_position(self) -> GeoPoint:
        if self.error:
            try:
                kind = PositionErrorKind(self.error)
            except ValueError:
                kind = PositionErrorKind.OTHER
            raise PositionError(kind, detail=f"client reported {self.error}")

        if self.lat is None or self.lng is None:
            raise PositionError(PositionErrorKind.UNAVAILABLE, detail="missing coordinates")

        if not (-90 <= self.lat <= 90 and -180 <= self.lng <= 180):
            logger.warning(f"[RequestGeoProvider] Out of range position: {self.lat}, {self.lng}")
            raise PositionError(PositionErrorKind.OTHER, detail="coordinates out of range")

        return GeoPoint(lat=self.lat, lng=self.lng)
