"""FastAPI routes for venue endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.api import RequestGeoProvider
from app.config import settings
from app.errors import PositionError, TransportError, TransportErrorKind
from app.models import Candidate, FilterCriteria, GeoPoint, VenueDetailView

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter()

# Global handler reference - set during startup
_venue_handler = None

# TransportErrorKind -> HTTP status
TRANSPORT_ERROR_STATUS: dict[TransportErrorKind, int] = {
    TransportErrorKind.QUOTA_EXCEEDED: 429,
    TransportErrorKind.DENIED: 403,
    TransportErrorKind.INVALID_REQUEST: 400,
    TransportErrorKind.UNAVAILABLE: 503,
}


def set_venue_handler(handler):
    """Set the venue handler instance (called during startup)."""
    global _venue_handler
    _venue_handler = handler
    logger.info("[VenueRouter] Handler injected successfully")


def get_handler():
    """Get the venue handler, raising error if not initialized."""
    if _venue_handler is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _venue_handler


@router.get(
    "/v1/venues/search",
    response_model=list[Candidate],
    summary="Search nearby venues",
    description="Open venues near the user, filtered and ranked by rating then review count",
)
async def search_venues(
    lat: Optional[float] = Query(None, description="Latitude"),
    lng: Optional[float] = Query(None, description="Longitude"),
    position_error: Optional[str] = Query(
        None, description="Client geolocation failure: denied | unavailable | timeout"
    ),
    category: Optional[str] = Query(None, description="restaurant | cafe | bar"),
    distance: Optional[str] = Query(None, description="Max distance in meters"),
    budget: Optional[str] = Query(None, description="Budget bucket: 1000 | 3000 | 5000 | 10000 | 10001"),
    smoking: Optional[str] = Query(None, description="any | allowed | no-smoking"),
    cuisine: Optional[str] = Query(None, description="Cuisine keyword (restaurants only)"),
) -> list[Candidate]:
    """Search nearby venues."""
    handler = get_handler()
    filters = FilterCriteria.from_query(
        category=category,
        distance=distance,
        budget=budget,
        smoking=smoking,
        cuisine=cuisine,
        default_category=settings.default_category,
        default_max_distance=settings.default_max_distance_m,
    )

    try:
        return await handler.search_venues(
            RequestGeoProvider(lat, lng, error=position_error), filters
        )
    except PositionError as e:
        logger.warning(f"[VenueRouter] Position error: {e.kind.value} ({e.detail})")
        raise HTTPException(
            status_code=422, detail={"kind": e.kind.value, "message": e.message}
        )
    except TransportError as e:
        logger.error(f"[VenueRouter] Transport error: {e.kind.value} (status={e.status})")
        raise HTTPException(
            status_code=TRANSPORT_ERROR_STATUS[e.kind],
            detail={"kind": e.kind.value, "message": e.message},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VenueRouter] Error in search_venues: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/v1/venues/{venue_id}/details",
    response_model=VenueDetailView,
    summary="Venue detail view",
    description="Today's hours, ambience tags, smoking policy and review crowd signal",
)
async def get_venue_details(
    venue_id: str,
    name: Optional[str] = Query(None, description="Venue name, for the Tabelog link"),
    lat: Optional[float] = Query(None, description="Venue latitude, for navigation"),
    lng: Optional[float] = Query(None, description="Venue longitude, for navigation"),
) -> VenueDetailView:
    """Get the detail view for one venue."""
    handler = get_handler()
    location = GeoPoint(lat=lat, lng=lng) if lat is not None and lng is not None else None

    try:
        return await handler.get_venue_details(venue_id, name=name, location=location)
    except Exception as e:
        logger.error(f"[VenueRouter] Error in get_venue_details: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/ping",
    summary="Health check",
    description="Health check endpoint",
)
def ping() -> dict[str, str]:
    """Health check endpoint."""
    handler = get_handler()
    return handler.ping()
