"""Distance arithmetic and presentation helpers."""
import math
from typing import Optional
from urllib.parse import quote, urlencode

from app.models.venue import GeoPoint

EARTH_RADIUS_M = 6371000
WALK_METERS_PER_MINUTE = 80  # 4.8 km/h
TAXI_METERS_PER_MINUTE = 333  # ~20 km/h in city traffic

PRICE_LEVEL_LABELS = ["無料", "~¥1,000", "¥1,000~3,000", "¥3,000~5,000", "¥5,000~"]


def haversine_m(origin: GeoPoint, destination: GeoPoint) -> float:
    """Great-circle distance between two points in meters."""
    d_lat = math.radians(destination.lat - origin.lat)
    d_lng = math.radians(destination.lng - origin.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.lat))
        * math.cos(math.radians(destination.lat))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def format_distance(meters: float) -> str:
    """850 -> "850m", 1234 -> "1.2km"."""
    if meters < 1000:
        return f"{math.floor(meters + 0.5)}m"
    return f"{meters / 1000:.1f}km"


def estimate_walk_time(meters: float) -> str:
    return f"徒歩{math.ceil(meters / WALK_METERS_PER_MINUTE)}分"


def estimate_taxi_time(meters: float) -> str:
    return f"タクシー{max(1, math.ceil(meters / TAXI_METERS_PER_MINUTE))}分"


def format_price_level(level: Optional[int]) -> str:
    """Price tier as a yen range, empty string when unknown."""
    if level is None or not 0 <= level < len(PRICE_LEVEL_LABELS):
        return ""
    return PRICE_LEVEL_LABELS[level]


def navigation_url(venue_id: str, location: GeoPoint) -> str:
    """Google Maps walking directions to the venue."""
    params = {
        "api": "1",
        "destination": f"{location.lat},{location.lng}",
        "destination_place_id": venue_id,
        "travelmode": "walking",
    }
    return f"https://www.google.com/maps/dir/?{urlencode(params, safe=',')}"


def tabelog_search_url(name: str) -> str:
    """Tabelog keyword search for the venue name."""
    return f"https://tabelog.com/rstLst/?vs=1&sk={quote(name)}"
