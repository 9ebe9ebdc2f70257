"""Congestion estimate models."""
from enum import Enum

from pydantic import BaseModel, ConfigDict


class CongestionLevel(str, Enum):
    """Expected crowd level from the static heuristic."""
    EMPTY = "empty"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CongestionVerdict(BaseModel):
    """Crowd level with its display label and badge color."""
    level: CongestionLevel
    label: str
    color: str

    model_config = ConfigDict(frozen=True)


class ReviewCrowdSignal(str, Enum):
    """Crowd signal read from review text, independent of CongestionVerdict."""
    CROWDED = "crowded"
    EMPTY = "empty"
    UNKNOWN = "unknown"
