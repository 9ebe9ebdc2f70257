"""Derive, filter and rank nearby venue candidates.

The pipeline is synchronous and reads no clock: ``now`` is passed in, so the
same inputs always produce the same ordered output.

Known limitation: nearby-search records carry no weekday text, only the
upstream ``open_now`` flag. For those candidates the open verdict is that
flag; the hours oracle decides only when weekday text is present.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from app.metrics import (
    OPEN_STATUS_VERDICTS_TOTAL,
    SEARCH_CANDIDATES_DROPPED_TOTAL,
    SEARCH_CANDIDATES_TOTAL,
    SEARCH_RESULTS_PER_REQUEST,
    SEARCH_RESULTS_TOTAL,
)
from app.models import Candidate, FilterCriteria, GeoPoint, OpenStatus
from app.services import congestion_estimator, hours_oracle
from app.services.geo import haversine_m

logger = logging.getLogger(__name__)

DistanceFn = Callable[[GeoPoint, GeoPoint], float]


def resolve_open_status(candidate: Candidate, now: datetime) -> OpenStatus:
    """Open status from the candidate's own hours summary.

    Weekday text is authoritative when present. Without it the record-level
    open_now flag is used, and with neither the status is unknown.
    """
    if candidate.weekly_hours:
        return hours_oracle.is_open_now(candidate.weekly_hours, now)
    if candidate.open_now_hint is not None:
        return OpenStatus.OPEN if candidate.open_now_hint else OpenStatus.CLOSED
    return OpenStatus.UNKNOWN


def sort_key(candidate: Candidate) -> tuple[float, int]:
    """Rating desc, then rating count desc; absent values count as 0."""
    return (-(candidate.rating or 0), -(candidate.rating_count or 0))


class SearchPipeline:
    """Turns raw candidates plus filter criteria into a ranked result list."""

    def __init__(self, distance_fn: DistanceFn = haversine_m):
        """Initialize search pipeline.

        Args:
            distance_fn: Meters between two points (haversine by default)
        """
        self.distance_fn = distance_fn

    def search(
        self,
        candidates: Sequence[Candidate],
        user_location: GeoPoint,
        filters: FilterCriteria,
        now: datetime,
    ) -> list[Candidate]:
        """Rank the candidates that pass every filter.

        Args:
            candidates: Raw candidates from the venue search transport
            user_location: Where the user is
            filters: User constraints
            now: Local wall-clock time of the venues

        Returns:
            Filtered candidates sorted by rating then rating count, ties in input order
        """
        SEARCH_CANDIDATES_TOTAL.inc(len(candidates))

        derived = [self.derive(c, user_location, now) for c in candidates]
        kept = [c for c in derived if self.passes(c, filters)]
        ranked = sorted(kept, key=sort_key)

        SEARCH_RESULTS_TOTAL.inc(len(ranked))
        SEARCH_RESULTS_PER_REQUEST.observe(len(ranked))
        logger.info(
            f"[SearchPipeline] {len(candidates)} candidates -> {len(ranked)} results "
            f"(category={filters.category.value}, max_distance={filters.max_distance}m)"
        )
        return ranked

    def derive(
        self, candidate: Candidate, user_location: GeoPoint, now: datetime
    ) -> Candidate:
        """Return a copy of the candidate with distance, open status and congestion set."""
        open_status = resolve_open_status(candidate, now)
        OPEN_STATUS_VERDICTS_TOTAL.labels(verdict=open_status.value).inc()

        return candidate.model_copy(
            update={
                "distance_m": self.distance_fn(user_location, candidate.location),
                "open_status": open_status,
                "congestion": congestion_estimator.estimate_at(
                    now, candidate.rating_count, candidate.rating
                ),
            }
        )

    def passes(self, candidate: Candidate, filters: FilterCriteria) -> bool:
        """Apply every filter predicate; all must pass."""
        reason = self._rejection_reason(candidate, filters)
        if reason is None:
            return True
        SEARCH_CANDIDATES_DROPPED_TOTAL.labels(reason=reason).inc()
        logger.debug(f"[SearchPipeline] Dropped {candidate.venue_id}: {reason}")
        return False

    def _rejection_reason(
        self, candidate: Candidate, filters: FilterCriteria
    ) -> Optional[str]:
        # Unknown is excluded just like closed
        if candidate.open_status != OpenStatus.OPEN:
            return "not_open"

        if candidate.distance_m is None or candidate.distance_m > filters.max_distance:
            return "too_far"

        # Absent price tier passes
        if (
            filters.price_range is not None
            and candidate.price_level is not None
            and not filters.price_range.contains(candidate.price_level)
        ):
            return "price"

        return None
