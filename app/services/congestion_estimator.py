"""Static crowd-level heuristics.

Two independent signals, never merged:
- ``estimate``: time of day + popularity + rating -> CongestionVerdict
- ``estimate_from_reviews``: crowd keywords in recent reviews -> ReviewCrowdSignal
"""
from datetime import datetime
from typing import Optional, Sequence

from app.models.congestion import CongestionLevel, CongestionVerdict, ReviewCrowdSignal

SATURDAY = 5
SUNDAY = 6

# Rating assumed for unrated venues
DEFAULT_RATING = 3.0
HIGH_RATING = 4.3

# (exclusive lower bound on rating count, score), highest first
POPULARITY_THRESHOLDS = ((500, 3), (100, 2), (30, 1))

VERDICTS: dict[CongestionLevel, CongestionVerdict] = {
    CongestionLevel.HIGH: CongestionVerdict(
        level=CongestionLevel.HIGH, label="混雑", color="#e57373"
    ),
    CongestionLevel.MEDIUM: CongestionVerdict(
        level=CongestionLevel.MEDIUM, label="やや混雑", color="#ffb74d"
    ),
    CongestionLevel.LOW: CongestionVerdict(
        level=CongestionLevel.LOW, label="普通", color="#81c784"
    ),
    CongestionLevel.EMPTY: CongestionVerdict(
        level=CongestionLevel.EMPTY, label="空いている", color="#4fc3f7"
    ),
}

REVIEW_WINDOW = 5
CROWDED_KEYWORDS = ("行列", "混雑", "満席", "待ち時間", "並ぶ", "人気", "賑わ")
EMPTY_KEYWORDS = ("空いて", "すいて", "ガラガラ", "貸切", "穴場")
MIN_REVIEW_VOTES = 2


def time_score(hour_of_day: int, weekday: int) -> int:
    """Score the hour: lunch/dinner peaks 3, afternoon lull 1, otherwise 2; weekends +1.

    Args:
        hour_of_day: 0-23
        weekday: Monday=0 ... Sunday=6
    """
    if 11 <= hour_of_day <= 13 or 18 <= hour_of_day <= 20:
        score = 3
    elif 14 <= hour_of_day <= 17:
        score = 1
    else:
        score = 2

    if weekday in (SATURDAY, SUNDAY):
        score += 1
    return score


def popularity_score(rating_count: Optional[int], rating: Optional[float]) -> int:
    """Score review volume (highest threshold met) plus 1 for highly rated venues."""
    count = rating_count or 0
    score = 0
    for threshold, value in POPULARITY_THRESHOLDS:
        if count > threshold:
            score = value
            break

    if (rating if rating is not None else DEFAULT_RATING) >= HIGH_RATING:
        score += 1
    return score


def estimate(
    hour_of_day: int,
    weekday: int,
    rating_count: Optional[int],
    rating: Optional[float],
) -> CongestionVerdict:
    """Estimate the expected crowd level of a venue.

    Args:
        hour_of_day: 0-23
        weekday: Monday=0 ... Sunday=6
        rating_count: Number of ratings, None treated as 0
        rating: Average rating 0-5, None treated as 3.0

    Returns:
        CongestionVerdict for the total score
    """
    total = time_score(hour_of_day, weekday) + popularity_score(rating_count, rating)

    if total >= 6:
        return VERDICTS[CongestionLevel.HIGH]
    if total >= 4:
        return VERDICTS[CongestionLevel.MEDIUM]
    if total >= 2:
        return VERDICTS[CongestionLevel.LOW]
    return VERDICTS[CongestionLevel.EMPTY]


def estimate_at(
    now: datetime, rating_count: Optional[int], rating: Optional[float]
) -> CongestionVerdict:
    """``estimate`` for a local wall-clock instant."""
    return estimate(now.hour, now.weekday(), rating_count, rating)


def estimate_from_reviews(
    reviews: Optional[Sequence[str]], window: int = REVIEW_WINDOW
) -> ReviewCrowdSignal:
    """Read a crowd signal from the newest reviews.

    Each review casts at most one crowded vote and at most one empty vote.
    A side wins only with a strict majority and at least two votes.

    Args:
        reviews: Review texts, newest first
        window: How many reviews to examine

    Returns:
        ReviewCrowdSignal.CROWDED / EMPTY, or UNKNOWN
    """
    if not reviews:
        return ReviewCrowdSignal.UNKNOWN

    crowded = 0
    empty = 0
    for text in reviews[:window]:
        text = text or ""
        if any(keyword in text for keyword in CROWDED_KEYWORDS):
            crowded += 1
        if any(keyword in text for keyword in EMPTY_KEYWORDS):
            empty += 1

    if crowded > empty and crowded >= MIN_REVIEW_VOTES:
        return ReviewCrowdSignal.CROWDED
    if empty > crowded and empty >= MIN_REVIEW_VOTES:
        return ReviewCrowdSignal.EMPTY
    return ReviewCrowdSignal.UNKNOWN
