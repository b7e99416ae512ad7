"""
Instructor aggregation.

Pure functions turning a flat list of visible reviews into per-instructor
summaries and resolving a single instructor profile. Nothing here touches
the store; callers fetch first and pass the rows in.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Tuple

from instructor_reviews.schemas.instructor import (
    InstructorProfile,
    InstructorSummary,
    PLACEHOLDER_PHOTO,
)
from instructor_reviews.schemas.review import ReviewOutput, ReviewSort
from instructor_reviews.services.ranking import sort_reviews


def average_rating(ratings: Sequence[int]) -> Optional[float]:
    """
    Mean rating rounded half-up to one decimal, or None for no ratings.

    Decimal keeps 4.25 -> 4.3 instead of float's banker-style 4.2.
    """
    if not ratings:
        return None
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _clean_location(location: Optional[str]) -> str:
    return (location or "").strip()


class _Group:
    __slots__ = ("ratings", "locations", "latest_photo")

    def __init__(self):
        self.ratings: List[int] = []
        self.locations: Dict[str, None] = {}
        self.latest_photo: Optional[ReviewOutput] = None


def aggregate_instructors(
    reviews: Sequence[ReviewOutput],
) -> Tuple[List[InstructorSummary], List[str]]:
    """
    Build one summary per distinct instructor name.

    Names are trimmed and grouped case-sensitively; reviews with a blank
    instructor are skipped. The representative photo comes from the newest
    review in the group that has one.

    Args:
        reviews: Visible reviews (approved and not hidden)

    Returns:
        (summaries in first-seen order, all locations sorted)
    """
    groups: Dict[str, _Group] = {}
    all_locations = set()

    for review in reviews:
        name = (review.instructor or "").strip()
        if not name:
            continue

        group = groups.get(name)
        if group is None:
            group = groups[name] = _Group()

        group.ratings.append(review.rating or 0)

        location = _clean_location(review.location)
        if location:
            group.locations[location] = None
            all_locations.add(location)

        if review.photo_url:
            latest = group.latest_photo
            if latest is None or review.created_at > latest.created_at:
                group.latest_photo = review

    summaries = [
        InstructorSummary(
            name=name,
            count=len(group.ratings),
            average=average_rating(group.ratings),
            locations=list(group.locations),
            photo=group.latest_photo.photo_url if group.latest_photo else PLACEHOLDER_PHOTO,
        )
        for name, group in groups.items()
    ]

    return summaries, sorted(all_locations)


def resolve_instructor_reviews(
    requested: str, candidates: Sequence[ReviewOutput]
) -> List[ReviewOutput]:
    """
    Pick the reviews that belong to the requested instructor.

    candidates are visible reviews whose instructor contains the requested
    name case-insensitively. Preference: exact match, then exact
    case-insensitive match, then every candidate.
    """
    wanted = requested.strip()

    exact = [r for r in candidates if (r.instructor or "").strip() == wanted]
    if exact:
        return exact

    folded = wanted.casefold()
    case_insensitive = [
        r for r in candidates if (r.instructor or "").strip().casefold() == folded
    ]
    if case_insensitive:
        return case_insensitive

    return list(candidates)


def build_instructor_profile(
    requested: str, candidates: Sequence[ReviewOutput]
) -> InstructorProfile:
    """
    Resolve and summarize a single instructor.

    An instructor with no visible reviews still gets a profile, with
    count 0 and no average.
    """
    reviews = sort_reviews(resolve_instructor_reviews(requested, candidates), ReviewSort.NEWEST)

    display_name = requested.strip()
    if reviews and (reviews[0].instructor or "").strip():
        display_name = reviews[0].instructor.strip()

    ratings = [r.rating for r in reviews if r.rating is not None]
    locations = list(dict.fromkeys(
        loc for loc in (_clean_location(r.location) for r in reviews) if loc
    ))
    photo = next((r.photo_url for r in reviews if r.photo_url), PLACEHOLDER_PHOTO)

    return InstructorProfile(
        display_name=display_name,
        count=len(reviews),
        average=average_rating(ratings),
        locations=locations,
        photo=photo,
        reviews=reviews,
    )
