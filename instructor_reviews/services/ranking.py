"""
Filtering and sorting for review lists and the instructor directory.

Every function returns a new list and leaves its input untouched. Sorts rely
on Python's stable sort, so equal keys keep their input order and sorting an
already-sorted list is a no-op.
"""
import unicodedata
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from instructor_reviews.schemas.instructor import InstructorSummary
from instructor_reviews.schemas.review import AdminTab, ReviewOutput, ReviewSort


def collation_key(value: str) -> Tuple[str, str]:
    """
    Sort key approximating a locale-aware comparison.

    Accents and case are ignored first ("émile" sorts with "emile"), then the
    raw string breaks ties so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def review_search_text(review: ReviewOutput) -> str:
    """Text the free-text search runs against."""
    return " ".join(
        [review.instructor or "", review.name or "", review.location or "", review.text]
    ).casefold()


def filter_reviews(reviews: Sequence[ReviewOutput], query: Optional[str]) -> List[ReviewOutput]:
    """Keep reviews whose search text contains the query; empty query keeps all."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(reviews)
    return [r for r in reviews if needle in review_search_text(r)]


def filter_by_tab(reviews: Sequence[ReviewOutput], tab: AdminTab) -> List[ReviewOutput]:
    """Moderation queue views: pending, hidden or everything."""
    if tab == AdminTab.PENDING:
        return [r for r in reviews if not r.approved and not r.hidden]
    if tab == AdminTab.HIDDEN:
        return [r for r in reviews if r.hidden]
    return list(reviews)


def _location_key(review: ReviewOutput):
    location = _normalize(review.location)
    # Reviews without a location go last
    if not location:
        return (1, ("", ""))
    return (0, collation_key(location))


# sort -> (key, descending)
_REVIEW_SORTS: Dict[ReviewSort, Tuple[Callable[[ReviewOutput], object], bool]] = {
    ReviewSort.NEWEST: (lambda r: r.created_at, True),
    ReviewSort.OLDEST: (lambda r: r.created_at, False),
    ReviewSort.RATING_DESC: (lambda r: r.rating or 0, True),
    ReviewSort.RATING_ASC: (lambda r: r.rating or 0, False),
    ReviewSort.FLAGS_DESC: (lambda r: r.flag_count or 0, True),
    ReviewSort.LOCATION_AZ: (_location_key, False),
}


def sort_reviews(reviews: Sequence[ReviewOutput], sort: ReviewSort) -> List[ReviewOutput]:
    """
    Sort reviews by one of the supported orders.

    Missing ratings and flag counts count as 0. Ties keep input order.
    """
    key, descending = _REVIEW_SORTS[ReviewSort(sort)]
    # reverse=True keeps equal elements in their original order
    return sorted(reviews, key=key, reverse=descending)


def filter_instructors(
    summaries: Sequence[InstructorSummary],
    query: Optional[str] = None,
    location: Optional[str] = None,
) -> List[InstructorSummary]:
    """
    Directory filters: name substring (case-insensitive) and exact club match.
    """
    needle = (query or "").strip().casefold()
    club = (location or "").strip()
    return [
        s
        for s in summaries
        if (not needle or needle in s.name.casefold())
        and (not club or club in s.locations)
    ]


def rank_instructors(summaries: Sequence[InstructorSummary]) -> List[InstructorSummary]:
    """
    Directory order: most reviews first, then higher average (missing as 0),
    then name A-Z.
    """
    return sorted(
        summaries,
        key=lambda s: (-s.count, -(s.average or 0.0), collation_key(s.name)),
    )
