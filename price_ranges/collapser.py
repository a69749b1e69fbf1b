"""Collapse fine-grained price range buckets into a few balanced ones."""

import logging
from typing import List, Sequence

from price_ranges.exceptions import EmptyDistributionError, InvalidArgumentError
from price_ranges.models import PriceRangeBucket

logger = logging.getLogger(__name__)


def collapse(buckets: Sequence[PriceRangeBucket], target_count: int) -> List[PriceRangeBucket]:
    """Reduce an ordered, contiguous bucket sequence to at most target_count buckets.

    Empty buckets are dropped first. Adjacent buckets are then merged pass by
    pass, always folding the middle bucket of each triple into the neighbour
    pair with the smaller combined count, until the target is reached. The
    outermost buckets of the result are unbounded.

    Args:
        buckets: Buckets sorted ascending by range, sharing their inner bounds
        target_count: Maximum number of buckets to return (>= 1)

    Returns:
        New list of min(target_count, non-empty input buckets) buckets

    Raises:
        InvalidArgumentError: target_count < 1 or the input is not contiguous
        EmptyDistributionError: every input bucket has a zero count
    """
    if target_count < 1:
        raise InvalidArgumentError(f"target_count must be >= 1, got {target_count}")
    _check_contiguous(buckets)

    collapsed = [bucket for bucket in buckets if bucket.doc_count > 0]
    if not collapsed:
        raise EmptyDistributionError("All price range buckets are empty")

    passes = 0
    while len(collapsed) > target_count:
        collapsed = _collapse_pass(collapsed, target_count)
        passes += 1

    logger.debug(
        f"Collapsed {len(buckets)} buckets into {len(collapsed)} "
        f"(target={target_count}, passes={passes})"
    )
    return _normalize_bounds(collapsed)


def _check_contiguous(buckets: Sequence[PriceRangeBucket]) -> None:
    for lower, upper in zip(buckets, buckets[1:]):
        if lower.to is not None and upper.from_ is not None and lower.to != upper.from_:
            raise InvalidArgumentError(
                f"Buckets are not contiguous: range ending at {lower.to} "
                f"is followed by range starting at {upper.from_}"
            )


def _merge(lower: PriceRangeBucket, upper: PriceRangeBucket) -> PriceRangeBucket:
    return PriceRangeBucket(
        from_=lower.from_,
        to=upper.to,
        doc_count=lower.doc_count + upper.doc_count,
    )


def _collapse_pass(buckets: List[PriceRangeBucket], target_count: int) -> List[PriceRangeBucket]:
    """Run one merge pass over consecutive triples and return the new sequence.

    Each triple (A, B, C) yields one merge: A into B when count(A)+count(B) is
    strictly smaller than count(B)+count(C), otherwise C into B. The pass
    stops as soon as the sequence is down to target_count buckets; buckets it
    did not reach are carried over unchanged.
    """
    if len(buckets) == 2:
        # No triple to compare; only reachable with target_count == 1
        return [_merge(buckets[0], buckets[1])]

    result = []
    size = len(buckets)
    start = 0
    while start + 2 < len(buckets) and size > target_count:
        a, b, c = buckets[start:start + 3]
        if a.doc_count + b.doc_count < b.doc_count + c.doc_count:
            result.extend([_merge(a, b), c])
        else:
            result.extend([a, _merge(b, c)])
        size -= 1
        start += 3

    result.extend(buckets[start:])
    return result


def _normalize_bounds(buckets: List[PriceRangeBucket]) -> List[PriceRangeBucket]:
    """Open up the outer bounds and make every bucket start where the previous ends."""
    normalized = []
    previous_to = None
    for bucket in buckets:
        normalized.append(bucket.model_copy(update={"from_": previous_to}))
        previous_to = bucket.to
    normalized[-1] = normalized[-1].model_copy(update={"to": None})
    return normalized
