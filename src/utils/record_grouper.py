"""Grouping of user records into directory buckets.

The directory is an accordion: one section per group key, at most one section
expanded. Both the grouping and the expansion transition are pure functions,
so a fresh fetch simply regroups from scratch.
"""

import logging
from typing import Iterable, Optional

from schemas.directory import GroupedCollection, GroupKeySet
from schemas.user import UserRecord

logger = logging.getLogger(__name__)


def group(records: Iterable[UserRecord], keys: GroupKeySet) -> GroupedCollection:
    """Partition records by class group.

    Args:
        records: User records in the order the backend returned them.
        keys: The ordered category keys.

    Returns:
        A GroupedCollection holding one bucket for every key, in key order.
        Each bucket keeps the relative order of ``records``. Records whose
        class group is not a declared key are collected in ``ungrouped``.
    """
    buckets = {key: [] for key in keys.keys}
    ungrouped = []
    for record in records:
        bucket = buckets.get(record.class_group)
        if bucket is None:
            ungrouped.append(record)
        else:
            bucket.append(record)

    if ungrouped:
        logger.warning(
            "%d user(s) have a class group outside the directory categories: %s",
            len(ungrouped),
            sorted({record.class_group for record in ungrouped}),
        )
    return GroupedCollection(buckets=buckets, ungrouped=ungrouped)


def toggle_expansion(current: Optional[str], target: str) -> Optional[str]:
    """Return the expanded key after the user taps ``target``.

    Tapping the expanded section collapses it; tapping any other section
    expands that one instead.
    """
    return None if current == target else target
