"""
Contains the condition evaluator deciding which constraint records are active in a validation run.
"""
from typing import AbstractSet, Any

from .registry import ConstraintRecord


def is_active(record: ConstraintRecord, requested_groups: AbstractSet[str], owner: Any) -> bool:
    """
    Decides if `record` applies to `owner` in a run with the `requested_groups`:

    1. `never` vetoes the record unconditionally (neither groups nor `when` can override it).
    2. `always` activates the record regardless of the groups.
    3. Without requested groups only records without groups (the default group) are active.
    4. Otherwise a record is active if it shares at least one group with the requested ones.

    An active record with a `when` condition is only active if the condition holds for `owner`.
    """
    if record.never:
        return False
    if not record.always:
        if not requested_groups:
            if record.groups:
                return False
        elif record.groups.isdisjoint(requested_groups):
            return False
    if record.when is not None:
        return bool(record.when(owner))
    return True
