"""Chief complaint list operations - ordering by duration and per-field edits"""

import uuid
from dataclasses import replace
from typing import Iterable, List, Sequence
from history_gateway.domain.models import (
    ChiefComplaint,
    Duration,
    HOPData,
    DURATION_UNITS,
    ONSET_TYPES,
    PROGRESSION_TYPES,
)
from history_gateway.domain.exceptions import InvalidFieldError
from history_gateway.utils.text_utils import digits_only, parse_non_negative_int

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


def duration_to_days(duration: Duration) -> int:
    """
    Approximate total days for a duration.

    Fixed constants, not calendar-accurate: years x 365 + months x 30 + days.
    Empty or unparsable components count as 0.
    """
    years = parse_non_negative_int(duration.years)
    months = parse_non_negative_int(duration.months)
    days = parse_non_negative_int(duration.days)
    return (years * DAYS_PER_YEAR) + (months * DAYS_PER_MONTH) + days


def reorder(entries: Iterable[ChiefComplaint]) -> List[ChiefComplaint]:
    """
    Return complaints sorted longest-lasting first.

    Stable: equal durations keep their relative order. The input is not modified.
    """
    return sorted(entries, key=lambda c: duration_to_days(c.duration), reverse=True)


def new_complaint() -> ChiefComplaint:
    """Empty complaint with a fresh unique id"""
    return ChiefComplaint(id=str(uuid.uuid4()))


def add_complaint(complaints: Sequence[ChiefComplaint]) -> tuple[ChiefComplaint, ...]:
    """Append an empty complaint at the end; no resort"""
    return (*complaints, new_complaint())


def remove_complaint(complaints: Sequence[ChiefComplaint], complaint_id: str) -> tuple[ChiefComplaint, ...]:
    return tuple(c for c in complaints if c.id != complaint_id)


def update_complaint_text(
    complaints: Sequence[ChiefComplaint], complaint_id: str, text: str
) -> tuple[ChiefComplaint, ...]:
    """Change the complaint label; order is left as-is"""
    return tuple(replace(c, complaint=text) if c.id == complaint_id else c for c in complaints)


def update_complaint_hop(
    complaints: Sequence[ChiefComplaint], complaint_id: str, **changes: str
) -> tuple[ChiefComplaint, ...]:
    """
    Edit HOP fields of one complaint; order is left as-is.

    Onset and progression must be one of the listed choices (or empty).
    Choosing any progression other than "Other" clears progression_other.
    """
    unknown = set(changes) - set(HOPData.__dataclass_fields__)
    if unknown:
        raise InvalidFieldError(f"Unknown HOP field(s): {', '.join(sorted(unknown))}")
    if changes.get("onset", "") not in ONSET_TYPES:
        raise InvalidFieldError(f"Unknown onset: {changes['onset']}")
    if changes.get("progression", "") not in PROGRESSION_TYPES:
        raise InvalidFieldError(f"Unknown progression: {changes['progression']}")

    updated = []
    for c in complaints:
        if c.id == complaint_id:
            hop = replace(c.hop, **changes)
            if "progression" in changes and hop.progression != "Other":
                hop = replace(hop, progression_other="")
            c = replace(c, hop=hop)
        updated.append(c)
    return tuple(updated)


def update_complaint_duration(
    complaints: Sequence[ChiefComplaint], complaint_id: str, unit: str, value: str
) -> tuple[ChiefComplaint, ...]:
    """
    Set one duration component and resort the whole list.

    Non-digit characters are stripped from value. An unknown id leaves the
    list untouched (and unsorted).
    """
    if unit not in DURATION_UNITS:
        raise InvalidFieldError(f"Unknown duration unit: {unit}")

    if not any(c.id == complaint_id for c in complaints):
        return tuple(complaints)

    sanitized = digits_only(value)
    updated = [
        replace(c, duration=replace(c.duration, **{unit: sanitized})) if c.id == complaint_id else c
        for c in complaints
    ]
    return tuple(reorder(updated))
