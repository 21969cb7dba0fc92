"""Intake form controller - keeps derived fields consistent across edits"""

from dataclasses import replace
from typing import Any
from history_gateway.domain.models import (
    Demographics,
    IntakeSession,
    PatientHistory,
    PersonalHistory,
    HABITS,
)
from history_gateway.domain.socioeconomic import classify
from history_gateway.domain.complaints import new_complaint
from history_gateway.domain.exceptions import InvalidFieldError
from history_gateway.utils.text_utils import digits_only

TOTAL_STEPS = 6

STEP_NAMES = {
    1: "Demographics",
    2: "Chief Complaints",
    3: "Past History",
    4: "Personal History",
    5: "Family History",
    6: "Summary",
}

DIGIT_FIELDS = ("phone_number", "family_income")


def with_derived_tier(demographics: Demographics) -> Demographics:
    """Overwrite socio_economic_status with the classifier output"""
    tier = classify(demographics.education, demographics.occupation, demographics.family_income)
    if tier == demographics.socio_economic_status:
        return demographics
    return replace(demographics, socio_economic_status=tier)


def new_patient_history() -> PatientHistory:
    """Blank history with a single empty complaint"""
    return PatientHistory(
        demographics=with_derived_tier(Demographics()),
        chief_complaints=(new_complaint(),),
    )


def new_session() -> IntakeSession:
    return IntakeSession(history=new_patient_history())


def update_demographics(demographics: Demographics, **changes: Any) -> Demographics:
    """
    Apply demographic field changes and recompute the socio-economic tier.

    Phone number and family income are reduced to digits. Any
    socio_economic_status in changes is ignored; the tier is always derived.
    """
    changes.pop("socio_economic_status", None)
    unknown = set(changes) - set(Demographics.__dataclass_fields__)
    if unknown:
        raise InvalidFieldError(f"Unknown demographics field(s): {', '.join(sorted(unknown))}")

    for name in DIGIT_FIELDS:
        if name in changes:
            changes[name] = digits_only(str(changes[name]))

    return with_derived_tier(replace(demographics, **changes))


def set_demographics(history: PatientHistory, **changes: Any) -> PatientHistory:
    return replace(history, demographics=update_demographics(history.demographics, **changes))


def toggle_habit(personal_history: PersonalHistory, habit: str) -> PersonalHistory:
    """Add the habit if absent, remove it if present"""
    if habit not in HABITS:
        raise InvalidFieldError(f"Unknown habit: {habit}")

    if habit in personal_history.habits:
        habits = tuple(h for h in personal_history.habits if h != habit)
    else:
        habits = (*personal_history.habits, habit)
    return replace(personal_history, habits=habits)


def _move_to(session: IntakeSession, step: int) -> IntakeSession:
    return replace(session, current_step=step, max_step_reached=max(session.max_step_reached, step))


def next_step(session: IntakeSession) -> IntakeSession:
    return _move_to(session, min(session.current_step + 1, TOTAL_STEPS))


def previous_step(session: IntakeSession) -> IntakeSession:
    return _move_to(session, max(session.current_step - 1, 1))


def go_to_step(session: IntakeSession, step: int) -> IntakeSession:
    """Jump to a step already reached; other requests leave the session unchanged"""
    if 1 <= step <= session.max_step_reached:
        return _move_to(session, step)
    return session
