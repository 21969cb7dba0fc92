"""Plain-text rendering of history sections for the generative AI prompts"""

from typing import Sequence
from history_gateway.domain.models import (
    ChiefComplaint,
    Duration,
    FamilyHistory,
    HOPData,
    PastHistory,
    PatientHistory,
)
from history_gateway.utils.text_utils import parse_non_negative_int

HOP_LABELS = [
    ("site", "Site"),
    ("onset", "Onset"),
    ("character", "Character"),
    ("progression", "Progression"),
    ("timing_and_duration", "Timing/Duration of Episodes"),
    ("rate_frequency", "Rate/Frequency"),
    ("associative_factor", "Associative Factors"),
    ("aggravating_factor", "Aggravating Factors"),
    ("relieving_factor", "Relieving Factors"),
    ("other", "Other Details"),
]

NOT_SPECIFIED = "Not specified."


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_duration(duration: Duration) -> str:
    """'1 year, 2 months, 3 days' with zero parts omitted"""
    parts = []
    for value, unit in (
        (duration.years, "year"),
        (duration.months, "month"),
        (duration.days, "day"),
    ):
        count = parse_non_negative_int(value)
        if count > 0:
            parts.append(_plural(count, unit))
    return ", ".join(parts)


def format_conditions(history: PastHistory | FamilyHistory, empty_message: str) -> str:
    conditions = []
    if history.has_diabetes:
        conditions.append("Diabetes Mellitus")
    if history.has_tb:
        conditions.append("Tuberculosis (TB)")
    if history.has_thyroid:
        conditions.append("Thyroid Disorders")

    other = history.other.strip()
    if other:
        conditions.append(other)

    return ", ".join(conditions) if conditions else empty_message


def format_hop(hop: HOPData) -> str:
    """Indented HOP block, empty when no detail was recorded"""
    lines = []
    for name, label in HOP_LABELS:
        value = getattr(hop, name)
        if name == "progression" and value == "Other":
            value = hop.progression_other
        value = (value or "").strip()
        if value:
            lines.append(f"    - {label}: {value}")

    if not lines:
        return ""
    return "\n  - History of Presenting Complaint:\n" + "\n".join(lines)


def format_complaint_list(complaints: Sequence[ChiefComplaint]) -> str:
    entries = []
    for c in complaints:
        if not c.complaint.strip():
            continue
        duration = format_duration(c.duration)
        suffix = f" ({duration})" if duration else ""
        entries.append(f"- {c.complaint}{suffix}{format_hop(c.hop)}")
    return "\n".join(entries)


def format_complaints_for_diagnosis(complaints: Sequence[ChiefComplaint]) -> str:
    entries = []
    for c in complaints:
        text = c.complaint.strip()
        if not text:
            continue
        duration = format_duration(c.duration)
        entries.append(f"{text} (for {duration})" if duration else text)
    return ", ".join(entries)


def format_patient_history(history: PatientHistory) -> str:
    """Full patient data block used in the summary prompt"""
    d = history.demographics
    p = history.personal_history
    income = f"₹{d.family_income}" if d.family_income else NOT_SPECIFIED

    return "\n".join(
        [
            "- Demographics:",
            f"  - Name: {d.name}",
            f"  - Age/Sex: {d.age} / {d.sex}",
            f"  - Marital Status: {d.marital_status or NOT_SPECIFIED}",
            f"  - Occupation: {d.occupation}",
            f"  - Religion: {d.religion or NOT_SPECIFIED}",
            f"  - Education: {d.education or NOT_SPECIFIED}",
            f"  - Total Family Monthly Income: {income}",
            f"  - Socio-economic Status: {d.socio_economic_status or NOT_SPECIFIED} (Calculated)",
            f"  - Address: {d.address}",
            f"  - Attendant's Name: {d.attendant_name or NOT_SPECIFIED}",
            f"  - Blood Group: {d.blood_group or NOT_SPECIFIED}",
            f"  - Phone Number: {d.phone_number or NOT_SPECIFIED}",
            "- Chief Complaints & History of Presenting Complaint:",
            format_complaint_list(history.chief_complaints) or "No chief complaints reported.",
            "- Past Medical & Surgical History: "
            + format_conditions(history.past_history, "No significant past history reported."),
            "- Personal History:",
            f"  - Diet: {p.diet}",
            f"  - Sleep: {p.sleep or NOT_SPECIFIED}",
            f"  - Appetite: {p.appetite or NOT_SPECIFIED}",
            f"  - Bladder: {p.bladder or NOT_SPECIFIED}",
            f"  - Bowel: {p.bowel or NOT_SPECIFIED}",
            f"  - Habits: {', '.join(p.habits) or 'No significant habits reported.'}",
            f"  - Other: {p.other or 'None.'}",
            "- Family History: "
            + format_conditions(history.family_history, "No significant family history reported."),
        ]
    )


def format_active_complaints(complaints: Sequence[ChiefComplaint]) -> str:
    """Non-blank complaints as 'text for duration', used to seed HOP questions"""
    entries = []
    for c in complaints:
        text = c.complaint.strip()
        if not text:
            continue
        duration = format_duration(c.duration)
        entries.append(f"{text} for {duration}" if duration else text)
    return ", ".join(entries)
