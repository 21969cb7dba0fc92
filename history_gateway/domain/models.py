"""Domain models - pure Python dataclasses representing the patient history form"""

from dataclasses import asdict, dataclass, field
from typing import List, Literal

SocioEconomicTier = Literal["Upper", "Upper-Middle", "Lower-Middle", "Upper-Lower", "Lower"]

EDUCATION_LEVELS: tuple[str, ...] = (
    "",
    "Illiterate",
    "Primary School",
    "Middle School",
    "High School",
    "Diploma/Intermediate",
    "Graduate",
    "Professional/Post-graduate",
)

OCCUPATION_LEVELS: tuple[str, ...] = (
    "",
    "Unemployed",
    "Unskilled Worker",
    "Semi-skilled Worker",
    "Skilled Worker",
    "Clerical/Shop-owner/Farmer",
    "Semi-professional",
    "Professional",
)

ONSET_TYPES: tuple[str, ...] = (
    "",
    "Acute (Min to hr)",
    "Sub-Acute (Days)",
    "Chronic/Insidious (Weeks to Months)",
)

PROGRESSION_TYPES: tuple[str, ...] = (
    "",
    "Gradually Deteriorating",
    "Getting Better",
    "Remaining the same",
    "Remissions",
    "Exacerbations",
    "Other",
)

HABITS: tuple[str, ...] = ("Smoking", "Alcohol", "Tobacco Chewing", "Drug Abuse")

DURATION_UNITS: tuple[str, ...] = ("years", "months", "days")


@dataclass(frozen=True)
class Duration:
    """How long a complaint has lasted, as entered (digit strings, may be empty)"""

    years: str = ""
    months: str = ""
    days: str = ""


@dataclass(frozen=True)
class HOPData:
    """History of Presenting Complaint details for one complaint"""

    site: str = ""
    onset: str = ""
    character: str = ""
    progression: str = ""
    progression_other: str = ""
    timing_and_duration: str = ""
    rate_frequency: str = ""
    associative_factor: str = ""
    aggravating_factor: str = ""
    relieving_factor: str = ""
    other: str = ""


@dataclass(frozen=True)
class ChiefComplaint:
    """Single complaint entry; id is opaque and unique within a history"""

    id: str
    complaint: str = ""
    duration: Duration = field(default_factory=Duration)
    hop: HOPData = field(default_factory=HOPData)


@dataclass(frozen=True)
class Demographics:
    """Patient profile; socio_economic_status is derived, never entered"""

    name: str = ""
    age: str = ""
    sex: str = "Male"  # "Male" | "Female" | "Other"
    occupation: str = ""
    address: str = ""
    attendant_name: str = ""
    phone_number: str = ""
    blood_group: str = "A+"
    education: str = ""
    marital_status: str = "Single"  # "Single" | "Married" | "Divorced" | "Widowed"
    family_income: str = ""
    socio_economic_status: str = "Lower"
    religion: str = ""


@dataclass(frozen=True)
class PastHistory:
    has_diabetes: bool = False
    has_tb: bool = False
    has_thyroid: bool = False
    other: str = ""


@dataclass(frozen=True)
class FamilyHistory:
    has_diabetes: bool = False
    has_tb: bool = False
    has_thyroid: bool = False
    other: str = ""


@dataclass(frozen=True)
class PersonalHistory:
    diet: str = "Vegetarian"  # "Vegetarian" | "Non-Vegetarian" | "Mixed"
    sleep: str = ""
    appetite: str = ""
    bladder: str = ""
    bowel: str = ""
    habits: tuple[str, ...] = ()
    other: str = ""


@dataclass(frozen=True)
class PatientHistory:
    """Full intake record across all form steps"""

    demographics: Demographics
    chief_complaints: tuple[ChiefComplaint, ...]
    past_history: PastHistory = field(default_factory=PastHistory)
    personal_history: PersonalHistory = field(default_factory=PersonalHistory)
    family_history: FamilyHistory = field(default_factory=FamilyHistory)


@dataclass(frozen=True)
class IntakeSession:
    """Patient history plus step navigation state"""

    history: PatientHistory
    current_step: int = 1
    max_step_reached: int = 1


@dataclass
class SocioEconomicAssessment:
    """Output of socio-economic classification"""

    education_score: int
    occupation_score: int
    income_score: int
    total_score: int
    tier: str


@dataclass
class DifferentialDiagnosis:
    """Single AI-suggested diagnosis"""

    diagnosis: str
    rationale: str


def history_to_dict(history: PatientHistory) -> dict:
    """Serialize a history to plain JSON-compatible types"""
    data = asdict(history)
    data["chief_complaints"] = list(data["chief_complaints"])
    data["personal_history"]["habits"] = list(data["personal_history"]["habits"])
    return data


def history_from_dict(data: dict) -> PatientHistory:
    """Rebuild a history from the shape produced by history_to_dict"""
    personal = dict(data.get("personal_history") or {})
    personal["habits"] = tuple(personal.get("habits") or ())
    complaints: List[ChiefComplaint] = [
        ChiefComplaint(
            id=c["id"],
            complaint=c.get("complaint", ""),
            duration=Duration(**(c.get("duration") or {})),
            hop=HOPData(**(c.get("hop") or {})),
        )
        for c in data.get("chief_complaints") or []
    ]
    return PatientHistory(
        demographics=Demographics(**(data.get("demographics") or {})),
        chief_complaints=tuple(complaints),
        past_history=PastHistory(**(data.get("past_history") or {})),
        personal_history=PersonalHistory(**personal),
        family_history=FamilyHistory(**(data.get("family_history") or {})),
    )
