"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, List, Literal, Optional


class ClassifyRequest(BaseModel):
    """Request body for POST /v1/socioeconomic/classify"""

    education: str = Field("", description="Education level; unrecognized values score 0")
    occupation: str = Field("", description="Occupation level; unrecognized values score 0")
    monthly_income: Any = Field("", description="Total family monthly income; anything but a non-negative whole number scores 0")


class AssessmentResponse(BaseModel):
    """Response for POST /v1/socioeconomic/classify"""

    education_score: int
    occupation_score: int
    income_score: int
    total_score: int
    tier: str


class DurationSchema(BaseModel):
    years: str = ""
    months: str = ""
    days: str = ""


class HOPSchema(BaseModel):
    """History of Presenting Complaint fields"""

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


class ComplaintSchema(BaseModel):
    """Single chief complaint"""

    id: str = Field(..., min_length=1)
    complaint: str = ""
    duration: DurationSchema = Field(default_factory=DurationSchema)
    hop: HOPSchema = Field(default_factory=HOPSchema)


class RankedComplaint(ComplaintSchema):
    duration_days: int


class ReorderRequest(BaseModel):
    """Request body for POST /v1/complaints/reorder"""

    complaints: List[ComplaintSchema]


class ReorderResponse(BaseModel):
    complaints: List[RankedComplaint]


class DemographicsSchema(BaseModel):
    name: str = ""
    age: str = ""
    sex: str = "Male"
    occupation: str = ""
    address: str = ""
    attendant_name: str = ""
    phone_number: str = ""
    blood_group: str = "A+"
    education: str = ""
    marital_status: str = "Single"
    family_income: str = ""
    socio_economic_status: str = "Lower"
    religion: str = ""


class DemographicsUpdate(BaseModel):
    """Partial demographics edit; the socio-economic tier is always recomputed"""

    name: Optional[str] = None
    age: Optional[str] = None
    sex: Optional[Literal["Male", "Female", "Other"]] = None
    occupation: Optional[str] = None
    address: Optional[str] = None
    attendant_name: Optional[str] = None
    phone_number: Optional[str] = None
    blood_group: Optional[str] = None
    education: Optional[str] = None
    marital_status: Optional[Literal["Single", "Married", "Divorced", "Widowed"]] = None
    family_income: Optional[str] = None
    religion: Optional[str] = None


class ConditionHistorySchema(BaseModel):
    """Past or family history"""

    has_diabetes: bool = False
    has_tb: bool = False
    has_thyroid: bool = False
    other: str = ""


class PersonalHistorySchema(BaseModel):
    diet: Literal["Vegetarian", "Non-Vegetarian", "Mixed"] = "Vegetarian"
    sleep: str = ""
    appetite: str = ""
    bladder: str = ""
    bowel: str = ""
    habits: List[Literal["Smoking", "Alcohol", "Tobacco Chewing", "Drug Abuse"]] = Field(default_factory=list)
    other: str = ""


class PatientHistorySchema(BaseModel):
    demographics: DemographicsSchema
    chief_complaints: List[ComplaintSchema]
    past_history: ConditionHistorySchema
    personal_history: PersonalHistorySchema
    family_history: ConditionHistorySchema


class IntakeResponse(BaseModel):
    """Full intake session"""

    intake_id: str
    current_step: int
    step_name: str
    max_step_reached: int
    history: PatientHistorySchema
    created_at: str
    updated_at: str


class IntakeListItem(BaseModel):
    intake_id: str
    patient_name: str
    socio_economic_status: str
    current_step: int
    created_at: str


class IntakeListResponse(BaseModel):
    intakes: List[IntakeListItem]


class ComplaintUpdate(BaseModel):
    """Text or HOP edit; does not change complaint order"""

    complaint: Optional[str] = None
    hop: Optional[dict[str, str]] = None


class DurationUpdate(BaseModel):
    """Single duration field edit; triggers a resort of all complaints"""

    unit: Literal["years", "months", "days"]
    value: str = ""


class StepRequest(BaseModel):
    action: Literal["next", "previous", "goto"]
    step: Optional[int] = Field(None, ge=1, le=6)


class HOPQuestionsRequest(BaseModel):
    chief_complaint: str = Field(..., description="Free-text complaint, optionally with duration")


class HOPQuestionsResponse(BaseModel):
    questions: List[str]


class SummaryResponse(BaseModel):
    summary: str


class DiagnosisSchema(BaseModel):
    diagnosis: str
    rationale: str


class DifferentialDiagnosisResponse(BaseModel):
    diagnoses: List[DiagnosisSchema]
