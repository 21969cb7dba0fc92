"""Generative AI assistance - HOP questions, history summary, differential diagnosis

AIServiceError is left to propagate; the app maps it to 502 with its generic message.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from history_gateway.api.v1.schemas import (
    DiagnosisSchema,
    DifferentialDiagnosisResponse,
    HOPQuestionsRequest,
    HOPQuestionsResponse,
    SummaryResponse,
)
from history_gateway.api.dependencies import get_gemini_client, parse_intake_id
from history_gateway.infrastructure.clients.gemini import GeminiClient
from history_gateway.infrastructure.database.session import get_db
from history_gateway.infrastructure.database.repositories import IntakeRepository
from history_gateway.domain.models import IntakeSession
from history_gateway.domain.formatting import format_active_complaints

router = APIRouter()

NO_COMPLAINTS_MESSAGE = "Please enter at least one chief complaint."


def _load_session(db: Session, intake_id: str) -> IntakeSession:
    record = IntakeRepository(db).get_or_raise(parse_intake_id(intake_id))
    return IntakeRepository.to_session(record)


@router.post("/assist/hop-questions", response_model=HOPQuestionsResponse)
async def hop_questions_for_text(
    request_body: HOPQuestionsRequest,
    gemini: GeminiClient = Depends(get_gemini_client),
):
    """Follow-up questions for a free-text chief complaint"""
    questions = await gemini.generate_hop_questions(request_body.chief_complaint)
    return HOPQuestionsResponse(questions=questions)


@router.post("/intake/{intake_id}/hop-questions", response_model=HOPQuestionsResponse)
async def hop_questions_for_intake(
    intake_id: str,
    db: Session = Depends(get_db),
    gemini: GeminiClient = Depends(get_gemini_client),
):
    """Follow-up questions covering every recorded complaint and its duration"""
    session = _load_session(db, intake_id)
    active = format_active_complaints(session.history.chief_complaints)
    if not active:
        raise HTTPException(status_code=422, detail=NO_COMPLAINTS_MESSAGE)

    questions = await gemini.generate_hop_questions(active)
    return HOPQuestionsResponse(questions=questions)


@router.post("/intake/{intake_id}/summary", response_model=SummaryResponse)
async def history_summary(
    intake_id: str,
    db: Session = Depends(get_db),
    gemini: GeminiClient = Depends(get_gemini_client),
):
    """Narrative case-presentation summary of the full history"""
    session = _load_session(db, intake_id)
    summary = await gemini.generate_history_summary(session.history)
    return SummaryResponse(summary=summary)


@router.post("/intake/{intake_id}/differential-diagnosis", response_model=DifferentialDiagnosisResponse)
async def differential_diagnosis(
    intake_id: str,
    db: Session = Depends(get_db),
    gemini: GeminiClient = Depends(get_gemini_client),
):
    """Potential diagnoses with rationale; empty when no complaint has been entered"""
    session = _load_session(db, intake_id)
    diagnoses = await gemini.generate_differential_diagnosis(session.history.chief_complaints)
    return DifferentialDiagnosisResponse(
        diagnoses=[DiagnosisSchema(diagnosis=d.diagnosis, rationale=d.rationale) for d in diagnoses]
    )
