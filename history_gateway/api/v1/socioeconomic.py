"""POST /v1/socioeconomic/classify - Kuppuswamy tier calculator"""

from fastapi import APIRouter, Request

from history_gateway.api.v1.schemas import ClassifyRequest, AssessmentResponse
from history_gateway.api.dependencies import get_request_id
from history_gateway.domain.socioeconomic import assess
from history_gateway.infrastructure.observability.metrics import record_classification
from history_gateway.infrastructure.observability.logging import log_classification

router = APIRouter()


@router.post("/socioeconomic/classify", response_model=AssessmentResponse)
def classify_socioeconomic(request_body: ClassifyRequest, request: Request):
    """
    Score education, occupation and monthly family income.

    Never fails on content: unknown levels and invalid income score 0.
    """
    assessment = assess(request_body.education, request_body.occupation, request_body.monthly_income)

    record_classification(assessment.tier)
    log_classification(get_request_id(request), None, assessment)

    return AssessmentResponse(
        education_score=assessment.education_score,
        occupation_score=assessment.occupation_score,
        income_score=assessment.income_score,
        total_score=assessment.total_score,
        tier=assessment.tier,
    )
