"""Conversions between API schemas and domain dataclasses"""

from typing import List
from history_gateway.api.v1.schemas import (
    ComplaintSchema,
    IntakeListItem,
    IntakeResponse,
    PatientHistorySchema,
)
from history_gateway.domain.models import ChiefComplaint, Duration, HOPData, history_to_dict
from history_gateway.domain.intake import STEP_NAMES
from history_gateway.infrastructure.database.models import IntakeRecord
from history_gateway.infrastructure.database.repositories import IntakeRepository


def complaint_from_schema(schema: ComplaintSchema) -> ChiefComplaint:
    return ChiefComplaint(
        id=schema.id,
        complaint=schema.complaint,
        duration=Duration(**schema.duration.model_dump()),
        hop=HOPData(**schema.hop.model_dump()),
    )


def complaints_from_schema(schemas: List[ComplaintSchema]) -> List[ChiefComplaint]:
    return [complaint_from_schema(s) for s in schemas]


def intake_response(record: IntakeRecord) -> IntakeResponse:
    session = IntakeRepository.to_session(record)
    return IntakeResponse(
        intake_id=str(record.id),
        current_step=session.current_step,
        step_name=STEP_NAMES[session.current_step],
        max_step_reached=session.max_step_reached,
        history=PatientHistorySchema.model_validate(history_to_dict(session.history)),
        created_at=record.created_at.isoformat(),
        updated_at=record.updated_at.isoformat(),
    )


def intake_list_item(record: IntakeRecord) -> IntakeListItem:
    return IntakeListItem(
        intake_id=str(record.id),
        patient_name=record.history.get("demographics", {}).get("name", ""),
        socio_economic_status=record.socio_economic_status,
        current_step=record.current_step,
        created_at=record.created_at.isoformat(),
    )
