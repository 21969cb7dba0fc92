"""/v1/intake - guided patient history form sessions"""

import logging
from dataclasses import replace
from typing import Callable
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from history_gateway.api.v1.schemas import (
    ComplaintUpdate,
    ConditionHistorySchema,
    DemographicsUpdate,
    DurationUpdate,
    IntakeListResponse,
    IntakeResponse,
    PersonalHistorySchema,
    StepRequest,
)
from history_gateway.api.v1.mappers import intake_response, intake_list_item
from history_gateway.api.dependencies import get_request_id, parse_intake_id
from history_gateway.infrastructure.database.session import get_db
from history_gateway.infrastructure.database.repositories import IntakeRepository
from history_gateway.domain import complaints as complaint_ops
from history_gateway.domain import intake as intake_ops
from history_gateway.domain.models import FamilyHistory, IntakeSession, PastHistory, PersonalHistory
from history_gateway.domain.socioeconomic import assess
from history_gateway.domain.exceptions import DomainException, IntakeNotFoundError
from history_gateway.infrastructure.observability.metrics import record_classification, complaint_reorder_counter
from history_gateway.infrastructure.observability.logging import log_classification

router = APIRouter()


def _apply(
    db: Session,
    intake_id: str,
    operation: Callable[[IntakeSession], IntakeSession],
) -> IntakeResponse:
    """
    Lock the row, apply a pure edit, persist and return the new state.

    The row lock is held until commit so two edits of one intake cannot both
    start from the same state. Domain errors roll back and propagate to the
    app's handlers (404 / 422).
    """
    repo = IntakeRepository(db)
    try:
        record = repo.get_or_raise(parse_intake_id(intake_id), for_update=True)
        session = operation(IntakeRepository.to_session(record))
        repo.save(record, session)
        db.commit()
    except DomainException:
        db.rollback()
        raise

    db.refresh(record)
    return intake_response(record)


def _with_complaints(session: IntakeSession, complaints) -> IntakeSession:
    return replace(session, history=replace(session.history, chief_complaints=tuple(complaints)))


def _require_complaint(session: IntakeSession, complaint_id: str) -> None:
    if not any(c.id == complaint_id for c in session.history.chief_complaints):
        raise IntakeNotFoundError(f"Complaint {complaint_id} not found")


@router.post("/intake", response_model=IntakeResponse, status_code=201)
def create_intake(db: Session = Depends(get_db)):
    """Start a new intake at step 1 with one empty complaint"""
    record = IntakeRepository(db).create(intake_ops.new_session())
    db.commit()
    db.refresh(record)

    logging.info("Intake created", extra={"intake_id": str(record.id)})
    return intake_response(record)


@router.get("/intake", response_model=IntakeListResponse)
def list_intakes(
    limit: int = Query(20, ge=1, le=100, description="Maximum number of sessions"),
    db: Session = Depends(get_db),
):
    records = IntakeRepository(db).list_recent(limit=limit)
    return IntakeListResponse(intakes=[intake_list_item(r) for r in records])


@router.get("/intake/{intake_id}", response_model=IntakeResponse)
def get_intake(intake_id: str, db: Session = Depends(get_db)):
    record = IntakeRepository(db).get_by_id(parse_intake_id(intake_id))
    if not record:
        raise HTTPException(status_code=404, detail="Intake not found")
    return intake_response(record)


@router.put("/intake/{intake_id}/demographics", response_model=IntakeResponse)
def update_demographics(
    intake_id: str,
    request_body: DemographicsUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Edit demographics fields.

    The socio-economic tier is recomputed from education, occupation and
    family income on every edit.
    """
    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)

    def operation(session: IntakeSession) -> IntakeSession:
        history = intake_ops.set_demographics(session.history, **changes)
        d = history.demographics
        assessment = assess(d.education, d.occupation, d.family_income)
        record_classification(assessment.tier)
        log_classification(get_request_id(request), intake_id, assessment)
        return replace(session, history=history)

    return _apply(db, intake_id, operation)


@router.post("/intake/{intake_id}/complaints", response_model=IntakeResponse)
def add_complaint(intake_id: str, db: Session = Depends(get_db)):
    """Append an empty complaint; existing order is kept"""
    return _apply(
        db,
        intake_id,
        lambda s: _with_complaints(s, complaint_ops.add_complaint(s.history.chief_complaints)),
    )


@router.patch("/intake/{intake_id}/complaints/{complaint_id}", response_model=IntakeResponse)
def update_complaint(
    intake_id: str,
    complaint_id: str,
    request_body: ComplaintUpdate,
    db: Session = Depends(get_db),
):
    """Edit complaint text and/or HOP details without reordering"""

    def operation(session: IntakeSession) -> IntakeSession:
        _require_complaint(session, complaint_id)
        updated = session.history.chief_complaints
        if request_body.complaint is not None:
            updated = complaint_ops.update_complaint_text(updated, complaint_id, request_body.complaint)
        if request_body.hop:
            updated = complaint_ops.update_complaint_hop(updated, complaint_id, **request_body.hop)
        return _with_complaints(session, updated)

    return _apply(db, intake_id, operation)


@router.put("/intake/{intake_id}/complaints/{complaint_id}/duration", response_model=IntakeResponse)
def update_complaint_duration(
    intake_id: str,
    complaint_id: str,
    request_body: DurationUpdate,
    db: Session = Depends(get_db),
):
    """Edit one duration field; all complaints are resorted longest-first"""

    def operation(session: IntakeSession) -> IntakeSession:
        _require_complaint(session, complaint_id)
        updated = complaint_ops.update_complaint_duration(
            session.history.chief_complaints, complaint_id, request_body.unit, request_body.value
        )
        complaint_reorder_counter.inc()
        return _with_complaints(session, updated)

    return _apply(db, intake_id, operation)


@router.delete("/intake/{intake_id}/complaints/{complaint_id}", response_model=IntakeResponse)
def remove_complaint(intake_id: str, complaint_id: str, db: Session = Depends(get_db)):
    def operation(session: IntakeSession) -> IntakeSession:
        _require_complaint(session, complaint_id)
        return _with_complaints(
            session, complaint_ops.remove_complaint(session.history.chief_complaints, complaint_id)
        )

    return _apply(db, intake_id, operation)


@router.put("/intake/{intake_id}/past-history", response_model=IntakeResponse)
def update_past_history(intake_id: str, request_body: ConditionHistorySchema, db: Session = Depends(get_db)):
    past = PastHistory(**request_body.model_dump())
    return _apply(db, intake_id, lambda s: replace(s, history=replace(s.history, past_history=past)))


@router.put("/intake/{intake_id}/family-history", response_model=IntakeResponse)
def update_family_history(intake_id: str, request_body: ConditionHistorySchema, db: Session = Depends(get_db)):
    family = FamilyHistory(**request_body.model_dump())
    return _apply(db, intake_id, lambda s: replace(s, history=replace(s.history, family_history=family)))


@router.put("/intake/{intake_id}/personal-history", response_model=IntakeResponse)
def update_personal_history(intake_id: str, request_body: PersonalHistorySchema, db: Session = Depends(get_db)):
    data = request_body.model_dump()
    # Duplicate habits collapse, first occurrence wins
    data["habits"] = tuple(dict.fromkeys(data["habits"]))
    personal = PersonalHistory(**data)
    return _apply(db, intake_id, lambda s: replace(s, history=replace(s.history, personal_history=personal)))


@router.post("/intake/{intake_id}/personal-history/habits/{habit}", response_model=IntakeResponse)
def toggle_habit(intake_id: str, habit: str, db: Session = Depends(get_db)):
    def operation(session: IntakeSession) -> IntakeSession:
        personal = intake_ops.toggle_habit(session.history.personal_history, habit)
        return replace(session, history=replace(session.history, personal_history=personal))

    return _apply(db, intake_id, operation)


@router.post("/intake/{intake_id}/step", response_model=IntakeResponse)
def change_step(intake_id: str, request_body: StepRequest, db: Session = Depends(get_db)):
    """
    Navigate between form steps.

    "goto" only reaches steps already visited; other targets are ignored.
    """
    if request_body.action == "goto" and request_body.step is None:
        raise HTTPException(status_code=422, detail="step is required for goto")

    def operation(session: IntakeSession) -> IntakeSession:
        if request_body.action == "next":
            return intake_ops.next_step(session)
        if request_body.action == "previous":
            return intake_ops.previous_step(session)
        return intake_ops.go_to_step(session, request_body.step)

    return _apply(db, intake_id, operation)
