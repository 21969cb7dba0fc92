"""Data access layer for intake sessions"""

import uuid
from dataclasses import replace
from typing import List, Optional
from sqlalchemy import Select, select
from sqlalchemy.orm import Session
from history_gateway.infrastructure.database.models import IntakeRecord
from history_gateway.domain.models import IntakeSession, history_to_dict, history_from_dict
from history_gateway.domain.intake import with_derived_tier
from history_gateway.domain.exceptions import IntakeNotFoundError


class IntakeRepository:
    """Repository for intake sessions"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _apply(record: IntakeRecord, session: IntakeSession) -> None:
        # Tier column is always re-derived so a stale value can never be stored
        history = replace(session.history, demographics=with_derived_tier(session.history.demographics))
        record.history = history_to_dict(history)
        record.socio_economic_status = history.demographics.socio_economic_status
        record.current_step = session.current_step
        record.max_step_reached = session.max_step_reached

    def create(self, session: IntakeSession) -> IntakeRecord:
        """Persist a new intake session"""
        record = IntakeRecord()
        self._apply(record, session)
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record

    def get_by_id(self, intake_id: uuid.UUID) -> Optional[IntakeRecord]:
        return (
            self.db.query(IntakeRecord)
            .filter(IntakeRecord.id == intake_id)
            .first()
        )

    @staticmethod
    def locking_select(intake_id: uuid.UUID) -> Select:
        """
        SELECT ... FOR UPDATE for one intake.

        populate_existing refreshes an instance already in the identity map, so
        the caller edits the row as it stood when the lock was taken. SQLite has
        no row locks and ignores the clause.
        """
        return (
            select(IntakeRecord)
            .where(IntakeRecord.id == intake_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

    def get_for_update(self, intake_id: uuid.UUID) -> Optional[IntakeRecord]:
        """Fetch and row-lock until commit/rollback; concurrent edits of one intake serialize"""
        return self.db.execute(self.locking_select(intake_id)).scalar_one_or_none()

    def get_or_raise(self, intake_id: uuid.UUID, for_update: bool = False) -> IntakeRecord:
        record = self.get_for_update(intake_id) if for_update else self.get_by_id(intake_id)
        if record is None:
            raise IntakeNotFoundError(f"Intake {intake_id} not found")
        return record

    def save(self, record: IntakeRecord, session: IntakeSession) -> IntakeRecord:
        """Overwrite a record with the given session state"""
        self._apply(record, session)
        self.db.flush()
        return record

    def list_recent(self, limit: int = 20) -> List[IntakeRecord]:
        return (
            self.db.query(IntakeRecord)
            .order_by(IntakeRecord.created_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def to_session(record: IntakeRecord) -> IntakeSession:
        return IntakeSession(
            history=history_from_dict(record.history),
            current_step=record.current_step,
            max_step_reached=record.max_step_reached,
        )
