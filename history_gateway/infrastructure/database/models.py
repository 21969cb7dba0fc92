"""SQLAlchemy ORM models for persisted intake sessions"""

import uuid
from sqlalchemy import Column, Integer, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class IntakeRecord(Base):
    """One patient's in-progress or completed history"""

    __tablename__ = "intake_record"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    history = Column(JSON, nullable=False)
    socio_economic_status = Column(Text, nullable=False, index=True)
    current_step = Column(Integer, nullable=False, default=1)
    max_step_reached = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
