"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from history_gateway.config import settings
from history_gateway.domain.models import SocioEconomicAssessment

# Request-level chatter from the HTTP client stays out of the service log
QUIET_LOGGERS = ("httpx", "httpcore")


class IntakeJsonFormatter(jsonlogger.JsonFormatter):
    """Adds UTC timestamp, level and service name to every record"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Send JSON records for the root logger to stdout"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(IntakeJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_classification(request_id: str, intake_id: str | None, assessment: SocioEconomicAssessment) -> None:
    """Log the score breakdown behind a tier; patient identifiers are never included"""
    logging.info(
        "Socio-economic tier derived",
        extra={
            "request_id": request_id,
            "intake_id": intake_id,
            "step": "classification",
            "education_score": assessment.education_score,
            "occupation_score": assessment.occupation_score,
            "income_score": assessment.income_score,
            "total_score": assessment.total_score,
            "tier": assessment.tier,
        },
    )
