"""POST /v1/complaints/reorder - order complaints by how long they have lasted"""

from dataclasses import asdict
from fastapi import APIRouter

from history_gateway.api.v1.schemas import ReorderRequest, ReorderResponse, RankedComplaint
from history_gateway.api.v1.mappers import complaints_from_schema
from history_gateway.domain.complaints import reorder, duration_to_days
from history_gateway.infrastructure.observability.metrics import complaint_reorder_counter

router = APIRouter()


@router.post("/complaints/reorder", response_model=ReorderResponse)
def reorder_complaints(request_body: ReorderRequest):
    """
    Sort complaints longest-lasting first (stable for equal durations).

    Returns:
        Complaints with their approximate duration in days
    """
    ordered = reorder(complaints_from_schema(request_body.complaints))
    complaint_reorder_counter.inc()

    return ReorderResponse(
        complaints=[
            RankedComplaint(
                id=c.id,
                complaint=c.complaint,
                duration=asdict(c.duration),
                hop=asdict(c.hop),
                duration_days=duration_to_days(c.duration),
            )
            for c in ordered
        ]
    )
