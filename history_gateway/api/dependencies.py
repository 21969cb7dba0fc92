"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import HTTPException, Request
from history_gateway.infrastructure.clients.gemini import GeminiClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_gemini_client() -> GeminiClient:
    """Provide Gemini API client instance"""
    return GeminiClient()


def parse_intake_id(intake_id: str) -> uuid.UUID:
    """Validate path id format"""
    try:
        return uuid.UUID(intake_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid intake ID format")
