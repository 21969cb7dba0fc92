"""Gemini generateContent HTTP client for history-taking assistance"""

import json
import logging
import time
from typing import Any, Dict, List, Sequence
import httpx
from history_gateway.domain.models import ChiefComplaint, DifferentialDiagnosis, PatientHistory
from history_gateway.domain.exceptions import AIServiceError
from history_gateway.domain.formatting import format_complaints_for_diagnosis, format_patient_history
from history_gateway.config import settings
from history_gateway.infrastructure.observability.metrics import ai_request_counter, ai_latency_histogram

QUESTIONS_ERROR = "Failed to generate questions. Please check your API key and try again."
SUMMARY_ERROR = "Failed to generate summary. Please check your API key and try again."
DIAGNOSIS_ERROR = "Failed to generate differential diagnosis. Please check your API key and try again."

QUESTIONS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "questions": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}

DIAGNOSES_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "diagnoses": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "diagnosis": {"type": "STRING", "description": "The name of the potential diagnosis."},
                    "rationale": {
                        "type": "STRING",
                        "description": "A brief explanation for considering this diagnosis.",
                    },
                },
                "required": ["diagnosis", "rationale"],
            },
        }
    },
    "required": ["diagnoses"],
}


def _json_object(text: str) -> Dict[str, Any]:
    result = json.loads(text.strip())
    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
    return result


def parse_questions(text: str) -> List[str]:
    """
    Decode a {questions: [str]} reply; a missing key means no questions.

    Raises:
        ValueError: Body is not that shape
    """
    questions = _json_object(text).get("questions")
    if questions is None:
        return []
    if not isinstance(questions, list) or not all(isinstance(q, str) for q in questions):
        raise ValueError("questions must be a list of strings")
    return questions


def parse_diagnoses(text: str) -> List[DifferentialDiagnosis]:
    """
    Decode a {diagnoses: [{diagnosis, rationale}]} reply.

    Raises:
        ValueError: Body is not that shape or a field is not a string
    """
    items = _json_object(text).get("diagnoses")
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError("diagnoses must be a list")

    diagnoses = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("each diagnosis must be an object")
        diagnosis, rationale = item.get("diagnosis"), item.get("rationale")
        if not isinstance(diagnosis, str) or not isinstance(rationale, str):
            raise ValueError("diagnosis and rationale must be strings")
        diagnoses.append(DifferentialDiagnosis(diagnosis=diagnosis, rationale=rationale))
    return diagnoses


class GeminiClient:
    """Client for the Gemini text generation API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.base_url = base_url or settings.gemini_api_base
        self.model = model or settings.gemini_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _generate(self, operation: str, prompt: str, response_schema: Dict[str, Any] | None = None) -> str:
        """
        Single generateContent call returning the concatenated response text.

        Raises:
            ValueError: API key missing or response has no text
            httpx.HTTPError: On timeout, network or HTTP status errors
        """
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY is not set")

        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }

        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={"x-goog-api-key": self.api_key},
                    json=body,
                )
                response.raise_for_status()
                data = response.json()
        finally:
            ai_latency_histogram.labels(operation=operation).observe(time.time() - start_time)

        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts)
        if not text.strip():
            raise ValueError("Empty response from Gemini")
        return text

    async def _run(self, operation: str, user_message: str, call) -> Any:
        """Run one operation, collapsing every failure into a single user-facing error"""
        try:
            result = await call()
        except (httpx.HTTPError, KeyError, IndexError, AttributeError, ValueError, TypeError) as e:
            ai_request_counter.labels(operation=operation, outcome="failure").inc()
            logging.error(f"Error generating {operation}: {e!r}", extra={"operation": operation})
            raise AIServiceError(user_message) from e

        ai_request_counter.labels(operation=operation, outcome="success").inc()
        logging.info("AI generation completed", extra={"operation": operation})
        return result

    async def generate_hop_questions(self, chief_complaint: str) -> List[str]:
        """
        Follow-up questions exploring the History of Presenting Complaint.

        Blank complaints return [] without calling the API.

        Raises:
            AIServiceError: On any backend or parsing failure
        """
        if not chief_complaint.strip():
            return []

        prompt = (
            "You are an expert medical educator. A user has identified a patient's chief complaint. "
            "Generate a structured list of essential follow-up questions to thoroughly explore the "
            "History of Presenting Complaint (HOP). Frame the questions clearly and concisely. "
            f'The patient\'s chief complaint is: "{chief_complaint}".'
        )

        async def call() -> List[str]:
            return parse_questions(await self._generate("hop_questions", prompt, QUESTIONS_SCHEMA))

        return await self._run("hop_questions", QUESTIONS_ERROR, call)

    async def generate_history_summary(self, history: PatientHistory) -> str:
        """
        Narrative medical history summary for case presentation.

        Raises:
            AIServiceError: On any backend failure
        """
        prompt = (
            "You are an AI assistant tasked with creating a comprehensive medical history summary. "
            "Based on the following patient data, generate a well-structured, professionally formatted "
            "medical history summary in clear medical English, suitable for a case presentation.\n\n"
            "Patient Data:\n"
            f"{format_patient_history(history)}\n\n"
            "Structure the output with clear headings for each section (e.g., Patient Profile, "
            "Chief Complaints & History of Presenting Complaint, etc.). Ensure the language is formal "
            "and clinical."
        )

        async def call() -> str:
            return await self._generate("summary", prompt)

        return await self._run("summary", SUMMARY_ERROR, call)

    async def generate_differential_diagnosis(
        self, complaints: Sequence[ChiefComplaint]
    ) -> List[DifferentialDiagnosis]:
        """
        Differential diagnoses with rationale for the recorded complaints.

        Returns [] without calling the API when no complaint has text.

        Raises:
            AIServiceError: On any backend or parsing failure
        """
        complaint_string = format_complaints_for_diagnosis(complaints)
        if not complaint_string:
            return []

        prompt = (
            "As a senior medical diagnostician, provide a list of potential differential diagnoses based "
            "on the following chief complaints from a patient. For each diagnosis, give a brief, clear "
            f'rationale explaining why it\'s a consideration. The complaints are: "{complaint_string}".'
        )

        async def call() -> List[DifferentialDiagnosis]:
            return parse_diagnoses(await self._generate("differential_diagnosis", prompt, DIAGNOSES_SCHEMA))

        return await self._run("differential_diagnosis", DIAGNOSIS_ERROR, call)
