"""
Business logic behind the views: call the LLM, parse, summarise prescriptions
"""
from django.conf import settings
from loguru import logger

from rx_assist.exceptions import BlockError, UpstreamError, ValidationError

from . import rendering
from .api_client import SuggestionFetchError
from .catalog import MEDICATION_TYPES, load_medication_names
from .form_session import PrescriptionFormSession
from .llm_service import generate_suggestions
from .metrics import (
    PRESCRIPTION_SUBMITTED,
    SUGGESTIONS_FAILED,
    SUGGESTIONS_PARSED,
    SUGGESTIONS_REQUESTED,
)
from .prompt_builder import build_prompt
from .response_parser import group_by_category, parse_suggestions
from .serializers import validate_patient_data


def _ask_llm(prompt, endpoint):
    SUGGESTIONS_REQUESTED.labels(endpoint=endpoint).inc()
    try:
        return generate_suggestions(prompt)
    except Exception as e:
        SUGGESTIONS_FAILED.inc()
        logger.exception("Error calling the generative-language API: {}", e)
        raise UpstreamError(detail={"reason": str(e)})


def get_ai_suggestions(prompt):
    """
    Prompt -> raw AI text, the contract the browser form relies on
    """
    return {"aiText": _ask_llm(prompt, "get-ai-suggestions")}


def suggest_for_patient(patient):
    """
    Patient -> prompt, raw text and parsed suggestions grouped by category
    """
    prompt = build_prompt(patient)
    ai_text = _ask_llm(prompt, "suggestions")
    grouped = group_by_category(parse_suggestions(ai_text))
    for category, items in grouped.items():
        if items:
            SUGGESTIONS_PARSED.labels(category=category.value).inc(len(items))
    return {
        "success": True,
        "data": {
            "prompt": prompt,
            "aiText": ai_text,
            "suggestions": {
                category.value: [suggestion.to_dict() for suggestion in items]
                for category, items in grouped.items()
            },
        },
    }


def _summary_lines(submission):
    lines = []
    patient = submission["patient"]
    if patient.get("patient_name"):
        lines.append(f"Patient: {patient['patient_name']}")
    for label, field in (("Age", "age"), ("Gender", "gender"), ("Symptoms", "symptoms")):
        if patient.get(field):
            lines.append(f"{label}: {patient[field]}")
    if lines:
        lines.append("")
    lines.append("Findings: " + (", ".join(submission["findings"]) or "none"))
    lines.append("Lab tests: " + (", ".join(submission["lab_tests"]) or "none"))
    lines.append("")
    lines.append("Medications:")
    medication_lines = rendering.prescription_lines(submission["medications"])
    lines.extend(medication_lines or ["none"])
    return lines


def submit_prescription(submission):
    """
    Validated submission -> normalised prescription plus a readable summary
    """
    table = submission["medications"]
    PRESCRIPTION_SUBMITTED.inc()
    logger.info(
        "Prescription submitted: {} finding(s), {} lab test(s), {} medication(s)",
        len(submission["findings"]), len(submission["lab_tests"]), len(table),
    )
    return {
        "success": True,
        "data": {
            "patient": submission["patient"],
            "findings": submission["findings"],
            "lab_tests": submission["lab_tests"],
            "medications": table.serialize(),
            "summary": _summary_lines(submission),
        },
    }


def get_prescription_download(submission):
    """
    Returns (content, filename)
    """
    content = "\n".join(_summary_lines(submission)) + "\n"
    name = submission["patient"].get("patient_name", "").strip().replace(" ", "_")
    filename = f"prescription_{name}.txt" if name else "prescription.txt"
    PRESCRIPTION_SUBMITTED.inc()
    return content, filename


def read_medications_csv():
    """Raw catalog file served to the browser"""
    path = settings.MEDICATIONS_CSV_PATH
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError:
        logger.error("Medications CSV not found at {}", path)
        raise BlockError(
            message="Medications list not found",
            code="NOT_FOUND",
            http_status=404,
        )


class InProcessSuggestionsClient:
    """
    Same interface as SuggestionsApiClient, answering from this process.
    Used by the server-rendered page, which has no reason to call itself over HTTP.
    """

    def get_ai_suggestions(self, prompt):
        try:
            return get_ai_suggestions(prompt)["aiText"]
        except UpstreamError as e:
            raise SuggestionFetchError(e.message, status=e.http_status)

    def get_medication_names(self):
        return load_medication_names(settings.MEDICATIONS_CSV_PATH)


def get_form_page(patient_data=None):
    """
    Context of the index page. With patient_data, the suggestions are
    fetched and rendered through a fresh form session.
    """
    session = PrescriptionFormSession(
        InProcessSuggestionsClient(),
        med_name_limit=settings.MED_NAME_AUTOCOMPLETE_LIMIT,
        chip_limit=settings.CHIP_AUTOCOMPLETE_LIMIT,
    )
    session.load_medication_pool()
    errors = []
    if patient_data is not None:
        try:
            session.submit_patient(validate_patient_data(patient_data))
        except ValidationError as e:
            errors = e.detail.get("errors", [])
    return {
        "medication_types": MEDICATION_TYPES,
        "medication_count": len(session.medication_pool),
        "patient": patient_data or {},
        "errors": errors,
        "form": session.view(),
    }
