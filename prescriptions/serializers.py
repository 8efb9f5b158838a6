"""
Request parsing and validation (browser <-> server)
"""
import json

from rx_assist.exceptions import ValidationError

from .medication_table import MedicationTableModel
from .types import PatientInfo

# form field -> PatientInfo attribute
PATIENT_FIELDS = {
    "patient_name": "name",
    "age": "age",
    "gender": "gender",
    "symptoms": "symptoms",
    "past_medical_history": "past_history",
}
REQUIRED_PATIENT_FIELDS = ["patient_name", "age", "gender", "symptoms"]

HIDDEN_FIELDS = ["final_findings", "final_lab_tests", "final_medications"]


def parse_json_body(body):
    """POST body (JSON) -> dict; bad JSON or a non-object raises ValidationError"""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(
            message="Invalid JSON format",
            code="INVALID_JSON",
            detail={"error": str(e)},
        )
    if not isinstance(data, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            code="INVALID_REQUEST",
            detail={"errors": [{"field": "_", "message": "Request body must be a JSON object"}]},
        )
    return data


def parse_ai_suggestions_request(body):
    """{prompt} -> prompt text"""
    data = parse_json_body(body)
    prompt = data.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError(
            message="Prompt is required.",
            code="PROMPT_REQUIRED",
            detail={"errors": [{"field": "prompt", "message": "Prompt is required."}]},
        )
    return prompt


def _text(value):
    return "" if value is None else str(value).strip()


def validate_patient_data(data):
    """
    Patient form fields -> PatientInfo.
    Only presence is checked; the content goes to the model as typed.
    """
    errors = []
    for field in REQUIRED_PATIENT_FIELDS:
        if not _text(data.get(field)):
            errors.append({"field": field, "message": f"{field} is required"})
    if errors:
        raise ValidationError(
            message="Patient information is incomplete",
            code="VALIDATION_ERROR",
            detail={"errors": errors},
        )
    return PatientInfo(**{attr: _text(data.get(field)) for field, attr in PATIENT_FIELDS.items()})


def split_chip_values(value):
    """Comma-joined hidden field -> list of values"""
    if value is None:
        return []
    if isinstance(value, list):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip() for item in items if str(item).strip()]


def _medications_payload(value):
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    try:
        items = json.loads(value)
    except (TypeError, json.JSONDecodeError) as e:
        raise ValidationError(
            message="final_medications must be a JSON list",
            code="INVALID_MEDICATIONS",
            detail={"error": str(e)},
        )
    if not isinstance(items, list):
        raise ValidationError(
            message="final_medications must be a JSON list",
            code="INVALID_MEDICATIONS",
            detail={"error": f"got {type(items).__name__}"},
        )
    return items


def parse_prescription_submission(data):
    """
    Hidden fields of the form -> findings, lab tests and a validated
    MedicationTableModel. Patient fields are optional here.
    """
    if not any(field in data for field in HIDDEN_FIELDS):
        raise ValidationError(
            message="Nothing to submit",
            code="VALIDATION_ERROR",
            detail={"errors": [{"field": f, "message": "missing"} for f in HIDDEN_FIELDS]},
        )
    table = MedicationTableModel.from_serialized(_medications_payload(data.get("final_medications")))
    patient = {field: _text(data.get(field)) for field in PATIENT_FIELDS if _text(data.get(field))}
    return {
        "patient": patient,
        "findings": split_chip_values(data.get("final_findings")),
        "lab_tests": split_chip_values(data.get("final_lab_tests")),
        "medications": table,
    }
