"""
Request parsing and validation.
"""
import json

import pytest

from rx_assist.exceptions import ValidationError
from prescriptions.serializers import (
    parse_ai_suggestions_request,
    parse_json_body,
    parse_prescription_submission,
    split_chip_values,
    validate_patient_data,
)


class TestParseAiSuggestionsRequest:

    def test_returns_prompt(self):
        assert parse_ai_suggestions_request(b'{"prompt": "hello"}') == "hello"

    @pytest.mark.parametrize("body", [b"{}", b'{"prompt": ""}', b'{"prompt": "   "}', b'{"prompt": 3}'])
    def test_missing_prompt(self, body):
        with pytest.raises(ValidationError) as exc_info:
            parse_ai_suggestions_request(body)
        assert exc_info.value.code == "PROMPT_REQUIRED"
        assert exc_info.value.message == "Prompt is required."

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_json_body(b"not json")
        assert exc_info.value.code == "INVALID_JSON"

    def test_non_object_body(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_json_body(b"[1, 2]")
        assert exc_info.value.code == "INVALID_REQUEST"


class TestValidatePatientData:

    def test_builds_patient(self, sample_patient_payload):
        patient = validate_patient_data(sample_patient_payload)
        assert patient.name == "Jane"
        assert patient.past_history == ""

    def test_reports_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_patient_data({"patient_name": "Jane", "symptoms": " "})
        fields = [e["field"] for e in exc_info.value.detail["errors"]]
        assert fields == ["age", "gender", "symptoms"]


class TestPrescriptionSubmission:

    def test_split_chip_values(self):
        assert split_chip_values("Flu, Common Cold,,") == ["Flu", "Common Cold"]
        assert split_chip_values("") == []
        assert split_chip_values(None) == []
        assert split_chip_values(["CBC", " "]) == ["CBC"]

    def test_form_encoded_fields(self):
        data = {
            "final_findings": "Common Cold",
            "final_lab_tests": "CBC",
            "final_medications": json.dumps([{"name": "Paracetamol", "type": "Tablet"}]),
            "patient_name": "Jane",
        }
        result = parse_prescription_submission(data)
        assert result["findings"] == ["Common Cold"]
        assert result["lab_tests"] == ["CBC"]
        assert [r.name for r in result["medications"]] == ["Paracetamol"]
        assert result["patient"] == {"patient_name": "Jane"}

    def test_medications_as_list(self):
        result = parse_prescription_submission({"final_medications": [{"name": "A", "type": "Cream"}]})
        assert result["medications"].serialize()[0]["dosage"] == {"instruction": ""}

    def test_bad_medications_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_prescription_submission({"final_medications": "{oops"})
        assert exc_info.value.code == "INVALID_MEDICATIONS"
        with pytest.raises(ValidationError):
            parse_prescription_submission({"final_medications": '{"name": "A"}'})

    def test_nothing_to_submit(self):
        with pytest.raises(ValidationError):
            parse_prescription_submission({"patient_name": "Jane"})
