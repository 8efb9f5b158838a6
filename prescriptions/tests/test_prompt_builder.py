"""
Prompt text built from the patient fields.
"""
import pytest

from rx_assist.exceptions import ValidationError
from prescriptions.prompt_builder import build_prompt
from prescriptions.types import PatientInfo


class TestBuildPrompt:

    def test_contains_patient_block(self, sample_patient):
        prompt = build_prompt(sample_patient)
        assert prompt.startswith("Patient Information:\nName: Jane\nAge: 30\nGender: Female\n")
        assert "Symptoms: fever, cough\n" in prompt

    def test_empty_history_becomes_none(self, sample_patient):
        prompt = build_prompt(sample_patient)
        assert "Past Medical History/Long-term Problems: None\n" in prompt

    def test_history_is_kept(self, sample_patient):
        sample_patient.past_history = "asthma"
        assert "Long-term Problems: asthma\n" in build_prompt(sample_patient)

    def test_format_instructions_present(self, sample_patient):
        prompt = build_prompt(sample_patient)
        for header in ("Findings:", "Medications:", "Lab Tests:"):
            assert f"\n{header}\n" in prompt
        assert "- **[Medication Name]**:" in prompt

    def test_missing_fields_raise(self):
        patient = PatientInfo(name="Jane", age="", gender=" ", symptoms="cough")
        with pytest.raises(ValidationError) as exc_info:
            build_prompt(patient)
        fields = [e["field"] for e in exc_info.value.detail["errors"]]
        assert fields == ["age", "gender"]
