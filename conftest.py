"""
Pytest configuration and shared fixtures.
"""
import pytest

from prescriptions.types import PatientInfo


@pytest.fixture
def sample_patient():
    """Patient typed into the form."""
    return PatientInfo(
        name="Jane",
        age="30",
        gender="Female",
        symptoms="fever, cough",
        past_history="",
    )


@pytest.fixture
def sample_patient_payload():
    """Same patient as posted to /api/suggestions/."""
    return {
        "patient_name": "Jane",
        "age": "30",
        "gender": "Female",
        "symptoms": "fever, cough",
        "past_medical_history": "",
    }


@pytest.fixture
def sample_ai_text():
    """A well-formed AI answer."""
    return (
        "Findings:\n"
        "- Common Cold\n"
        "Medications:\n"
        "- **Paracetamol**: reduces fever\n"
        "Lab Tests:\n"
        "- **CBC**: checks infection\n"
    )


@pytest.fixture
def fake_client(sample_ai_text):
    """Stands in for SuggestionsApiClient: answers with sample_ai_text."""

    class FakeClient:
        def __init__(self):
            self.ai_text = sample_ai_text
            self.error = None
            self.prompts = []
            self.medication_names = ["Paracetamol", "Paracetamol 500mg", "Ibuprofen"]

        def get_ai_suggestions(self, prompt):
            self.prompts.append(prompt)
            if self.error is not None:
                raise self.error
            return self.ai_text

        def get_medication_names(self):
            return list(self.medication_names)

    return FakeClient()
