"""
Integration: HTTP endpoints with the mock LLM.
"""
import json
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.test import Client

from prescriptions.llm_providers.mock_service import MOCK_SUGGESTIONS_TEXT


@pytest.fixture(autouse=True)
def mock_llm(settings):
    settings.USE_MOCK_LLM = True
    with patch("prescriptions.llm_service.llm_provider_usage"), \
            patch("prescriptions.llm_service.llm_api_latency_seconds"):
        yield


class TestSuggestionEndpoints:

    def test_get_ai_suggestions(self):
        resp = Client().post(
            "/api/get-ai-suggestions",
            data=json.dumps({"prompt": "Patient Information: ..."}),
            content_type="application/json",
        )
        assert resp.status_code == 200
        assert resp.json() == {"aiText": MOCK_SUGGESTIONS_TEXT}

    def test_suggest_for_patient(self, sample_patient_payload):
        resp = Client().post(
            "/api/suggestions/",
            data=json.dumps(sample_patient_payload),
            content_type="application/json",
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert "Name: Jane" in data["prompt"]
        assert data["aiText"] == MOCK_SUGGESTIONS_TEXT
        assert [s["name"] for s in data["suggestions"]["medication"]] == ["Paracetamol", "Cetirizine"]
        assert [s["name"] for s in data["suggestions"]["lab_test"]] == ["CBC"]

    def test_suggest_for_patient_form_encoded(self, sample_patient_payload):
        resp = Client().post("/api/suggestions/", data=sample_patient_payload)
        assert resp.status_code == 200
        assert len(resp.json()["data"]["suggestions"]["finding"]) == 2


class TestPrescriptionEndpoint:

    def payload(self):
        return {
            "patient_name": "Jane",
            "final_findings": "Common Cold",
            "final_lab_tests": "CBC",
            "final_medications": json.dumps([{
                "id": "med-7",
                "name": "Paracetamol",
                "type": "Tablet",
                "dosage": {"morning": {"active": True, "meal": "after", "quantity": 1}},
                "duration": {"number": 3, "unit": "days"},
                "instruction": "",
            }]),
        }

    def test_submit_returns_normalised_prescription(self):
        resp = Client().post(
            "/api/prescription/",
            data=json.dumps(self.payload()),
            content_type="application/json",
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["findings"] == ["Common Cold"]
        assert data["medications"][0]["id"] == "med-1"
        assert data["medications"][0]["dosage"]["afternoon"]["active"] is False
        assert "1. Paracetamol [Tablet] - morning 1 tablet(s) after meal - for 3 days" in data["summary"]

    def test_download(self):
        resp = Client().post("/api/prescription/?download=1", data=self.payload())
        assert resp.status_code == 200
        assert resp["Content-Type"].startswith("text/plain")
        assert resp["Content-Disposition"] == 'attachment; filename="prescription_Jane.txt"'
        body = resp.content.decode()
        assert "Patient: Jane" in body
        assert "Findings: Common Cold" in body


class TestPages:

    def test_medications_csv(self):
        resp = Client().get("/medications.csv")
        assert resp.status_code == 200
        assert "Paracetamol" in resp.content.decode()

    def test_index(self):
        resp = Client().get("/")
        assert resp.status_code == 200
        assert b"final_medications" in resp.content
        assert b"No medications added yet." in resp.content

    def test_index_post_renders_suggestions(self, sample_patient_payload):
        resp = Client().post("/", data=sample_patient_payload)
        assert resp.status_code == 200
        body = resp.content.decode()
        assert "Common Cold" in body
        assert "Paracetamol: [Mock] Relieves pain and reduces fever." in body
        assert "CBC: [Mock] Complete blood count" in body
        assert 'value="Jane"' in body

    def test_index_post_shows_missing_fields(self):
        resp = Client().post("/", data={"patient_name": "Jane"})
        assert resp.status_code == 200
        body = resp.content.decode()
        assert "age is required" in body
        assert "symptoms is required" in body

    def test_index_post_upstream_failure_shows_error(self, sample_patient_payload):
        with patch("prescriptions.services.generate_suggestions", side_effect=RuntimeError("quota")):
            resp = Client().post("/", data=sample_patient_payload)
        assert resp.status_code == 200
        assert "Error generating suggestions: Failed to get AI suggestions." in resp.content.decode()

    def test_metrics(self):
        Client().post("/api/get-ai-suggestions", data="{}", content_type="application/json")
        resp = Client().get("/metrics")
        assert resp.status_code == 200
        assert b"validation_error_total" in resp.content
        assert b"http_4xx_total" in resp.content


class TestSuggestPrescriptionCommand:

    def test_prints_form_view(self, capsys, fake_client):
        with patch(
            "prescriptions.management.commands.suggest_prescription.SuggestionsApiClient",
            return_value=fake_client,
        ):
            call_command(
                "suggest_prescription",
                "--name", "Jane", "--age", "30", "--gender", "Female",
                "--symptoms", "fever, cough", "--accept-all",
            )
        view = json.loads(capsys.readouterr().out)
        assert view["chips"]["finding"] == [{"value": "Common Cold", "category": "finding"}]
        assert [row["name"] for row in view["medications"]["rows"]] == ["Paracetamol"]
        assert json.loads(view["hidden_fields"]["final_medications"])[0]["name"] == "Paracetamol"
