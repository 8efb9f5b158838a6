"""
View projections of the form state.
"""
from prescriptions import rendering
from prescriptions.form_session import SuggestionRegion
from prescriptions.medication_table import MedicationTableModel
from prescriptions.response_parser import parse_suggestions
from prescriptions.selection import SelectionStateStore
from prescriptions.types import SuggestionCategory


class TestRegionView:

    def test_loading_and_error_messages(self):
        region = SuggestionRegion(SuggestionCategory.FINDING, status="loading")
        assert rendering.region_view(region, set())["message"] == "Generating suggestions..."
        region = SuggestionRegion(SuggestionCategory.FINDING, status="error", error="HTTP error! status: 500")
        view = rendering.region_view(region, set())
        assert view["message"] == (
            "Error generating suggestions: HTTP error! status: 500. Please ensure your backend is running."
        )
        assert view["items"] == []

    def test_items_carry_selected_flag(self, sample_ai_text):
        suggestions = [s for s in parse_suggestions(sample_ai_text) if s.category is SuggestionCategory.LAB_TEST]
        region = SuggestionRegion(SuggestionCategory.LAB_TEST, status="ready", suggestions=suggestions)
        view = rendering.region_view(region, {("cbc", SuggestionCategory.LAB_TEST)})
        assert view["items"] == [{
            "text": "CBC: checks infection",
            "value": "CBC",
            "category": "lab_test",
            "selected": True,
        }]


class TestChips:

    def test_chip_list(self):
        store = SelectionStateStore()
        store.add("Flu", SuggestionCategory.FINDING)
        assert rendering.chip_list(store, SuggestionCategory.FINDING) == [{"value": "Flu", "category": "finding"}]


class TestMedicationRows:

    def test_empty_table_message(self):
        view = rendering.medication_rows(MedicationTableModel())
        assert view == {"rows": [], "empty_message": "No medications added yet."}

    def test_inactive_slot_has_no_controls(self):
        table = MedicationTableModel()
        record = table.add_empty_row()
        table.update_dosage_field(record.id, "morning", "active", True)
        slots = rendering.medication_rows(table)["rows"][0]["dosage"]["slots"]
        assert "quantity" in slots[0]
        assert slots[0]["quantity"]["unit"] == "tablet(s)"
        assert [o["value"] for o in slots[0]["quantity"]["options"]] == [1, 2, 3, 4, 5]
        assert "quantity" not in slots[1]

    def test_syrup_manual_entry_visible_for_custom_ml(self):
        table = MedicationTableModel()
        record = table.add_empty_row()
        table.update_field(record.id, "type", "Syrup")
        table.update_dosage_field(record.id, "morning", "active", True)
        table.update_dosage_field(record.id, "morning", "quantity", 7)
        quantity = rendering.dosage_widget(record)["slots"][0]["quantity"]
        assert quantity["unit"] == "ml"
        assert quantity["options"][-1] == {"value": "manual", "label": "Other", "selected": True}
        assert quantity["manual"] == {"visible": True, "value": 7}

    def test_instruction_widget(self):
        table = MedicationTableModel()
        record = table.add_empty_row()
        table.update_field(record.id, "type", "Drops")
        assert rendering.dosage_widget(record) == {
            "kind": "instruction",
            "placeholder": "Enter dosage details",
            "value": "",
        }

    def test_rows_are_numbered_from_one(self):
        table = MedicationTableModel()
        table.add_from_suggestion("A")
        table.add_from_suggestion("B")
        rows = rendering.medication_rows(table)["rows"]
        assert [(r["index"], r["name"]) for r in rows] == [(1, "A"), (2, "B")]
        assert len(rows[0]["type_options"]) == 20


class TestPrescriptionLines:

    def test_lines(self):
        table = MedicationTableModel()
        record = table.add_from_suggestion("Paracetamol")
        table.update_dosage_field(record.id, "morning", "active", True)
        table.update_dosage_field(record.id, "morning", "quantity", 1)
        table.update_dosage_field(record.id, "morning", "meal", "after")
        gel = table.add_empty_row()
        table.update_field(gel.id, "type", "Gel")
        assert rendering.prescription_lines(table) == [
            "1. Paracetamol [Tablet] - morning 1 tablet(s) after meal - for 1 days",
            "2. (unnamed) [Gel] - as directed - for 1 days",
        ]
