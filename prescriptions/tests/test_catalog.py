"""
Medication catalog and type groups.
"""
from prescriptions.catalog import (
    MEDICATION_TYPES,
    is_syrup_like,
    is_tablet_like,
    load_medication_names,
    parse_medication_names,
    uses_time_slots,
)


class TestMedicationTypes:

    def test_twenty_types_tablet_first(self):
        assert len(MEDICATION_TYPES) == 20
        assert MEDICATION_TYPES[0] == "Tablet"

    def test_groups(self):
        assert is_tablet_like("Lozenges")
        assert not is_tablet_like("Syrup")
        assert is_syrup_like("Mixtures")
        assert uses_time_slots("Capsule")
        assert not uses_time_slots("Injection")


class TestMedicationNames:

    def test_skips_blank_and_comment_lines(self):
        text = "// header\nParacetamol\n\n  Ibuprofen  \r\n//Aspirin\n"
        assert parse_medication_names(text) == ["Paracetamol", "Ibuprofen"]

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "meds.csv"
        path.write_text("Amoxicillin\nCetirizine\n", encoding="utf-8")
        assert load_medication_names(path) == ["Amoxicillin", "Cetirizine"]

    def test_missing_file_gives_empty_pool(self, tmp_path):
        assert load_medication_names(tmp_path / "missing.csv") == []

    def test_bundled_catalog(self, settings):
        names = load_medication_names(settings.MEDICATIONS_CSV_PATH)
        assert "Paracetamol" in names
        assert not any(name.startswith("//") for name in names)
