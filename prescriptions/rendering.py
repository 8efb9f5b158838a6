"""
Pure projections from form state to view dicts.
Nothing here reads state back from the view.
"""
from typing import Iterable, List, Set, Tuple

from .catalog import (
    DURATION_NUMBERS,
    DURATION_UNITS,
    MEDICATION_TYPES,
    SYRUP_ML_OPTIONS,
    TABLET_QUANTITIES,
    TIME_SLOTS,
    is_tablet_like,
)
from .medication_table import MedicationTableModel
from .selection import SelectionStateStore, selection_key
from .types import InstructionDosage, MedicationRecord, Suggestion, SuggestionCategory

LOADING_TEXT = "Generating suggestions..."
EMPTY_TABLE_TEXT = "No medications added yet."
MEAL_LABELS = {"after": "After Meal", "before": "Before Meal"}


def error_text(message: str) -> str:
    return f"Error generating suggestions: {message}. Please ensure your backend is running."


def suggestion_items(suggestions: Iterable[Suggestion], selected: Set[Tuple[str, SuggestionCategory]]) -> List[dict]:
    return [
        {
            "text": suggestion.display_text,
            "value": suggestion.name,
            "category": suggestion.category.value,
            "selected": (selection_key(suggestion.name), suggestion.category) in selected,
        }
        for suggestion in suggestions
    ]


def region_view(region, selected) -> dict:
    """One of the three suggestion panes"""
    view = {"category": region.category.value, "status": region.status, "message": "", "items": []}
    if region.status == "loading":
        view["message"] = LOADING_TEXT
    elif region.status == "error":
        view["message"] = error_text(region.error)
    else:
        view["items"] = suggestion_items(region.suggestions, selected)
    return view


def chip_list(store: SelectionStateStore, category) -> List[dict]:
    return [
        {"value": entry.value, "category": entry.category.value}
        for entry in store.entries(category)
    ]


def _quantity_options(record: MedicationRecord, quantity) -> dict:
    if is_tablet_like(record.type):
        return {
            "unit": "tablet(s)",
            "options": [
                {"value": n, "label": str(n), "selected": quantity == n}
                for n in TABLET_QUANTITIES
            ],
            "manual": None,
        }
    manual = quantity != "" and quantity not in SYRUP_ML_OPTIONS
    options = [
        {"value": ml, "label": f"{ml} ml", "selected": quantity == ml}
        for ml in SYRUP_ML_OPTIONS
    ]
    options.append({"value": "manual", "label": "Other", "selected": manual})
    return {
        "unit": "ml",
        "options": options,
        "manual": {"visible": manual, "value": quantity if manual else ""},
    }


def dosage_widget(record: MedicationRecord) -> dict:
    if isinstance(record.dosage, InstructionDosage):
        return {
            "kind": "instruction",
            "placeholder": "Enter dosage details",
            "value": record.dosage.instruction,
        }
    slots = []
    for time_slot in TIME_SLOTS:
        slot = record.dosage.slot(time_slot)
        view = {"slot": time_slot, "label": time_slot.capitalize(), "active": slot.active}
        # quantity and meal controls only exist for ticked slots
        if slot.active:
            view["quantity"] = _quantity_options(record, slot.quantity)
            view["meal"] = [
                {"value": meal, "label": label, "checked": slot.meal == meal}
                for meal, label in MEAL_LABELS.items()
            ]
        slots.append(view)
    return {"kind": "slots", "slots": slots}


def medication_rows(table: MedicationTableModel) -> dict:
    if not len(table):
        return {"rows": [], "empty_message": EMPTY_TABLE_TEXT}
    rows = []
    for position, record in enumerate(table, start=1):
        rows.append({
            "index": position,
            "id": record.id,
            "name": record.name,
            "type": record.type,
            "type_options": [
                {"value": t, "selected": t == record.type} for t in MEDICATION_TYPES
            ],
            "dosage": dosage_widget(record),
            "duration": {
                "number": record.duration.number,
                "unit": record.duration.unit,
                "number_options": list(DURATION_NUMBERS),
                "unit_options": list(DURATION_UNITS),
            },
            "instruction": record.instruction,
        })
    return {"rows": rows, "empty_message": ""}


def _dosage_text(record: MedicationRecord) -> str:
    if isinstance(record.dosage, InstructionDosage):
        return record.dosage.instruction or "as directed"
    unit = "tablet(s)" if is_tablet_like(record.type) else "ml"
    parts = []
    for time_slot in TIME_SLOTS:
        slot = record.dosage.slot(time_slot)
        if not slot.active:
            continue
        text = time_slot
        if slot.quantity != "":
            text += f" {slot.quantity} {unit}"
        if slot.meal:
            text += f" {slot.meal} meal"
        parts.append(text)
    return ", ".join(parts) or "no time of day selected"


def prescription_lines(table: MedicationTableModel) -> List[str]:
    """One readable line per medication, in display order"""
    lines = []
    for position, record in enumerate(table, start=1):
        line = (
            f"{position}. {record.name or '(unnamed)'} [{record.type}] - "
            f"{_dosage_text(record)} - for {record.duration.number} {record.duration.unit}"
        )
        if record.instruction:
            line += f" ({record.instruction})"
        lines.append(line)
    return lines
