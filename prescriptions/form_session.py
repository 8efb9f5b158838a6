"""
One page session of the prescription form.

PrescriptionFormSession owns every piece of state the page needs (suggestion
regions, suggestion "selected" flags, chips, the medication table and the
autocomplete inputs) and is the only thing event handlers talk to. Views are
derived from it with prescriptions.rendering.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from loguru import logger

from . import rendering
from .api_client import SuggestionFetchError
from .autocomplete import CHIP_LIMIT, MED_NAME_LIMIT, AutocompleteController, Commit
from .medication_table import MedicationTableModel
from .prompt_builder import build_prompt
from .response_parser import group_by_category, parse_suggestions
from .selection import SelectionStateStore, selection_key
from .types import CHIP_CATEGORIES, MedicationRecord, PatientInfo, Suggestion, SuggestionCategory

IDLE = "idle"
LOADING = "loading"
READY = "ready"
ERROR = "error"


@dataclass
class SuggestionRegion:
    """One suggestion pane (findings, medications or lab tests)"""
    category: SuggestionCategory
    status: str = IDLE
    suggestions: List[Suggestion] = field(default_factory=list)
    error: str = ""

    def names(self) -> List[str]:
        return [suggestion.name for suggestion in self.suggestions]


class ChipInput:
    """Manual entry box next to the chips of one category"""

    def __init__(self, session: "PrescriptionFormSession", category: SuggestionCategory, limit: int):
        self.session = session
        self.category = category
        self.controller = AutocompleteController(
            pool=lambda: session.regions[category].names(),
            on_select=self._select,
            limit=limit,
        )

    def _select(self, value: str):
        self.session.add_chip(self.category, value)

    def type_text(self, text: str):
        self.controller.type_text(text)

    def press(self, key: str) -> Optional[Commit]:
        if key == "Backspace" and not self.controller.text.strip():
            self.session.remove_last_chip(self.category)
            return None
        return self.controller.press(key)


class MedicationNameInput:
    """Name cell of one table row; typing edits the row name live"""

    def __init__(self, session: "PrescriptionFormSession", record_id: str, limit: int):
        self.session = session
        self.record_id = record_id
        self.controller = AutocompleteController(
            pool=lambda: session.medication_pool,
            on_select=self._select,
            limit=limit,
        )

    def _select(self, value: str):
        self.session.rename_row(self.record_id, value)

    def type_text(self, text: str):
        self.session.rename_row(self.record_id, text)
        self.controller.type_text(text)

    def press(self, key: str) -> Optional[Commit]:
        return self.controller.press(key)


class PrescriptionFormSession:

    def __init__(
        self,
        client,
        medication_pool: Sequence[str] = (),
        *,
        med_name_limit: int = MED_NAME_LIMIT,
        chip_limit: int = CHIP_LIMIT,
    ):
        self.client = client
        self.medication_pool: List[str] = list(medication_pool)
        self.med_name_limit = med_name_limit
        self.regions: Dict[SuggestionCategory, SuggestionRegion] = {
            category: SuggestionRegion(category) for category in SuggestionCategory
        }
        # UI-owned "selected" marks on rendered suggestions, keyed like chips
        self.selected: Set[Tuple[str, SuggestionCategory]] = set()
        self.selection = SelectionStateStore()
        self.table = MedicationTableModel()
        self.chip_inputs = {category: ChipInput(self, category, chip_limit) for category in CHIP_CATEGORIES}
        self._name_inputs: Dict[str, MedicationNameInput] = {}
        self.pending = False

    def load_medication_pool(self) -> int:
        self.medication_pool = self.client.get_medication_names()
        return len(self.medication_pool)

    # ------------------------------------------------------------------
    # suggestion request
    # ------------------------------------------------------------------

    def submit_patient(self, patient: PatientInfo) -> bool:
        """
        Build the prompt and fetch suggestions. Returns False when another
        request is still pending and this one was not sent.
        """
        prompt = build_prompt(patient)
        logger.debug("AI prompt:\n{}", prompt)
        if not self.begin_request():
            return False
        try:
            ai_text = self.client.get_ai_suggestions(prompt)
            self.complete_request(ai_text)
        except SuggestionFetchError as e:
            logger.error("Error getting AI suggestions: {}", e)
            self.fail_request(e.message)
        except Exception as e:
            # unexpected errors release the overlap guard as well
            logger.exception("Unexpected error while getting AI suggestions")
            self.fail_request(str(e) or type(e).__name__)
        return True

    def begin_request(self) -> bool:
        if self.pending:
            logger.warning("Suggestion request already in flight; submission ignored")
            return False
        self.pending = True
        for region in self.regions.values():
            region.status = LOADING
            region.suggestions = []
            region.error = ""
        return True

    def complete_request(self, ai_text: str):
        logger.debug("AI response text received:\n{}", ai_text)
        grouped = group_by_category(parse_suggestions(ai_text))
        for category, region in self.regions.items():
            region.status = READY
            region.suggestions = grouped[category]
        self.pending = False
        self._sync_selected_flags()

    def fail_request(self, message: str):
        for category, region in self.regions.items():
            region.suggestions = []
            if category is SuggestionCategory.FINDING:
                region.status = ERROR
                region.error = message
            else:
                region.status = IDLE
        self.pending = False

    def _sync_selected_flags(self):
        """Freshly rendered suggestions show what is already chosen"""
        self.selected = set()
        for category, region in self.regions.items():
            for suggestion in region.suggestions:
                if category is SuggestionCategory.MEDICATION:
                    chosen = self.table.has_name(suggestion.name)
                else:
                    chosen = self.selection.contains(suggestion.name, category)
                if chosen:
                    self.selected.add((selection_key(suggestion.name), category))

    # ------------------------------------------------------------------
    # suggestion clicks and chips
    # ------------------------------------------------------------------

    def find_suggestion(self, category: SuggestionCategory, value: str) -> Optional[Suggestion]:
        key = selection_key(value)
        for suggestion in self.regions[category].suggestions:
            if selection_key(suggestion.name) == key:
                return suggestion
        return None

    def _mark(self, category: SuggestionCategory, value: str, selected: bool):
        if self.find_suggestion(category, value) is None:
            return
        flag = (selection_key(value), category)
        if selected:
            self.selected.add(flag)
        else:
            self.selected.discard(flag)

    def is_selected(self, category, value: str) -> bool:
        return (selection_key(value), SuggestionCategory(category)) in self.selected

    def click_suggestion(self, category, value: str) -> Optional[bool]:
        """
        Medication: add a table row (no chip). Finding / lab test: toggle the
        chip. Returns the resulting selected state, or None when the click
        had no target.
        """
        try:
            category = SuggestionCategory(category)
        except ValueError:
            logger.error("Unknown suggestion type encountered during click: {}", category)
            return None
        suggestion = self.find_suggestion(category, value)
        if suggestion is None:
            logger.error("No {} suggestion named {!r} is displayed", category.value, value)
            return None

        if category is SuggestionCategory.MEDICATION:
            record = self.table.add_from_suggestion(suggestion.name)
            if record is None:
                logger.info("Medication {!r} already exists in the table", suggestion.name)
            else:
                logger.info("Added AI suggested medication {!r} to table", suggestion.name)
            self._mark(category, suggestion.name, True)
            return True

        selected = self.selection.toggle(suggestion.name, category)
        self._mark(category, suggestion.name, selected)
        return selected

    def add_chip(self, category, value: str) -> bool:
        category = SuggestionCategory(category)
        added = self.selection.add(value, category)
        if not added:
            logger.info("{!r} already in {} list", value, category.value)
        if self.selection.contains(value, category):
            self._mark(category, value, True)
        return added

    def remove_chip(self, category, value: str) -> bool:
        category = SuggestionCategory(category)
        removed = self.selection.remove(value, category)
        if removed:
            self._mark(category, value, False)
        self.chip_inputs[category].controller.focus()
        return removed

    def remove_last_chip(self, category):
        category = SuggestionCategory(category)
        entry = self.selection.remove_last(category)
        if entry is not None:
            self._mark(category, entry.value, False)
        return entry

    def chip_input(self, category) -> ChipInput:
        return self.chip_inputs[SuggestionCategory(category)]

    # ------------------------------------------------------------------
    # medication table
    # ------------------------------------------------------------------

    def add_empty_row(self) -> MedicationRecord:
        return self.table.add_empty_row()

    def _refresh_medication_flag(self, name: str):
        """A medication suggestion shows as selected while some row carries its name"""
        self._mark(SuggestionCategory.MEDICATION, name, self.table.has_name(name))

    def delete_row(self, index: int) -> MedicationRecord:
        record = self.table.delete_row(index)
        self._name_inputs.pop(record.id, None)
        self._refresh_medication_flag(record.name)
        return record

    def rename_row(self, record_id: str, name: str) -> MedicationRecord:
        old_name = self.table.get(record_id).name
        record = self.table.update_field(record_id, "name", name)
        self._refresh_medication_flag(old_name)
        self._refresh_medication_flag(record.name)
        return record

    def name_input(self, record_id: str) -> MedicationNameInput:
        self.table.get(record_id)
        if record_id not in self._name_inputs:
            self._name_inputs[record_id] = MedicationNameInput(self, record_id, self.med_name_limit)
        return self._name_inputs[record_id]

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------

    def hidden_fields(self) -> Dict[str, str]:
        """The three hidden inputs the prescription form submits"""
        return {
            "final_findings": self.selection.serialize(SuggestionCategory.FINDING),
            "final_lab_tests": self.selection.serialize(SuggestionCategory.LAB_TEST),
            "final_medications": self.table.to_json(),
        }

    def view(self) -> dict:
        return {
            "pending": self.pending,
            "regions": {
                category.value: rendering.region_view(region, self.selected)
                for category, region in self.regions.items()
            },
            "chips": {
                category.value: rendering.chip_list(self.selection, category)
                for category in CHIP_CATEGORIES
            },
            "medications": rendering.medication_rows(self.table),
            "hidden_fields": self.hidden_fields(),
        }
