"""
Internal types shared by the form-state modules
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class SuggestionCategory(str, Enum):
    """The three sections of an AI answer"""
    FINDING = "finding"
    MEDICATION = "medication"
    LAB_TEST = "lab_test"


# Categories that become chips; medications go to the table instead
CHIP_CATEGORIES = (SuggestionCategory.FINDING, SuggestionCategory.LAB_TEST)


@dataclass(frozen=True)
class Suggestion:
    """One parsed item of the AI answer, not yet selected"""
    category: SuggestionCategory
    name: str
    description: str
    display_text: str

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "display_text": self.display_text,
        }


@dataclass(frozen=True)
class SelectionEntry:
    """A chip: one selected finding or lab test"""
    value: str
    category: SuggestionCategory


@dataclass
class PatientInfo:
    """Patient fields typed into the form"""
    name: str
    age: str
    gender: str
    symptoms: str
    past_history: str = ""


Quantity = Union[int, str]  # "" when not chosen yet


@dataclass
class TimeSlotDosage:
    """Dosage for one time of day"""
    active: bool = False
    meal: str = ""  # "before" | "after" | ""
    quantity: Quantity = ""

    def to_dict(self) -> dict:
        return {"active": self.active, "meal": self.meal, "quantity": self.quantity}


@dataclass
class SlotDosage:
    """Tablet-like and syrup-like forms: morning / afternoon / evening"""
    morning: TimeSlotDosage = field(default_factory=TimeSlotDosage)
    afternoon: TimeSlotDosage = field(default_factory=TimeSlotDosage)
    evening: TimeSlotDosage = field(default_factory=TimeSlotDosage)

    def slot(self, name: str) -> TimeSlotDosage:
        return getattr(self, name)

    def to_dict(self) -> dict:
        return {
            "morning": self.morning.to_dict(),
            "afternoon": self.afternoon.to_dict(),
            "evening": self.evening.to_dict(),
        }


@dataclass
class InstructionDosage:
    """Every other form: a single free-text instruction"""
    instruction: str = ""

    def to_dict(self) -> dict:
        return {"instruction": self.instruction}


Dosage = Union[SlotDosage, InstructionDosage]


@dataclass
class Duration:
    number: int = 1
    unit: str = "days"

    def to_dict(self) -> dict:
        return {"number": self.number, "unit": self.unit}


@dataclass
class MedicationRecord:
    """
    One prescription table row.
    The dosage shape always follows `type`; MedicationTableModel enforces that.
    """
    id: str
    name: str
    type: str
    dosage: Dosage
    duration: Duration = field(default_factory=Duration)
    instruction: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "dosage": self.dosage.to_dict(),
            "duration": self.duration.to_dict(),
            "instruction": self.instruction,
        }
