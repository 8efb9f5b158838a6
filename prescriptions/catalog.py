"""
Medication catalog: form types and the known-name pool from medications.csv
"""
from pathlib import Path
from typing import List

from loguru import logger

# Order matters: the first entry is the default type of a new row
MEDICATION_TYPES = [
    "Tablet", "Capsule", "Powder", "Lozenges", "Mixtures", "Lotion", "Drops",
    "Ointment", "Cream", "Inhaler", "Syrup", "Injection", "Oral Gel",
    "Oral Hygiene", "Insulin", "Soap", "Shampoo", "Gel", "Serum", "Solution",
]

TABLET_LIKE_TYPES = ("Tablet", "Capsule", "Lozenges")
SYRUP_LIKE_TYPES = ("Mixtures", "Syrup")

TIME_SLOTS = ("morning", "afternoon", "evening")
MEAL_OPTIONS = ("before", "after", "")
TABLET_QUANTITIES = (1, 2, 3, 4, 5)
SYRUP_ML_OPTIONS = (5, 10, 15)
DURATION_NUMBERS = tuple(range(1, 16))
DURATION_UNITS = ("days", "weeks", "months")


def is_tablet_like(med_type: str) -> bool:
    return med_type in TABLET_LIKE_TYPES


def is_syrup_like(med_type: str) -> bool:
    return med_type in SYRUP_LIKE_TYPES


def uses_time_slots(med_type: str) -> bool:
    """Tablet-like and syrup-like forms are dosed per time of day"""
    return is_tablet_like(med_type) or is_syrup_like(med_type)


def parse_medication_names(text: str) -> List[str]:
    """
    One name per line; blank lines and // comments are dropped
    """
    names = []
    for line in text.split("\n"):
        line = line.strip()
        if line and not line.startswith("//"):
            names.append(line)
    return names


def load_medication_names(path) -> List[str]:
    """
    Read the catalog file. A missing or unreadable file leaves the pool empty:
    autocomplete degrades, nothing else breaks.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading medications CSV {}: {}", path, e)
        return []
    names = parse_medication_names(text)
    logger.info("Medications loaded from CSV: {} items", len(names))
    return names
