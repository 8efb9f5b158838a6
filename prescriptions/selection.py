"""
Selected chips per category (findings, lab tests).

The store is the only source of truth for chips. It does not know about the
"selected" flag of the suggestion a chip came from; callers mirror that flag
from the booleans returned here.
"""
from typing import Dict, List, Optional

from .types import CHIP_CATEGORIES, SelectionEntry, SuggestionCategory


def selection_key(value: str) -> str:
    """Chips compare case-insensitively, like medication rows"""
    return value.strip().casefold()


class SelectionStateStore:

    def __init__(self):
        # insertion order is the chip order and the serialized order
        self._entries: Dict[SuggestionCategory, List[SelectionEntry]] = {
            category: [] for category in CHIP_CATEGORIES
        }

    def _bucket(self, category) -> List[SelectionEntry]:
        category = SuggestionCategory(category)
        if category not in self._entries:
            raise ValueError(f"{category.value} suggestions are not selected as chips")
        return self._entries[category]

    def _find(self, value: str, category) -> Optional[int]:
        key = selection_key(value)
        for i, entry in enumerate(self._bucket(category)):
            if selection_key(entry.value) == key:
                return i
        return None

    def contains(self, value: str, category) -> bool:
        return self._find(value, category) is not None

    def add(self, value: str, category) -> bool:
        """Add unless already present; True if a chip was created"""
        value = value.strip()
        if not value or self.contains(value, category):
            return False
        self._bucket(category).append(SelectionEntry(value=value, category=SuggestionCategory(category)))
        return True

    def remove(self, value: str, category) -> bool:
        """Remove if present; True if a chip was destroyed"""
        index = self._find(value, category)
        if index is None:
            return False
        del self._bucket(category)[index]
        return True

    def toggle(self, value: str, category) -> bool:
        """Flip membership and return the resulting membership"""
        if self.remove(value, category):
            return False
        return self.add(value, category)

    def remove_last(self, category) -> Optional[SelectionEntry]:
        """Backspace on an empty input drops the most recent chip"""
        bucket = self._bucket(category)
        if not bucket:
            return None
        return bucket.pop()

    def entries(self, category) -> List[SelectionEntry]:
        return list(self._bucket(category))

    def values(self, category) -> List[str]:
        return [entry.value for entry in self._bucket(category)]

    def serialize(self, category) -> str:
        """Comma-joined values: the hidden form field"""
        return ",".join(self.values(category))
