"""
Autocomplete: filtering plus the keyboard navigation state of one input.

The candidate pool is a callable evaluated on every keystroke, so a chip input
always matches against the suggestions rendered right now.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

MED_NAME_LIMIT = 10
CHIP_LIMIT = 5

NO_HIGHLIGHT = -1


def query(pool: Sequence[str], text: str, limit: int) -> List[str]:
    """Case-insensitive substring match, pool order kept, at most `limit`"""
    needle = (text or "").strip().lower()
    if not needle:
        return []
    matches = [candidate for candidate in pool if needle in candidate.lower()]
    return matches[:limit]


@dataclass
class Commit:
    """What a commit handed to the selection callback"""
    value: str
    free_text: bool


class AutocompleteController:
    """
    Closed, or Open with a highlight index (-1 = nothing highlighted).

    `text` is what the input shows; arrow keys mirror the highlighted result
    into it without committing. Commits call `on_select`, clear the text and
    close the dropdown. Picking a result keeps focus on the input; committing
    free text with Enter blurs it.
    """

    def __init__(self, pool: Callable[[], Sequence[str]], on_select: Callable[[str], None], limit: int = MED_NAME_LIMIT):
        self._pool = pool
        self._on_select = on_select
        self.limit = limit
        self.text = ""
        self.results: List[str] = []
        self.index = NO_HIGHLIGHT
        self.is_open = False
        self.focused = False

    def focus(self):
        self.focused = True

    def close(self):
        self.results = []
        self.index = NO_HIGHLIGHT
        self.is_open = False

    def type_text(self, text: str):
        """The input value changed: recompute matches against a fresh pool"""
        self.focused = True
        self.text = text
        self.results = query(self._pool(), text, self.limit)
        self.index = NO_HIGHLIGHT
        self.is_open = bool(self.results)

    def press(self, key: str) -> Optional[Commit]:
        """Handle one key; returns the Commit when the key committed a value"""
        if key in ("ArrowDown", "ArrowUp"):
            self._move(1 if key == "ArrowDown" else -1)
            return None
        if key == "Enter":
            return self._enter()
        if key == "Escape":
            self.close()
        return None

    def _move(self, step: int):
        if not self.is_open or not self.results:
            return
        if self.index == NO_HIGHLIGHT and step < 0:
            self.index = len(self.results) - 1
        else:
            self.index = (self.index + step) % len(self.results)
        self.text = self.results[self.index]

    def _enter(self) -> Optional[Commit]:
        if self.is_open and 0 <= self.index < len(self.results):
            return self.click(self.index)
        typed = self.text.strip()
        if not typed:
            return None
        self._commit(typed)
        self.focused = False
        return Commit(value=typed, free_text=True)

    def click(self, index: int) -> Commit:
        """Pick a result from the open dropdown"""
        value = self.results[index]
        self._commit(value)
        self.focused = True
        return Commit(value=value, free_text=False)

    def click_outside(self):
        self.close()

    def _commit(self, value: str):
        self._on_select(value)
        self.text = ""
        self.close()

    @property
    def highlighted(self) -> Optional[str]:
        if self.index == NO_HIGHLIGHT:
            return None
        return self.results[self.index]
