"""
AI answer text -> ordered list of Suggestion.

Expected shape (loosely followed by the model):

    Findings:
    - Common Cold
    Medications:
    - **Paracetamol**: reduces fever
    Lab Tests:
    - **CBC**: checks infection

Nothing here raises on bad input: an unrecognised line is skipped and an item
without bold markers falls back to a first-colon split.
"""
import re
from typing import Dict, List, Optional

from .types import Suggestion, SuggestionCategory

SECTION_HEADERS = (
    ("Findings:", SuggestionCategory.FINDING),
    ("Medications:", SuggestionCategory.MEDICATION),
    ("Lab Tests:", SuggestionCategory.LAB_TEST),
)

ITEM_MARKER = "- "

# **name** [:] description
_BOLD_ITEM = re.compile(r"\*\*(.*?)\*\*(?::)?\s*(.*)")


def _section_for(line: str) -> Optional[SuggestionCategory]:
    for header, category in SECTION_HEADERS:
        if line.startswith(header):
            return category
    return None


def _split_item(content: str):
    """Return (name, description) for one item line without its marker"""
    match = _BOLD_ITEM.search(content)
    if match and match.group(1):
        name = match.group(1).strip()
        description = (match.group(2) or "").strip()
    else:
        name, _, description = content.partition(":")
        name = name.strip()
        description = description.strip()

    name = name.replace("*", "").strip()
    if name.endswith(":"):
        name = name[:-1].strip()
    return name, description


def parse_item(content: str, category: SuggestionCategory) -> Suggestion:
    name, description = _split_item(content)
    if category is SuggestionCategory.FINDING:
        display_text = content
    else:
        display_text = f"{name}: {description}"
    return Suggestion(
        category=category,
        name=name,
        description=description,
        display_text=display_text,
    )


def parse_suggestions(raw_text: str) -> List[Suggestion]:
    """Parse the whole answer; output order follows input line order"""
    suggestions = []
    current = None
    if not isinstance(raw_text, str):
        return suggestions
    lines = [line.strip() for line in raw_text.split("\n")]
    for line in lines:
        if not line:
            continue
        section = _section_for(line)
        if section is not None:
            current = section
            continue
        if current is None or not line.startswith(ITEM_MARKER):
            continue
        content = line[len(ITEM_MARKER):].strip()
        suggestions.append(parse_item(content, current))
    return suggestions


def group_by_category(suggestions: List[Suggestion]) -> Dict[SuggestionCategory, List[Suggestion]]:
    """Split into the three regions, each keeping parse order"""
    grouped = {category: [] for _, category in SECTION_HEADERS}
    for suggestion in suggestions:
        grouped[suggestion.category].append(suggestion)
    return grouped
