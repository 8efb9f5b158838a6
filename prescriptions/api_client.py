"""
HTTP client for the suggestion endpoint and the medication catalog.

One attempt per call, no timeout unless one is configured. Failures surface
as SuggestionFetchError carrying the text the form shows to the user.
"""
from typing import List, Optional

import requests
from loguru import logger

from .catalog import parse_medication_names

SUGGESTIONS_PATH = "/api/get-ai-suggestions"
MEDICATIONS_PATH = "/medications.csv"


class SuggestionFetchError(Exception):
    """The suggestion request failed; str(e) is the user-facing message"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


def _error_from_body(response: requests.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return None


class SuggestionsApiClient:

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_ai_suggestions(self, prompt: str) -> str:
        """POST the prompt, return the raw AI text"""
        try:
            response = self.session.post(
                self.base_url + SUGGESTIONS_PATH,
                json={"prompt": prompt},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SuggestionFetchError(str(e))

        if not response.ok:
            message = _error_from_body(response) or f"HTTP error! status: {response.status_code}"
            raise SuggestionFetchError(message, status=response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise SuggestionFetchError("Invalid JSON in AI suggestions response", status=response.status_code)
        if not isinstance(data, dict):
            raise SuggestionFetchError("Invalid AI suggestions response", status=response.status_code)
        if data.get("error"):
            raise SuggestionFetchError(str(data["error"]), status=response.status_code)
        ai_text = data.get("aiText")
        if ai_text is None:
            return ""
        if not isinstance(ai_text, str):
            raise SuggestionFetchError("Invalid AI suggestions response", status=response.status_code)
        return ai_text

    def get_medication_names(self) -> List[str]:
        """Fetch the catalog; any failure leaves the pool empty"""
        try:
            response = self.session.get(self.base_url + MEDICATIONS_PATH, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Error loading medications CSV: {}", e)
            return []
        names = parse_medication_names(response.text)
        logger.info("Medications loaded from server: {} items", len(names))
        return names
