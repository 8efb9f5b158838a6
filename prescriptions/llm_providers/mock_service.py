"""
Mock implementation: fixed answer in the suggestion format, no network
"""
from .base import BaseLLMService

MOCK_SUGGESTIONS_TEXT = """Findings:
- Common Cold
- Viral Pharyngitis
Medications:
- **Paracetamol**: [Mock] Relieves pain and reduces fever.
- **Cetirizine**: [Mock] Antihistamine that eases a runny nose and sneezing.
Lab Tests:
- **CBC**: [Mock] Complete blood count to check for signs of infection.
"""


class MockLLMService(BaseLLMService):
    """Always returns MOCK_SUGGESTIONS_TEXT"""

    provider_id = "mock"

    def generate(
        self,
        system_message: str,
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        return MOCK_SUGGESTIONS_TEXT
