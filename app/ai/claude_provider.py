"""Pipeboard — Anthropic Claude Provider."""

from typing import Optional
from anthropic import AsyncAnthropic

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.errors import InsightServiceError
from app.core.logging import get_logger

logger = get_logger("ai.claude")

SYSTEM_PROMPT = (
    "Você é um analista de performance comercial. Use apenas os números "
    "fornecidos, não invente dados e responda em português."
)


class ClaudeProvider(AIProvider):
    """Anthropic Claude provider for narrative generation."""

    name = "claude"

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or settings.anthropic_api_key
        self.client = AsyncAnthropic(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None and bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.is_available():
            raise InsightServiceError("Claude provider not configured", self.name)

        try:
            response = await self.client.messages.create(
                model="claude-sonnet-4-20250514",
                max_tokens=1000,
                system=SYSTEM_PROMPT,
                messages=[
                    {"role": "user", "content": prompt},
                ],
            )
            return response.content[0].text if response.content else ""
        except Exception as e:
            logger.error(f"Claude generation failed: {e}", extra={"provider": self.name})
            raise InsightServiceError(str(e), self.name) from e
