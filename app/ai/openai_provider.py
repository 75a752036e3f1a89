"""Pipeboard — OpenAI Provider."""

from typing import Optional
from openai import AsyncOpenAI

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.errors import InsightServiceError
from app.core.logging import get_logger

logger = get_logger("ai.openai")

SYSTEM_PROMPT = (
    "You are a sales performance analyst. Use only the numbers provided, "
    "never invent data, and answer in Portuguese with short bullet points."
)


class OpenAIProvider(AIProvider):
    """OpenAI chat-completions provider (model: gpt-4o-mini)."""

    name = "openai"

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or settings.openai_api_key
        self.client = AsyncOpenAI(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None and bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.is_available():
            raise InsightServiceError("OpenAI provider not configured", self.name)

        try:
            response = await self.client.chat.completions.create(
                model="gpt-4o-mini",
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
                max_tokens=1000,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"OpenAI generation failed: {e}", extra={"provider": self.name})
            raise InsightServiceError(str(e), self.name) from e
