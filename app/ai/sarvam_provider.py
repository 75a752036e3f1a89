"""Pipeboard — Sarvam AI Provider."""

from typing import Optional
from sarvamai import AsyncSarvamAI

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.errors import InsightServiceError
from app.core.logging import get_logger

logger = get_logger("ai.sarvam")

# ── Numbers-only analyst prompt ──
SYSTEM_PROMPT = """You are a sales performance analyst for a small sales team.

RULES:
1. Use ONLY the numbers present in the user message. Do NOT invent data.
2. Keep currency as given (R$). Do NOT convert.
3. Answer in Portuguese, in short bullet points.
4. Lead with the number of sales still needed to hit the target.
"""


class SarvamProvider(AIProvider):
    """Sarvam AI provider for narrative generation (model: sarvam-m)."""

    name = "sarvam"

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or settings.sarvam_api_key
        self.client = (
            AsyncSarvamAI(api_subscription_key=self.api_key) if self.api_key else None
        )

    def is_available(self) -> bool:
        return self.client is not None and bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.is_available():
            raise InsightServiceError("Sarvam provider not configured", self.name)

        try:
            response = await self.client.chat.completions(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
                max_tokens=1000,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"Sarvam generation failed: {e}", extra={"provider": self.name})
            raise InsightServiceError(str(e), self.name) from e
