import asyncio

import pytest

from app.ai import insights
from app.ai.insights import (
    EMPTY_ANSWER_MESSAGE,
    FALLBACK_MESSAGE,
    generate_sales_insights,
    select_provider,
)
from app.config import settings
from app.core.errors import InsightServiceError

from conftest import FailingProvider, FakeProvider


class SlowProvider(FakeProvider):
    async def generate(self, prompt: str) -> str:
        await asyncio.sleep(5)
        return "late"


class TestGenerateSalesInsights:
    def test_returns_provider_text(self, make_sale, targets):
        provider = FakeProvider(reply="  Para bater a meta, você precisa de 29 vendas.  ")
        text = asyncio.run(generate_sales_insights([make_sale()], targets, provider))

        assert text == "Para bater a meta, você precisa de 29 vendas."
        assert "Oportunidades Recebidas" in provider.prompts[0]

    def test_failure_falls_back(self, make_sale, targets):
        text = asyncio.run(generate_sales_insights([make_sale()], targets, FailingProvider()))
        assert text == FALLBACK_MESSAGE

    def test_unexpected_error_falls_back(self, make_sale, targets):
        provider = FakeProvider(error=ConnectionError("reset by peer"))
        text = asyncio.run(generate_sales_insights([make_sale()], targets, provider))
        assert text == FALLBACK_MESSAGE

    def test_timeout_falls_back(self, targets):
        text = asyncio.run(generate_sales_insights([], targets, SlowProvider(), timeout=0.05))
        assert text == FALLBACK_MESSAGE

    def test_empty_answer(self, targets):
        text = asyncio.run(generate_sales_insights([], targets, FakeProvider(reply="")))
        assert text == EMPTY_ANSWER_MESSAGE

    def test_no_provider(self, targets):
        assert asyncio.run(generate_sales_insights([], targets, None)) == FALLBACK_MESSAGE


class TestSelectProvider:
    @pytest.fixture(autouse=True)
    def no_keys(self, monkeypatch):
        monkeypatch.setattr(settings, "sarvam_api_key", None)
        monkeypatch.setattr(settings, "openai_api_key", None)
        monkeypatch.setattr(settings, "anthropic_api_key", None)

    def test_auto_without_keys(self):
        with pytest.raises(InsightServiceError):
            select_provider("auto")

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            select_provider("gemini")

    def test_named_but_unconfigured(self):
        with pytest.raises(InsightServiceError):
            select_provider("claude")

    def test_auto_prefers_default(self, monkeypatch):
        monkeypatch.setattr(
            insights, "PROVIDERS", {"sarvam": FakeProvider, "openai": FakeProvider}
        )
        monkeypatch.setattr(settings, "default_ai_provider", "openai")
        name, provider = select_provider("auto")
        assert name == "openai"
        assert isinstance(provider, FakeProvider)
