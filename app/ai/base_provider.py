"""Pipeboard — Abstract AI Provider."""

from abc import ABC, abstractmethod


class AIProvider(ABC):
    """Abstract base for narrative generation.

    Providers take a fully formatted prompt and return plain text. The
    dashboard works without AI; callers substitute a fallback on failure.
    """

    name: str = ""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send a single prompt and return the generated text.

        Raises:
            InsightServiceError: provider not configured or the call failed.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is configured and ready."""
        ...
