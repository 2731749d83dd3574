from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Literal

ProviderRole = Literal["user", "model"]


@dataclass(frozen=True)
class ProviderTurn:
    role: ProviderRole
    text: str


class LLMError(RuntimeError):
    """Provider call failed (network, auth, quota, model)."""


class LLMTimeoutError(LLMError):
    """Provider call did not finish before its deadline."""


class TutorLLMPort(ABC):
    provider_name: str = "unknown"
    model_name: str = "unknown"

    @abstractmethod
    async def generate_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> str | None:
        """Return the complete answer text, or None when the provider returned no text."""

    @abstractmethod
    def stream_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> AsyncIterator[str | None]:
        """Yield answer fragments in provider order. Fragments may be empty."""
