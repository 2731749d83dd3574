from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from app.application.shaping import ShapedPrompt
from app.infra.ports.llm import LLMTimeoutError, TutorLLMPort

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer"


class TeachingService:
    """Runs shaped prompts against the provider under a per-call deadline."""

    def __init__(self, *, llm: TutorLLMPort, model: str | None = None, timeout_seconds: float = 60.0):
        self.llm = llm
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def answer(self, prompt: ShapedPrompt) -> str:
        try:
            text = await asyncio.wait_for(
                self.llm.generate_text(
                    system_prompt=prompt.directive,
                    contents=prompt.contents,
                    model=self.model,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise LLMTimeoutError(f"Provider did not answer within {self.timeout_seconds:g}s") from exc
        return text or NO_ANSWER

    async def stream(self, prompt: ShapedPrompt) -> AsyncIterator[str]:
        """Yield non-empty deltas in provider order.

        The deadline covers the whole call; a stall between chunks counts against it.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds
        chunks = self.llm.stream_text(
            system_prompt=prompt.directive,
            contents=prompt.contents,
            model=self.model,
        ).__aiter__()
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise LLMTimeoutError(f"Provider stream exceeded {self.timeout_seconds:g}s")
                try:
                    chunk = await asyncio.wait_for(chunks.__anext__(), timeout=remaining)
                except StopAsyncIteration:
                    return
                except asyncio.TimeoutError as exc:
                    raise LLMTimeoutError(f"Provider stream exceeded {self.timeout_seconds:g}s") from exc
                if chunk:
                    yield chunk
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
