from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence

from app.infra.ports.llm import ProviderTurn, TutorLLMPort


class FakeTutorLLM(TutorLLMPort):
    provider_name = "fake"
    model_name = "fake-tutor"

    def __init__(
        self,
        *,
        answer: str | None = "ok",
        chunks: Sequence[str | None] = (),
        error: Exception | None = None,
        fail_after: int | None = None,
        delay: float = 0.0,
    ):
        self.answer = answer
        self.chunks = list(chunks)
        self.error = error
        self.fail_after = fail_after
        self.delay = delay
        self.calls: list[dict] = []

    def _record(self, kind: str, system_prompt: str, contents: list[ProviderTurn], model: str | None) -> None:
        self.calls.append({"kind": kind, "system_prompt": system_prompt, "contents": list(contents), "model": model})

    async def generate_text(self, *, system_prompt, contents, model=None):
        self._record("generate", system_prompt, contents, model)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.answer

    async def stream_text(self, *, system_prompt, contents, model=None) -> AsyncIterator[str | None]:
        self._record("stream", system_prompt, contents, model)
        for index, chunk in enumerate(self.chunks):
            if self.error is not None and self.fail_after == index:
                raise self.error
            if self.delay:
                await asyncio.sleep(self.delay)
            yield chunk
        if self.error is not None and (self.fail_after is None or self.fail_after >= len(self.chunks)):
            raise self.error
