from __future__ import annotations

from collections.abc import AsyncIterator

from app.infra.ports.llm import ProviderTurn, TutorLLMPort


class MockTutorLLM(TutorLLMPort):
    provider_name = "mock"
    model_name = "mock-tutor-v1"

    def _answer(self, *, system_prompt: str, contents: list[ProviderTurn]) -> str:
        opening = contents[0].text if contents else ""
        return (
            f"[{self.model_name}] {opening}\n\n"
            f"- context turns: {len(contents)}\n"
            f"- directive: {system_prompt[:80]}"
        )

    async def generate_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> str | None:
        return self._answer(system_prompt=system_prompt, contents=contents)

    async def stream_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> AsyncIterator[str | None]:
        for line in self._answer(system_prompt=system_prompt, contents=contents).splitlines(keepends=True):
            yield line
