from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.infra.ports.llm import LLMError, ProviderTurn, TutorLLMPort

logger = logging.getLogger(__name__)


def _to_gemini_contents(contents: list[ProviderTurn]) -> list[types.Content]:
    return [types.Content(role=turn.role, parts=[types.Part(text=turn.text)]) for turn in contents]


class GeminiTutorLLM(TutorLLMPort):
    provider_name = "gemini"

    def __init__(self, *, api_key: str | None, model_name: str):
        self.model_name = model_name
        self._api_key = api_key
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        # Built lazily so a missing key surfaces as a failed call, not a failed startup.
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self._api_key)
            except ValueError as exc:
                raise LLMError(f"Gemini client could not be created: {exc}") from exc
        return self._client

    def _config(self, system_prompt: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(system_instruction=system_prompt)

    async def generate_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> str | None:
        model_name = model or self.model_name
        try:
            response = await self.client.aio.models.generate_content(
                model=model_name,
                contents=_to_gemini_contents(contents),
                config=self._config(system_prompt),
            )
        except genai_errors.APIError as exc:
            raise LLMError(f"Gemini API error ({exc.code}): {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise LLMError(f"Gemini API connection error: {exc}") from exc

        logger.info("Gemini answer received (model=%s, turns=%d)", model_name, len(contents))
        return response.text

    async def stream_text(
        self,
        *,
        system_prompt: str,
        contents: list[ProviderTurn],
        model: str | None = None,
    ) -> AsyncIterator[str | None]:
        model_name = model or self.model_name
        try:
            stream = await self.client.aio.models.generate_content_stream(
                model=model_name,
                contents=_to_gemini_contents(contents),
                config=self._config(system_prompt),
            )
            async for chunk in stream:
                yield chunk.text
        except genai_errors.APIError as exc:
            raise LLMError(f"Gemini API stream error ({exc.code}): {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise LLMError(f"Gemini API stream connection error: {exc}") from exc
