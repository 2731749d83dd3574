from __future__ import annotations

import logging
from functools import lru_cache

from app.application.teaching import TeachingService
from app.core.config import get_settings
from app.infra.llm.gemini import GeminiTutorLLM
from app.infra.llm.mock import MockTutorLLM
from app.infra.ports.llm import TutorLLMPort

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_llm() -> TutorLLMPort:
    settings = get_settings()
    if settings.llm_backend == "mock":
        return MockTutorLLM()
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set; provider calls will fail until it is configured")
    return GeminiTutorLLM(api_key=settings.google_api_key, model_name=settings.model_id)


def get_teaching_service() -> TeachingService:
    settings = get_settings()
    return TeachingService(
        llm=get_llm(),
        model=settings.model_id if settings.llm_backend != "mock" else None,
        timeout_seconds=settings.llm_timeout_seconds,
    )


async def provide_teaching_service() -> TeachingService:
    return get_teaching_service()
