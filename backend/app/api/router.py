from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from app.api.dependencies import provide_teaching_service
from app.api.schemas.teach import ErrorResponse, TeachRequest, TeachResponse
from app.api.sse import SSE_HEADERS, delta_event, done_event, error_event
from app.application.shaping import ShapedPrompt, shape_request
from app.application.teaching import TeachingService
from app.infra.ports.llm import LLMTimeoutError

logger = logging.getLogger(__name__)

GENAI_ERROR = "GenAI error"
GENAI_TIMEOUT = "GenAI timeout"
GENAI_STREAM_ERROR = "GenAI stream error"
GENAI_STREAM_TIMEOUT = "GenAI stream timeout"

router = APIRouter(prefix="/api", tags=["teach"])


@router.post(
    "/teach",
    response_model=TeachResponse,
    responses={500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def teach(body: TeachRequest, service: TeachingService = Depends(provide_teaching_service)):
    prompt = shape_request(body)
    try:
        answer = await service.answer(prompt)
    except LLMTimeoutError:
        logger.warning("Teach request timed out after %ss", service.timeout_seconds)
        return JSONResponse(status_code=504, content={"error": GENAI_TIMEOUT})
    except Exception:
        logger.exception("Teach request failed")
        return JSONResponse(status_code=500, content={"error": GENAI_ERROR})
    return TeachResponse(answer=answer)


async def _relay_events(service: TeachingService, prompt: ShapedPrompt) -> AsyncIterator[str]:
    # Exactly one terminal event (done or error) is written, always last.
    try:
        async for delta in service.stream(prompt):
            yield delta_event(delta)
    except LLMTimeoutError:
        logger.warning("Teach stream timed out after %ss", service.timeout_seconds)
        yield error_event(GENAI_STREAM_TIMEOUT)
        return
    except Exception:
        logger.exception("Teach stream failed")
        yield error_event(GENAI_STREAM_ERROR)
        return
    yield done_event()


@router.post("/teach/stream", response_class=StreamingResponse)
async def teach_stream(body: TeachRequest, service: TeachingService = Depends(provide_teaching_service)):
    return StreamingResponse(
        _relay_events(service, shape_request(body)),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
