"""In-memory transcript for one tutoring session, driving the relay over HTTP.

Each submit appends the user's turn, calls the relay with the most recent
turns as history and splices the answer (or an apology) back in. A submit
made while an earlier call is still pending cancels that call; the cancelled
call never adds an answer, so answers cannot land out of order.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Iterator
from dataclasses import asdict, dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

GREETING = "Hi! I'm your AI teacher. What topic should we learn today?"
APOLOGY = "Sorry, something went wrong."
HISTORY_LIMIT = 12


class RelayError(RuntimeError):
    """The relay answered with an error or an incomplete stream."""


@dataclass
class ChatTurn:
    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def decode_sse_line(line: str) -> dict[str, Any] | None:
    line = line.strip()
    if not line.startswith("data:"):
        return None
    data = line[len("data:"):].strip()
    if not data:
        return None
    event = json.loads(data)
    return event if isinstance(event, dict) else None


def parse_sse_lines(lines: Iterable[str]) -> Iterator[dict[str, Any]]:
    for line in lines:
        event = decode_sse_line(line)
        if event is not None:
            yield event


async def iter_sse_events(response: httpx.Response) -> AsyncIterator[dict[str, Any]]:
    async for line in response.aiter_lines():
        event = decode_sse_line(line)
        if event is not None:
            yield event


class TranscriptController:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        topic: str = "",
        level: str = "beginner",
        style: str = "simple",
        on_change: Callable[[list[ChatTurn]], None] | None = None,
    ):
        self.http = http
        self.topic = topic
        self.level = level
        self.style = style
        self.on_change = on_change
        self.messages: list[ChatTurn] = [ChatTurn(role="assistant", content=GREETING)]
        self._pending: asyncio.Task | None = None

    @property
    def busy(self) -> bool:
        return self._pending is not None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(list(self.messages))

    def _payload(self, text: str) -> dict[str, Any]:
        return {
            "topic": self.topic or text,
            "level": self.level,
            "style": self.style,
            "question": text,
            "history": [turn.to_dict() for turn in self.messages[-HISTORY_LIMIT:]],
        }

    def cancel_pending(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            logger.info("Cancelling superseded relay call")
            task.cancel()

    async def submit(self, text: str) -> ChatTurn | None:
        """Ask the atomic endpoint. Returns the spliced assistant turn, or None if skipped or superseded."""
        return await self._ask(text, self._fetch_answer)

    async def stream(self, text: str, on_delta: Callable[[str], None] | None = None) -> ChatTurn | None:
        """Ask the streaming endpoint, reporting each delta as it arrives."""

        async def fetch(payload: dict[str, Any]) -> str:
            return await self._fetch_stream(payload, on_delta)

        return await self._ask(text, fetch)

    async def teach_me(self) -> ChatTurn | None:
        return await self.submit(f"Explain {self.topic or 'any topic'} in simple terms")

    async def _ask(self, text: str, fetch: Callable[[dict[str, Any]], Awaitable[str]]) -> ChatTurn | None:
        if not text.strip():
            return None

        self.cancel_pending()
        self.messages.append(ChatTurn(role="user", content=text))
        task = asyncio.ensure_future(fetch(self._payload(text)))
        self._pending = task
        self._notify()

        try:
            answer = await task
            reply = ChatTurn(role="assistant", content=answer)
        except asyncio.CancelledError:
            if self._pending is not task:
                return None
            raise
        except Exception:
            logger.exception("Relay call failed")
            reply = ChatTurn(role="assistant", content=APOLOGY)
        finally:
            if self._pending is task:
                self._pending = None

        self.messages.append(reply)
        self._notify()
        return reply

    async def _fetch_answer(self, payload: dict[str, Any]) -> str:
        resp = await self.http.post("/api/teach", json=payload)
        resp.raise_for_status()
        answer = resp.json().get("answer")
        if not isinstance(answer, str):
            raise RelayError("Relay response has no answer")
        return answer

    async def _fetch_stream(self, payload: dict[str, Any], on_delta: Callable[[str], None] | None) -> str:
        parts: list[str] = []
        async with self.http.stream("POST", "/api/teach/stream", json=payload) as resp:
            resp.raise_for_status()
            async for event in iter_sse_events(resp):
                if "delta" in event:
                    delta = str(event["delta"])
                    parts.append(delta)
                    if on_delta is not None:
                        on_delta(delta)
                elif event.get("done"):
                    return "".join(parts)
                elif "error" in event:
                    raise RelayError(str(event["error"]))
        raise RelayError("Relay stream ended without a terminal event")
