"""Turn a teaching request into the provider's directive + ordered turns.

Both relay endpoints go through :func:`shape_request`, so the directive always
reflects the request's ``level`` and ``style``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from app.infra.ports.llm import ProviderRole, ProviderTurn

HISTORY_LIMIT = 12

DEFAULT_TOPIC = "general learning"
DEFAULT_QUESTION = "teach this topic simply."

_PERSONA = (
    "You are a patient, friendly teacher for a computer science student.",
    "Always explain in simple language first, then go step by step.",
    "Use short sections, bullet points, and a tiny example.",
    "End with a 3-question mini-quiz (with answers).",
)
_CODE_GUIDANCE = "If the user asks for code, provide idiomatic, commented code."


class TurnLike(Protocol):
    role: str
    content: str


@dataclass(frozen=True)
class ShapedPrompt:
    directive: str
    contents: list[ProviderTurn]


def _clean(value: str | None) -> str:
    return (value or "").strip()


def build_directive(level: str, style: str) -> str:
    return " ".join((*_PERSONA, f"Target level: {level}. Style: {style}.", _CODE_GUIDANCE))


def map_role(role: str | None) -> ProviderRole:
    return "model" if role == "assistant" else "user"


def bound_history(history: Iterable[TurnLike], limit: int = HISTORY_LIMIT) -> list[TurnLike]:
    items = list(history)
    if limit <= 0:
        return []
    return items[-limit:]


def build_opening_line(topic: str | None, question: str | None) -> str:
    effective_question = _clean(question)
    effective_topic = _clean(topic) or effective_question or DEFAULT_TOPIC
    return f"Topic: {effective_topic}. Question: {effective_question or DEFAULT_QUESTION}"


def build_contents(
    *,
    topic: str | None,
    question: str | None,
    history: Iterable[TurnLike],
) -> list[ProviderTurn]:
    contents = [ProviderTurn(role="user", text=build_opening_line(topic, question))]
    for turn in bound_history(history):
        contents.append(ProviderTurn(role=map_role(turn.role), text=turn.content or ""))
    return contents


def shape_request(request) -> ShapedPrompt:
    """Shape a decoded ``TeachRequest`` (or anything with the same attributes)."""
    return ShapedPrompt(
        directive=build_directive(request.level, request.style),
        contents=build_contents(
            topic=request.topic,
            question=request.question,
            history=request.history,
        ),
    )
