from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

TeachLevel = Literal["beginner", "intermediate", "advanced"]
TeachStyle = Literal["simple", "exam", "with-examples"]

DEFAULT_LEVEL: TeachLevel = "beginner"
DEFAULT_STYLE: TeachStyle = "simple"


class Turn(BaseModel):
    # Any role value is accepted; the shaper maps everything but "assistant" to the human side.
    role: str = "user"
    content: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> str:
        return value if isinstance(value, str) else "user"

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class TeachRequest(BaseModel):
    topic: str | None = None
    level: TeachLevel = DEFAULT_LEVEL
    style: TeachStyle = DEFAULT_STYLE
    question: str | None = None
    history: list[Turn] = Field(default_factory=list)

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, value: Any) -> Any:
        return DEFAULT_LEVEL if value is None or value == "" else value

    @field_validator("style", mode="before")
    @classmethod
    def _default_style(cls, value: Any) -> Any:
        return DEFAULT_STYLE if value is None or value == "" else value

    @field_validator("history", mode="before")
    @classmethod
    def _default_history(cls, value: Any) -> Any:
        return [] if value is None else value


class TeachResponse(BaseModel):
    answer: str


class ErrorResponse(BaseModel):
    error: str
    details: list[dict[str, Any]] | None = None
