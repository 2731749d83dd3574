from __future__ import annotations

import json
from typing import Any

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def encode_event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False, separators=(',', ':'))}\n\n"


def delta_event(text: str) -> str:
    return encode_event({"delta": text})


def done_event() -> str:
    return encode_event({"done": True})


def error_event(message: str) -> str:
    return encode_event({"error": message})
