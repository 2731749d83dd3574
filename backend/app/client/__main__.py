from __future__ import annotations

import argparse
import asyncio
import sys

import httpx

from app.client.transcript import APOLOGY, ChatTurn, TranscriptController
from app.core.config import get_settings
from app.core.logging import configure_logging

_HELP = "Commands: /teach (lesson on the current topic), /topic <text>, /quit"


def _parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Terminal chat against the AI teacher relay.")
    parser.add_argument("--base-url", default=settings.api_base)
    parser.add_argument("--topic", default="")
    parser.add_argument("--level", choices=["beginner", "intermediate", "advanced"], default="beginner")
    parser.add_argument("--style", choices=["simple", "exam", "with-examples"], default="simple")
    parser.add_argument("--stream", action="store_true", help="use the streaming endpoint")
    return parser.parse_args()


def _print_turn(turn: ChatTurn) -> None:
    label = "you" if turn.role == "user" else "teacher"
    print(f"\n[{label}]\n{turn.content}\n")


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    timeout = httpx.Timeout(settings.llm_timeout_seconds + 10.0)
    async with httpx.AsyncClient(base_url=args.base_url, timeout=timeout) as http:
        controller = TranscriptController(http=http, topic=args.topic, level=args.level, style=args.style)
        print(f"Lesson: {controller.topic or '-'}  Mode: {controller.level} · {controller.style}")
        print(_HELP)
        _print_turn(controller.messages[0])

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                return 0

            text = line.strip()
            if not text:
                continue
            if text == "/quit":
                return 0
            if text.startswith("/topic"):
                controller.topic = text[len("/topic"):].strip()
                print(f"Lesson: {controller.topic or '-'}")
                continue

            print("Thinking…")
            streamed = False
            if text == "/teach":
                reply = await controller.teach_me()
            elif args.stream:
                reply = await controller.stream(text, on_delta=lambda d: print(d, end="", flush=True))
                streamed = True
                print()
            else:
                reply = await controller.submit(text)

            # Streamed answers are already on screen; only the apology still needs printing.
            if reply is not None and (not streamed or reply.content == APOLOGY):
                _print_turn(reply)


def main() -> None:
    configure_logging(get_settings().log_level)
    try:
        sys.exit(asyncio.run(_run(_parse_args())))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
