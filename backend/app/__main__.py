from __future__ import annotations

import logging

import uvicorn

from app.core.config import get_settings
from app.core.logging import configure_logging

logger = logging.getLogger("app")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server on http://localhost:%d (model=%s, backend=%s)", settings.port, settings.model_id, settings.llm_backend)
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
