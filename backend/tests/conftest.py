import os
import sys
from pathlib import Path

import pytest

# Keep tests deterministic and local-only.
os.environ["TUTOR_SKIP_DOTENV"] = "1"
os.environ["TUTOR_LLM_BACKEND"] = "mock"
os.environ["TUTOR_LLM_TIMEOUT_SECONDS"] = "5"
os.environ["TUTOR_CORS_ORIGINS"] = "*"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture
def use_llm():
    """Route both relay endpoints through the given provider for one test."""
    from app.api.dependencies import provide_teaching_service
    from app.application.teaching import TeachingService
    from app.main import app

    def _install(llm, timeout_seconds: float = 5.0) -> None:
        service = TeachingService(llm=llm, timeout_seconds=timeout_seconds)
        app.dependency_overrides[provide_teaching_service] = lambda: service

    yield _install
    app.dependency_overrides.clear()
