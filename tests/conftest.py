import json
import sys
from pathlib import Path

import httpx
import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from coach_gateway.core.config import CompletionConfig, get_settings  # noqa: E402
from coach_gateway.core.errors import NotFoundError  # noqa: E402
from coach_gateway.schemas.schemas import ApplicationRecord  # noqa: E402
from coach_gateway.services.llm_client import CompletionClient, get_completion_client  # noqa: E402


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    get_completion_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_completion_client.cache_clear()


class FakeRepository:
    """In-memory stand-in for ApplicationRepository that records lookups."""

    def __init__(self, records=None):
        self.records = records or {}
        self.calls = []

    def get_application(self, job_id):
        self.calls.append(job_id)
        row = self.records.get(job_id)
        if row is None:
            raise NotFoundError(f"Application {job_id!r} not found")
        return ApplicationRecord.from_row(row)


class FakeProvider:
    """
    httpx handler playing the provider. Queue responses with `reply`/`fail`;
    every request is kept in `requests` with its decoded JSON body.
    """

    def __init__(self):
        self.requests = []
        self._responses = []

    def reply(self, content, status_code=200):
        self._responses.append(
            httpx.Response(
                status_code,
                json={
                    "id": "chatcmpl-1",
                    "object": "chat.completion",
                    "created": 0,
                    "model": "llama-3.3-70b-versatile",
                    "choices": [
                        {
                            "index": 0,
                            "message": {"role": "assistant", "content": content},
                            "finish_reason": "stop",
                        }
                    ],
                },
            )
        )

    def respond(self, response: httpx.Response):
        self._responses.append(response)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(
            {
                "url": str(request.url),
                "headers": request.headers,
                "body": json.loads(request.content or b"{}"),
            }
        )
        if not self._responses:
            raise AssertionError("unexpected provider call")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(provider, api_key="test-key", **overrides) -> CompletionClient:
    config = CompletionConfig(**{"api_key": api_key, "max_retries": 0, **overrides})
    http_client = httpx.Client(transport=httpx.MockTransport(provider))
    return CompletionClient(config, http_client=http_client)


BACKEND_ROW = {
    "id": 42,
    "job_title": "Backend Engineer",
    "company": "Acme",
    "required_skills": ["Go", "SQL"],
    "role_summary": "Remote backend role",
    "formatted_content": None,
    "original_content": None,
    "status": "Applied",
}


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository({"42": dict(BACKEND_ROW)})


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
