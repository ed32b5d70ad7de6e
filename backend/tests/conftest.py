# backend/tests/conftest.py
import httpx
import pytest
from fastapi.testclient import TestClient

from viestiapuri.config import Settings
from viestiapuri.database.connection import FeedbackStore
from viestiapuri.main import create_app


UPSTREAM_URL = "https://upstream.test/api/v1/generation"


class FakeUpstream:
    """
    Korvaa tekoäly-API:n testeissä. Tallentaa saapuneet pyynnöt ja
    palauttaa sen vastauksen, joka testissä on asetettu.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = {
            "output": {
                "choices": [
                    {"finish_reason": "stop",
                     "message": {"role": "assistant", "content": "Hei! Miten voin auttaa?"}}
                ]
            },
            "request_id": "test-request",
        }
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'feedback.db'}",
        dashscope_api_key="test-key",
        dashscope_url=UPSTREAM_URL,
        dashscope_model="qwen-turbo",
    )


@pytest.fixture
def store(settings):
    store = FeedbackStore(settings.database_url)
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture(scope="function")
def client(settings, store, upstream):
    """
    Luo testiasiakkaan FastAPI:lle. Tietokanta on väliaikainen SQLite-tiedosto
    ja tekoäly-API korvataan httpx:n MockTransportilla.
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    app = create_app(settings=settings, store=store, http_client=http_client)

    with TestClient(app) as c:
        yield c
