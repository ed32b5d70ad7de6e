# backend/tests/test_chat_service.py
import asyncio

import httpx
import pytest

from viestiapuri.errors import UpstreamError, UpstreamFormatError
from viestiapuri.services.chat_service import (
    GENERATION_PARAMETERS,
    SYSTEM_PROMPT,
    ChatService,
    build_payload,
    extract_reply_text,
)


def test_build_payload_has_persona_and_user_message():
    payload = build_payload("qwen-turbo", "Hei")

    assert payload["model"] == "qwen-turbo"
    assert payload["input"]["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "Hei"},
    ]
    assert payload["parameters"] is GENERATION_PARAMETERS


def test_extract_prefers_message_content():
    data = {"output": {"choices": [{"message": {"content": "sisältö"}, "text": "teksti"}]}}
    assert extract_reply_text(data) == "sisältö"


def test_extract_falls_back_to_text():
    data = {"output": {"choices": [{"message": {"content": ""}, "text": "teksti"}]}}
    assert extract_reply_text(data) == "teksti"


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"output": None},
        {"output": {"choices": []}},
        {"output": {"choices": ["merkkijono"]}},
        {"output": {"choices": [{}]}},
        {"output": {"choices": [{"message": {"content": None}}]}},
        [],
    ],
)
def test_extract_rejects_unknown_formats(data):
    with pytest.raises(UpstreamFormatError):
        extract_reply_text(data)


def test_format_error_is_upstream_error():
    assert issubclass(UpstreamFormatError, UpstreamError)


def _service(settings, handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatService(settings, client), client


def test_converse_returns_message_and_timestamp(settings):
    def handler(request):
        return httpx.Response(200, json={"output": {"choices": [{"message": {"content": "vastaus"}}]}})

    service, client = _service(settings, handler)

    async def run():
        try:
            return await service.converse("kysymys")
        finally:
            await client.aclose()

    reply = asyncio.run(run())

    assert reply["message"] == "vastaus"
    assert reply["timestamp"]


def test_converse_makes_a_single_attempt(settings):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(502, json={})

    service, client = _service(settings, handler)

    async def run():
        try:
            await service.converse("kysymys")
        finally:
            await client.aclose()

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(run())

    assert len(calls) == 1
    assert "502" in exc_info.value.detail
