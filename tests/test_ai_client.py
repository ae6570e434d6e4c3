"""
Tests for the assistant and speech clients against a mocked HTTP transport.
"""
import base64
import json

import httpx
import pytest

from terminal_resume.ai_client import (
    CANNED_REPLIES,
    DEFAULT_REPLIES,
    AIClient,
    AssistantAuthError,
)
from terminal_resume.speech_service import SpeechService

ALL_CANNED = {reply for _, replies in CANNED_REPLIES for reply in replies} | set(DEFAULT_REPLIES)


def openai_transport(status=200, content="Hi, I'm Alex.", seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        if status != 200:
            return httpx.Response(status, json={"error": {"message": "nope"}})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_without_key_uses_canned_replies():
    client = AIClient(api_key="")
    reply = await client.ask("Any career advice for a job interview?")
    await client.close()

    career = dict((k, v) for k, v in CANNED_REPLIES)[("job", "career", "interview")]
    assert reply in career


@pytest.mark.asyncio
async def test_unmatched_question_gets_default_reply():
    client = AIClient(api_key="")
    assert await client.ask("zzz") in DEFAULT_REPLIES
    await client.close()


@pytest.mark.asyncio
async def test_openai_reply_is_returned():
    seen = []
    client = AIClient(
        api_key="sk-test",
        project_id="proj_1",
        model="gpt-4o",
        client=httpx.AsyncClient(transport=openai_transport(seen=seen)),
    )
    reply = await client.ask("Who is Joshua?")
    await client.close()

    assert reply == "Hi, I'm Alex."
    request = seen[0]
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["OpenAI-Project"] == "proj_1"
    payload = json.loads(request.content)
    assert payload["model"] == "gpt-4o"
    assert payload["messages"][0]["role"] == "system"
    assert payload["messages"][1] == {"role": "user", "content": "Who is Joshua?"}


@pytest.mark.asyncio
async def test_invalid_key_raises():
    client = AIClient(api_key="sk-bad", client=httpx.AsyncClient(transport=openai_transport(401)))
    with pytest.raises(AssistantAuthError):
        await client.ask("hello")
    await client.close()


@pytest.mark.asyncio
async def test_upstream_failure_falls_back_to_canned():
    client = AIClient(api_key="sk-test", client=httpx.AsyncClient(transport=openai_transport(503)))
    assert await client.ask("hello") in ALL_CANNED
    await client.close()


@pytest.mark.asyncio
async def test_empty_completion_gets_placeholder():
    client = AIClient(api_key="sk-test", client=httpx.AsyncClient(transport=openai_transport(content="")))
    assert await client.ask("hello") == "Neural link unstable. Please retry."
    await client.close()


# ─── Speech ───────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_speech_without_key_fails():
    service = SpeechService(api_key="")
    with pytest.raises(RuntimeError, match="not configured"):
        await service.synthesize("hello")
    await service.close()


@pytest.mark.asyncio
async def test_speech_returns_data_uri():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"ID3audio")

    service = SpeechService(
        api_key="xi-key",
        voice_id="voice123",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    audio_url = await service.synthesize("hello")
    await service.close()

    assert audio_url == "data:audio/mpeg;base64," + base64.b64encode(b"ID3audio").decode()
    assert seen[0].url.path.endswith("/text-to-speech/voice123")
    assert seen[0].headers["xi-api-key"] == "xi-key"


@pytest.mark.asyncio
async def test_speech_upstream_error():
    service = SpeechService(
        api_key="xi-key",
        client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500))),
    )
    with pytest.raises(RuntimeError, match="failed"):
        await service.synthesize("hello")
    await service.close()
