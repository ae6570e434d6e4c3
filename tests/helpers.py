"""
Shared test helpers: fake GitHub transport and stand-in assistant/speech services.
"""

import asyncio

import httpx


API = "https://api.github.com/repos/octo/resume/contents/content"
RAW = "https://raw.githubusercontent.com/octo/resume/main/content"


def github_transport(routes=None, default_status=404, seen=None):
    """
    MockTransport answering from a {url: (status, body)} table.

    Unknown URLs get `default_status`. A body of type str is sent as text,
    anything else as JSON. Every request is appended to `seen` when given.
    """
    routes = routes or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        entry = routes.get(str(request.url))
        if entry is None:
            return httpx.Response(default_status, json={"message": "Not Found"})
        status, body = entry
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def make_content_service(transport, token=""):
    from terminal_resume.content_service import ContentService

    return ContentService(
        owner="octo",
        repo="resume",
        root="content",
        token=token,
        client=httpx.AsyncClient(transport=transport),
    )


class FakeAssistant:
    def __init__(self, reply="Happy to help."):
        self.reply = reply
        self.questions = []

    async def ask(self, message):
        self.questions.append(message)
        return self.reply

    async def close(self):
        pass


class FailingAssistant:
    async def ask(self, message):
        raise RuntimeError("connection refused")


class FakeSpeech:
    def __init__(self):
        self.texts = []

    async def synthesize(self, text):
        self.texts.append(text)
        return "data:audio/mpeg;base64,AAAA"


class SlowAssistant(FakeAssistant):
    def __init__(self, reply="Thinking done.", delay=0.5):
        super().__init__(reply)
        self.delay = delay

    async def ask(self, message):
        await asyncio.sleep(self.delay)
        return await super().ask(message)
