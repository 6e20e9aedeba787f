"""Shared fixtures: fake OpenAI client and search transport."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from models import ContextSnippet
from responder import Generator, SearchClient


class FakeStream:
    """Stands in for the SDK's AsyncStream of chat completion chunks."""

    def __init__(self, deltas):
        self._deltas = list(deltas)
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for content in self._deltas:
            yield SimpleNamespace(
                choices=[SimpleNamespace(delta=SimpleNamespace(content=content))]
            )

    async def close(self):
        self.closed = True


def make_openai_client(deltas, answer):
    """Client whose streaming call yields *deltas* and plain call returns *answer*."""
    client = MagicMock()
    stream = FakeStream(deltas)

    async def create(**kwargs):
        if kwargs.get("stream"):
            return stream
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=answer))]
        )

    client.chat.completions.create = AsyncMock(side_effect=create)
    client.stream = stream
    return client


SERPER_ORGANIC = [
    {
        "title": "Rust Programming Language",
        "link": "https://www.rust-lang.org/",
        "snippet": "A language empowering everyone to build reliable software.",
        "position": 1,
    },
    {
        "title": "Rust (programming language) - Wikipedia",
        "link": "https://en.wikipedia.org/wiki/Rust_(programming_language)",
        "snippet": "Rust is a general-purpose programming language.",
        "position": 2,
    },
]


def make_search_client(organic=None, status_code=200, calls=None):
    """SearchClient backed by an in-memory transport."""
    organic = SERPER_ORGANIC if organic is None else organic

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json={"organic": organic})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SearchClient(api_key="serper-key", result_count=2, http_client=http_client)


@pytest.fixture
def contexts():
    return [
        ContextSnippet(title=item["title"], url=item["link"], snippet=item["snippet"])
        for item in SERPER_ORGANIC
    ]


@pytest.fixture
def openai_client():
    return make_openai_client(
        ["Rust is ", None, "a systems language."],
        "What is Cargo?\nIs Rust memory safe?",
    )


@pytest.fixture
def generator(openai_client):
    return Generator(model="gpt-3.5-turbo", client=openai_client)


def parse_body(body: str):
    """Split a streamed body into (preamble dict, answer text, related list)."""
    head, rest = body.split("\n\n__LLM_RESPONSE__\n\n")
    answer, related = rest.split("\n\n__RELATED_QUESTIONS__\n\n")
    return json.loads(head), answer, json.loads(related)
