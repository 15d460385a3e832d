import json
from typing import Callable, List, Union

import httpx
import pytest

from cyberai.config import AppConfig, LLMConfig, SearchConfig
from cyberai.dispatch import ModelDispatcher
from cyberai.llm import LLM
from cyberai.schema import Message

API_BASE = "https://llm.test/api/v1"

Reply = Union[httpx.Response, Exception]


def completion(content: str = "Hello!", tokens: int = 42, model: str = "any") -> dict:
    return {
        "id": "gen-1",
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": tokens // 2, "completion_tokens": tokens - tokens // 2, "total_tokens": tokens},
    }


class ScriptedProvider:
    """Replays one reply per request and keeps the request bodies."""
    def __init__(self, replies: List[Reply]):
        self.replies = list(replies)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError("unexpected extra request")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def models(self) -> List[str]:
        return [b["model"] for b in self.bodies]


def ok(content: str = "Hello!", tokens: int = 42) -> httpx.Response:
    return httpx.Response(200, json=completion(content, tokens))


def fail(status: int = 500) -> httpx.Response:
    return httpx.Response(status, json={"error": {"message": "upstream error", "code": status}})


def connect_error() -> Exception:
    return httpx.ConnectError("connection refused", request=httpx.Request("POST", API_BASE))


def make_history(n: int, chars: int = 200) -> List[Message]:
    """``n`` alternating messages of ``chars`` characters (chars/4 tokens each)."""
    return [
        Message(id=f"m{i}", content=(f"{i:03d}" + "x" * chars)[:chars], sender="user" if i % 2 == 0 else "assistant")
        for i in range(n)
    ]


@pytest.fixture
def app_cfg() -> AppConfig:
    return AppConfig(
        llm=LLMConfig(
            api_key="test-key",
            api_base=API_BASE,
            default_model="gpt-4-turbo",
            fallback_model="mixtral-8x7b",
            timeout_s=5.0,
        ),
        search=SearchConfig(max_results=3, bing_key="", google_key="", google_cx=""),
    )


@pytest.fixture
def make_llm(app_cfg) -> Callable[[ScriptedProvider], LLM]:
    def _make(provider: ScriptedProvider) -> LLM:
        transport = httpx.MockTransport(provider)
        return LLM(
            app_cfg.llm,
            http_client=httpx.Client(transport=transport),
            async_http_client=httpx.AsyncClient(transport=transport),
        )
    return _make


@pytest.fixture
def make_dispatcher(app_cfg, make_llm):
    def _make(replies: List[Reply], search=None):
        provider = ScriptedProvider(replies)
        return ModelDispatcher(llm=make_llm(provider), cfg=app_cfg, search=search), provider
    return _make
