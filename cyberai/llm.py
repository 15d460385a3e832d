from typing import Any, List, Dict, Optional

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from .config import LLMConfig
from .errors import ConfigurationError, MalformedResponseError, ProviderError, TransportError

log = structlog.get_logger(__name__)


# ---------- response envelope ----------
class ChatMessage(BaseModel):
    role: str = "assistant"
    content: str

class Choice(BaseModel):
    message: ChatMessage

class Usage(BaseModel):
    total_tokens: Optional[int] = None

class ChatCompletion(BaseModel):
    model: Optional[str] = None
    choices: List[Choice] = Field(min_length=1)
    usage: Optional[Usage] = None

    @property
    def content(self) -> str:
        return self.choices[0].message.content

    @property
    def total_tokens(self) -> int:
        return (self.usage.total_tokens or 0) if self.usage else 0


def parse_completion(response: httpx.Response) -> ChatCompletion:
    """Classify an HTTP response; return the validated envelope or raise."""
    if not response.is_success:
        raise ProviderError(
            f"HTTP {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"response is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(f"unexpected response type: {type(data).__name__}")
    err = data.get("error")
    if err:
        msg = err.get("message") if isinstance(err, dict) else str(err)
        raise ProviderError(msg or "API request failed", status_code=response.status_code)
    try:
        return ChatCompletion.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"missing choices[0].message.content ({e.error_count()} errors)") from e


class LLM:
    """Thin client for an OpenAI-compatible /chat/completions endpoint (OpenRouter by default)."""
    def __init__(
        self,
        cfg: Optional[LLMConfig] = None,
        *,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.cfg = cfg or LLMConfig()
        self.api_key = api_key if api_key is not None else self.cfg.api_key
        self.url = self.cfg.api_base.rstrip("/") + "/chat/completions"
        self._owns_sync = http_client is None
        self._owns_async = async_http_client is None
        self._sync = http_client or httpx.Client(timeout=self.cfg.timeout_s)
        self._async = async_http_client or httpx.AsyncClient(timeout=self.cfg.timeout_s)

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise ConfigurationError(
                "API key not configured: set OPENROUTER_API_KEY (or OPENAI_API_KEY) in .env or the environment."
            )
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            **self.cfg.headers,
        }

    def complete_sync(self, payload: Dict[str, Any]) -> ChatCompletion:
        headers = self._headers()
        try:
            r = self._sync.post(self.url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"timeout after {self.cfg.timeout_s}s") from e
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        log.debug("llm.response", model=payload.get("model"), status=r.status_code)
        return parse_completion(r)

    async def complete(self, payload: Dict[str, Any]) -> ChatCompletion:
        headers = self._headers()
        try:
            r = await self._async.post(self.url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"timeout after {self.cfg.timeout_s}s") from e
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        log.debug("llm.response", model=payload.get("model"), status=r.status_code)
        return parse_completion(r)

    def close(self):
        if self._owns_sync:
            self._sync.close()

    async def aclose(self):
        if self._owns_async:
            await self._async.aclose()
