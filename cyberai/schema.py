import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, List, Dict, Optional

Sender = Literal["user", "assistant"]
Mode = Literal["cyber", "normal", "coder", "creative", "research"]

MODES: tuple = ("cyber", "normal", "coder", "creative", "research")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    id: str
    content: str
    sender: Sender
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def create(cls, content: str, sender: Sender) -> "Message":
        return cls(id=uuid.uuid4().hex, content=content, sender=sender)

    def to_chat(self) -> Dict[str, str]:
        """Provider form: {"role", "content"}."""
        return {"role": "user" if self.sender == "user" else "assistant", "content": self.content}

@dataclass
class SearchResult:
    title: str
    url: str
    snippet: str
    source: str          # DuckDuckGo / Bing / Google
    timestamp: datetime = field(default_factory=_now)

@dataclass
class ChatOptions:
    mode: str = "normal"
    language: str = "en"
    uncensored: bool = False
    model: Optional[str] = None        # switch model before sending
    web_search: bool = False
    temperature: float = 0.7
    max_tokens: int = 4000
    top_p: float = 0.9
    frequency_penalty: float = 0.1
    presence_penalty: float = 0.1
    context_budget: Optional[int] = None  # overrides max_tokens * context_ratio

@dataclass
class DispatchResult:
    response: str
    model: str           # id of the model that answered
    model_name: str
    tokens: int = 0
    search_results: Optional[List[SearchResult]] = None
    attempts: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

@dataclass
class OrchestratorResult:
    final_text: str
    model: Optional[str] = None
    tokens: int = 0
    search_results: List[SearchResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

@dataclass
class ResearchReport:
    summary: str
    key_points: List[str] = field(default_factory=list)
    sources: List[SearchResult] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
