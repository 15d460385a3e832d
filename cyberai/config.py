from dataclasses import dataclass, field
from typing import Dict

from config.settings import settings

# ---------- LLM ----------
@dataclass
class LLMConfig:
    provider: str = "openrouter"
    api_base: str = settings.LLM_BASE_URL
    api_key: str = settings.API_KEY
    default_model: str = settings.DEFAULT_MODEL
    fallback_model: str = settings.FALLBACK_MODEL
    timeout_s: float = settings.LLM_TIMEOUT_SEC
    # OpenRouter uses these for attribution on its dashboard
    headers: Dict[str, str] = field(default_factory=lambda: {
        "X-Title": settings.APP_TITLE,
        "HTTP-Referer": settings.APP_REFERER,
    })

# ---------- Sampling ----------
@dataclass
class SamplingConfig:
    temperature: float = 0.7
    max_tokens: int = 4000
    top_p: float = 0.9
    frequency_penalty: float = 0.1
    presence_penalty: float = 0.1
    context_ratio: float = settings.CONTEXT_RATIO  # share of max_tokens spent on history

# ---------- Search ----------
@dataclass
class SearchConfig:
    max_results: int = 5
    timeout_s: float = settings.SEARCH_TIMEOUT_SEC
    bing_key: str = settings.BING_API_KEY
    google_key: str = settings.GOOGLE_API_KEY
    google_cx: str = settings.GOOGLE_CX

# ---------- AppConfig ----------
@dataclass
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

# 全局单例
APP = AppConfig()
