import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # OpenRouter key first, plain OpenAI-compatible key as a fallback
    API_KEY = os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY", "")
    LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1")
    DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "gpt-4-turbo")
    FALLBACK_MODEL = os.getenv("FALLBACK_MODEL", "mixtral-8x7b")
    LLM_TIMEOUT_SEC = float(os.getenv("LLM_TIMEOUT_SEC", "60"))
    CONTEXT_RATIO = float(os.getenv("CONTEXT_RATIO", "0.6"))
    APP_TITLE = os.getenv("APP_TITLE", "CyberAI-Ultimate")
    APP_REFERER = os.getenv("APP_REFERER", "https://cyberai.rf.gd")
    BING_API_KEY = os.getenv("BING_API_KEY", "")
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
    GOOGLE_CX = os.getenv("GOOGLE_CX", "")
    SEARCH_TIMEOUT_SEC = float(os.getenv("SEARCH_TIMEOUT_SEC", "15"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_JSON = _flag("LOG_JSON", "1")

settings = Settings()
