from contextlib import asynccontextmanager
from datetime import datetime
from functools import lru_cache
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from cyberai.config import APP
from cyberai.dispatch import ModelDispatcher
from cyberai.errors import ConfigurationError, ExhaustedFallbackError, user_message
from cyberai.llm import LLM
from cyberai.logsetup import setup_logging
from cyberai.models import AI_MODELS
from cyberai.schema import Message
from cyberai.websearch import WebSearch


# httpx clients are shared process-wide; model selection is not
@lru_cache(maxsize=1)
def get_llm() -> LLM:
    return LLM(APP.llm)

@lru_cache(maxsize=1)
def get_search() -> WebSearch:
    return WebSearch(APP.search)

def get_dispatcher(llm: LLM = Depends(get_llm), search: WebSearch = Depends(get_search)) -> ModelDispatcher:
    return ModelDispatcher(llm=llm, cfg=APP, search=search)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    yield
    if get_llm.cache_info().currsize:
        llm = get_llm()
        llm.close()
        await llm.aclose()
    if get_search.cache_info().currsize:
        get_search().close()

app = FastAPI(title="CyberAI", lifespan=lifespan)


class HistoryItem(BaseModel):
    id: str
    content: str
    sender: Literal["user", "assistant"]
    timestamp: Optional[datetime] = None

    def to_message(self) -> Message:
        if self.timestamp is None:
            return Message(id=self.id, content=self.content, sender=self.sender)
        return Message(id=self.id, content=self.content, sender=self.sender, timestamp=self.timestamp)

class ChatReq(BaseModel):
    text: str
    mode: str = "normal"
    language: str = "en"
    uncensored: bool = False
    model: Optional[str] = None
    web_search: bool = False
    temperature: float = APP.sampling.temperature
    max_tokens: int = Field(default=APP.sampling.max_tokens, gt=0)
    history: List[HistoryItem] = Field(default_factory=list)

class SearchHit(BaseModel):
    title: str
    url: str
    snippet: str
    source: str

class ChatResp(BaseModel):
    response: str
    model: str
    model_name: str
    tokens: int
    attempts: int
    search_results: List[SearchHit] = Field(default_factory=list)


@app.get("/health")
def health():
    return {"ok": True}

@app.get("/api/models")
def api_models(dispatcher: ModelDispatcher = Depends(get_dispatcher)):
    return {
        "current": dispatcher.current_model.id,
        "fallback": dispatcher.fallback_model_id,
        "models": [
            {"id": m.id, "name": m.name, "provider": m.provider, "category": m.category,
             "max_tokens": m.max_tokens, "capabilities": list(m.capabilities)}
            for m in AI_MODELS
        ],
    }

@app.post("/api/chat", response_model=ChatResp)
async def api_chat(req: ChatReq, dispatcher: ModelDispatcher = Depends(get_dispatcher)):
    opts = dispatcher.default_options(
        mode=req.mode, language=req.language, uncensored=req.uncensored, model=req.model,
        web_search=req.web_search, temperature=req.temperature, max_tokens=req.max_tokens,
    )
    history = [h.to_message() for h in req.history]
    try:
        res = await dispatcher.asend_message(req.text, opts, history)
    except ExhaustedFallbackError as e:
        raise HTTPException(status_code=502, detail=user_message(e)) from e
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return ChatResp(
        response=res.response,
        model=res.model,
        model_name=res.model_name,
        tokens=res.tokens,
        attempts=res.attempts,
        search_results=[SearchHit(title=s.title, url=s.url, snippet=s.snippet, source=s.source)
                        for s in res.search_results or []],
    )
