"""
Model selection and the one-shot fallback policy.

A ``ModelDispatcher`` holds the currently selected model and sends chat
requests through an ``LLM`` transport. Each call reads the selection once,
when it starts; later ``set_model`` calls do not affect a call in flight.
When a request fails with a ``DispatchError`` and the call's model is not
the fallback model, the dispatcher selects the fallback model (the switch
sticks for later calls) and retries once with the same payload. A failure
on the fallback model raises ``ExhaustedFallbackError``. There is never a
third attempt.
"""
import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from .config import AppConfig
from .context import context_cost, optimize_context
from .errors import ConfigurationError, DispatchError, ExhaustedFallbackError
from .llm import LLM, ChatCompletion
from .models import AI_MODELS, ModelDescriptor, get_model_by_id
from .prompts import assemble_system_prompt
from .schema import ChatOptions, DispatchResult, Message, SearchResult
from .websearch import WebSearch, format_search_context

log = structlog.get_logger(__name__)

Attempts = List[Tuple[str, DispatchError]]


class ModelDispatcher:
    def __init__(self, llm: Optional[LLM] = None, cfg: Optional[AppConfig] = None,
                 search: Optional[WebSearch] = None):
        self.cfg = cfg or AppConfig()
        self.llm = llm or LLM(self.cfg.llm)
        self.search = search

        fallback = get_model_by_id(self.cfg.llm.fallback_model)
        if fallback is None:
            raise ConfigurationError(f"fallback model {self.cfg.llm.fallback_model!r} is not in the catalog")
        self.fallback_model = fallback
        self.fallback_model_id = fallback.id

        self.current_model: ModelDescriptor = get_model_by_id(self.cfg.llm.default_model) or AI_MODELS[0]
        if self.current_model.id != self.cfg.llm.default_model:
            log.warning("model.unknown_default", model_id=self.cfg.llm.default_model, using=self.current_model.id)

    # ---------- model selection ----------
    def set_model(self, model_id: str) -> bool:
        """Select ``model_id``; unknown ids are logged and ignored."""
        model = get_model_by_id(model_id)
        if model is None:
            log.warning("model.unknown", model_id=model_id, current=self.current_model.id)
            return False
        if model.id != self.current_model.id:
            log.info("model.selected", model_id=model.id, previous=self.current_model.id)
        self.current_model = model
        return True

    @property
    def on_fallback(self) -> bool:
        return self.current_model.id == self.fallback_model_id

    # ---------- payload ----------
    def default_options(self, **overrides) -> ChatOptions:
        s = self.cfg.sampling
        opts = ChatOptions(
            temperature=s.temperature,
            max_tokens=s.max_tokens,
            top_p=s.top_p,
            frequency_penalty=s.frequency_penalty,
            presence_penalty=s.presence_penalty,
        )
        for k, v in overrides.items():
            setattr(opts, k, v)
        return opts

    def context_budget(self, options: ChatOptions) -> int:
        if options.context_budget is not None:
            return options.context_budget
        return int(options.max_tokens * self.cfg.sampling.context_ratio)

    def build_payload(self, text: str, options: ChatOptions, history: Sequence[Message] = (),
                      model: Optional[ModelDescriptor] = None) -> Dict[str, Any]:
        model = model or self.current_model
        budget = self.context_budget(options)
        window = optimize_context(history, budget)
        log.debug("context.window", kept=len(window), total=len(history),
                  tokens=context_cost(window), budget=budget)

        messages = [{"role": "system", "content": assemble_system_prompt(options.mode, options.language, options.uncensored)}]
        messages += [m.to_chat() for m in window]
        messages.append({"role": "user", "content": text})
        return {
            "model": model.id,
            "messages": messages,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "top_p": options.top_p,
            "frequency_penalty": options.frequency_penalty,
            "presence_penalty": options.presence_penalty,
            "stream": False,
        }

    # ---------- web search ----------
    def _augment(self, text: str, results: List[SearchResult]) -> str:
        if not results:
            return text
        return (
            f"{text}\n\nRecent web search results:\n{format_search_context(results)}\n\n"
            "Please incorporate this current information in your response."
        )

    def _search(self, text: str, options: ChatOptions) -> List[SearchResult]:
        if not (options.web_search and self.search):
            return []
        try:
            return self.search.search(text, max_results=self.cfg.search.max_results)
        except Exception as e:
            log.warning("search.failed", error=str(e))
            return []

    # ---------- fallback ----------
    def _select(self, options: ChatOptions) -> ModelDescriptor:
        """The model this call starts on; read once, before any await."""
        if options.model:
            self.set_model(options.model)
        return self.current_model

    def _begin_fallback(self, model: ModelDescriptor, error: DispatchError, attempts: Attempts) -> ModelDescriptor:
        """Return the fallback model for a failed call on ``model``, or raise if it already was the fallback."""
        if model.id == self.fallback_model_id:
            raise ExhaustedFallbackError(
                f"fallback model {self.fallback_model_id} failed: {error}", attempts) from error
        log.warning("dispatch.fallback", failed_model=model.id,
                    fallback=self.fallback_model_id, error=str(error), error_type=type(error).__name__)
        self.set_model(self.fallback_model_id)
        return self.fallback_model

    def _result(self, completion: ChatCompletion, model: ModelDescriptor, options: ChatOptions,
                results: List[SearchResult], attempts: int) -> DispatchResult:
        log.info("dispatch.ok", model=model.id, tokens=completion.total_tokens, attempts=attempts)
        return DispatchResult(
            response=completion.content,
            model=model.id,
            model_name=model.name,
            tokens=completion.total_tokens,
            search_results=results or None,
            attempts=attempts,
            metadata={
                "mode": options.mode,
                "temperature": options.temperature,
                "search_enabled": options.web_search,
                "language": options.language,
            },
        )

    # ---------- send ----------
    def send_message(self, text: str, options: Optional[ChatOptions] = None,
                     history: Sequence[Message] = ()) -> DispatchResult:
        options = options or self.default_options()
        model = self._select(options)
        results = self._search(text, options)
        payload = self.build_payload(self._augment(text, results), options, history, model)

        attempts: Attempts = []
        try:
            return self._result(self.llm.complete_sync(payload), model, options, results, 1)
        except DispatchError as e:
            attempts.append((model.id, e))
            model = self._begin_fallback(model, e, attempts)

        payload["model"] = model.id
        try:
            return self._result(self.llm.complete_sync(payload), model, options, results, 2)
        except DispatchError as e:
            attempts.append((model.id, e))
            raise ExhaustedFallbackError(f"fallback model {model.id} failed: {e}", attempts) from e

    async def asend_message(self, text: str, options: Optional[ChatOptions] = None,
                            history: Sequence[Message] = ()) -> DispatchResult:
        options = options or self.default_options()
        model = self._select(options)
        results = await asyncio.to_thread(self._search, text, options)
        payload = self.build_payload(self._augment(text, results), options, history, model)

        attempts: Attempts = []
        try:
            return self._result(await self.llm.complete(payload), model, options, results, 1)
        except DispatchError as e:
            attempts.append((model.id, e))
            model = self._begin_fallback(model, e, attempts)

        payload["model"] = model.id
        try:
            return self._result(await self.llm.complete(payload), model, options, results, 2)
        except DispatchError as e:
            attempts.append((model.id, e))
            raise ExhaustedFallbackError(f"fallback model {model.id} failed: {e}", attempts) from e
