from typing import List, Optional
import asyncio, re

import structlog

from .dispatch import ModelDispatcher
from .errors import DispatchError, user_message
from .memory import Memory
from .schema import ChatOptions, OrchestratorResult, ResearchReport
from .websearch import format_search_context

log = structlog.get_logger(__name__)

RESEARCH_DEPTH_RESULTS = {"basic": 5, "detailed": 10, "comprehensive": 15}

_KEY_POINTS_RE = re.compile(r"(?:key points?|findings?|highlights?)[\s\S]*?(?=\n\n|\n[A-Z]|$)", re.I)
_RECOMMENDATIONS_RE = re.compile(r"(?:recommendations?|suggestions?|next steps?)[\s\S]*?(?=\n\n|\n[A-Z]|$)", re.I)


def _bullets(block: str) -> List[str]:
    lines = [ln.strip() for ln in block.splitlines()]
    return [re.sub(r"^[-•]\s*", "", ln).strip() for ln in lines if ln.startswith(("-", "•"))]


def extract_key_points(text: str) -> List[str]:
    """Bullet lines under the first "key points" / "findings" / "highlights" heading."""
    m = _KEY_POINTS_RE.search(text)
    return _bullets(m.group(0)) if m else []


def extract_recommendations(text: str) -> List[str]:
    m = _RECOMMENDATIONS_RE.search(text)
    return _bullets(m.group(0)) if m else []


class Orchestrator:
    def __init__(self, memory: Memory, dispatcher: Optional[ModelDispatcher] = None):
        self.memory = memory
        self.dispatcher = dispatcher or ModelDispatcher()

    async def step(self, text: str, options: Optional[ChatOptions] = None) -> OrchestratorResult:
        """One chat turn: send ``text`` with the conversation so far, then record both sides."""
        options = options or self.dispatcher.default_options()
        history = self.memory.history()
        self.memory.add_user(text)
        try:
            res = await self.dispatcher.asend_message(text, options, history)
        except DispatchError as e:
            log.error("turn.failed", error=str(e), error_type=type(e).__name__)
            return OrchestratorResult(final_text=user_message(e), errors=[str(e)])

        self.memory.add_assistant(res.response)
        return OrchestratorResult(
            final_text=res.response,
            model=res.model,
            tokens=res.tokens,
            search_results=res.search_results or [],
        )

    async def generate_code(
        self,
        description: str,
        language: str,
        framework: Optional[str] = None,
        include_tests: bool = False,
        include_documentation: bool = False,
    ) -> str:
        prompt = (
            f"Generate complete, production-ready {language} code for: {description}\n\n"
            f"Framework: {framework or 'None specified'}\n"
            f"Include tests: {'Yes' if include_tests else 'No'}\n"
            f"Include documentation: {'Yes' if include_documentation else 'No'}\n\n"
            "Provide clean, well-structured code with proper error handling, "
            "security considerations, and best practices."
        )
        opts = self.dispatcher.default_options(mode="coder", model="codellama-34b", temperature=0.3)
        res = await self.dispatcher.asend_message(prompt, opts)
        return res.response

    async def perform_research(self, topic: str, depth: str = "detailed") -> ResearchReport:
        max_results = RESEARCH_DEPTH_RESULTS.get(depth, RESEARCH_DEPTH_RESULTS["detailed"])
        sources = []
        if self.dispatcher.search:
            sources = await asyncio.to_thread(self.dispatcher.search.search, topic, max_results)

        prompt = (
            f"Conduct a {depth} research analysis on: {topic}\n\n"
            f"Based on the following current information:\n{format_search_context(sources) or '(none)'}\n\n"
            "Provide:\n"
            "1. A comprehensive summary\n"
            "2. Key points and findings\n"
            "3. Analysis and insights\n"
            "4. Recommendations for further action\n\n"
            "Format your response clearly with sections."
        )
        opts = self.dispatcher.default_options(mode="research", model="claude-3-opus", temperature=0.4)
        res = await self.dispatcher.asend_message(prompt, opts)

        response = res.response
        return ResearchReport(
            summary=response.split("\n\n")[0] or response,
            key_points=extract_key_points(response),
            sources=sources,
            recommendations=extract_recommendations(response),
        )
