"""Chat turns, code generation and research helpers."""

import asyncio

from cyberai.memory import Memory
from cyberai.orchestrator import Orchestrator, extract_key_points, extract_recommendations
from cyberai.schema import SearchResult

from .conftest import fail, ok
from .test_dispatch import FakeSearch

REPORT = (
    "Post-quantum migration is under way.\n\n"
    "Key points:\n"
    "- NIST standardised ML-KEM\n"
    "• Hybrid key exchange is common\n\n"
    "Analysis\n"
    "Vendors are moving slowly.\n\n"
    "Recommendations:\n"
    "- Inventory crypto usage\n"
    "- Test hybrid TLS"
)


class TestStep:

    def test_turns_are_recorded_and_sent_as_context(self, make_dispatcher):
        d, provider = make_dispatcher([ok("first answer"), ok("second answer")])
        orch = Orchestrator(Memory(), d)

        r1 = asyncio.run(orch.step("first question"))
        r2 = asyncio.run(orch.step("second question"))

        assert r1.final_text == "first answer"
        assert r2.final_text == "second answer"
        assert r2.model == "gpt-4-turbo"
        assert not r2.errors
        assert [m.content for m in orch.memory.history()] == [
            "first question", "first answer", "second question", "second answer",
        ]
        second = provider.bodies[1]["messages"]
        assert [m["content"] for m in second[1:]] == ["first question", "first answer", "second question"]

    def test_failure_becomes_user_message(self, make_dispatcher):
        d, _ = make_dispatcher([fail(500), fail(500)])
        orch = Orchestrator(Memory(), d)
        res = asyncio.run(orch.step("hello"))
        assert res.final_text.startswith("AI service is temporarily unavailable")
        assert res.errors
        assert [m.sender for m in orch.memory.history()] == ["user"]


class TestHelpers:

    def test_generate_code_uses_coder_model(self, make_dispatcher):
        d, provider = make_dispatcher([ok("def add(a, b): return a + b")])
        orch = Orchestrator(Memory(), d)
        code = asyncio.run(orch.generate_code("add two numbers", "python", include_tests=True))
        body = provider.bodies[0]
        assert code.startswith("def add")
        assert body["model"] == "codellama-34b"
        assert body["temperature"] == 0.3
        assert body["messages"][0]["content"].startswith("You are CodeMaster AI")
        assert "Include tests: Yes" in body["messages"][-1]["content"]

    def test_perform_research(self, make_dispatcher):
        sources = [SearchResult(title="ML-KEM", url="https://csrc.example/fips203", snippet="FIPS 203", source="Google")]
        search = FakeSearch(sources)
        d, provider = make_dispatcher([ok(REPORT)], search=search)
        orch = Orchestrator(Memory(), d)

        report = asyncio.run(orch.perform_research("post-quantum crypto", depth="comprehensive"))

        assert search.queries == [("post-quantum crypto", 15)]
        assert provider.bodies[0]["model"] == "claude-3-opus"
        assert "Title: ML-KEM" in provider.bodies[0]["messages"][-1]["content"]
        assert report.summary == "Post-quantum migration is under way."
        assert report.key_points == ["NIST standardised ML-KEM", "Hybrid key exchange is common"]
        assert report.recommendations == ["Inventory crypto usage", "Test hybrid TLS"]
        assert report.sources == sources

    def test_extractors_without_headings(self):
        assert extract_key_points("just prose") == []
        assert extract_recommendations("just prose") == []
