"""System prompt assembly and the model catalog."""

import pytest

from cyberai.models import AI_MODELS, get_default_model, get_model_by_id, get_models_by_category
from cyberai.prompts import (
    ATTRIBUTION_CLAUSE,
    SYSTEM_PROMPTS,
    UNCENSORED_CLAUSE,
    assemble_system_prompt,
    language_name,
)
from cyberai.schema import MODES


class TestAssembleSystemPrompt:

    def test_every_mode_has_a_template(self):
        assert set(MODES) == set(SYSTEM_PROMPTS)

    @pytest.mark.parametrize("mode", MODES)
    def test_base_then_attribution(self, mode):
        prompt = assemble_system_prompt(mode, "en", False)
        assert prompt == SYSTEM_PROMPTS[mode] + ATTRIBUTION_CLAUSE

    def test_unknown_mode_uses_normal(self):
        assert assemble_system_prompt("doesnotexist", "en", False) == assemble_system_prompt("normal", "en", False)

    def test_language_clause_in_order(self):
        prompt = assemble_system_prompt("normal", "fr", False)
        assert prompt.startswith(SYSTEM_PROMPTS["normal"])
        assert prompt.endswith(ATTRIBUTION_CLAUSE)
        lang_at = prompt.index("French")
        assert len(SYSTEM_PROMPTS["normal"]) < lang_at < prompt.index(ATTRIBUTION_CLAUSE.strip())

    def test_uncensored_after_language(self):
        prompt = assemble_system_prompt("cyber", "de", True)
        lang_at = prompt.index("German")
        unc_at = prompt.index(UNCENSORED_CLAUSE.strip())
        attr_at = prompt.index(ATTRIBUTION_CLAUSE.strip())
        assert lang_at < unc_at < attr_at

    def test_uncensored_without_language(self):
        prompt = assemble_system_prompt("coder", "en", True)
        assert prompt == SYSTEM_PROMPTS["coder"] + UNCENSORED_CLAUSE + ATTRIBUTION_CLAUSE

    def test_language_names(self):
        assert language_name("fr").startswith("French")
        assert language_name("hi").startswith("Hindi")
        assert language_name("xx") == "English"


class TestModelCatalog:

    def test_lookup(self):
        assert get_model_by_id("mixtral-8x7b").provider == "Mistral"
        assert get_model_by_id("nope") is None

    def test_ids_are_unique(self):
        ids = [m.id for m in AI_MODELS]
        assert len(ids) == len(set(ids))

    def test_by_category(self):
        code = get_models_by_category("code")
        assert [m.id for m in code] == ["codellama-34b", "deepseek-coder", "wizardcoder-34b"]
        assert get_models_by_category("video") == []

    def test_default_model(self):
        assert get_default_model().id == "gpt-4-turbo"
        assert get_default_model("code").id == "codellama-34b"
        assert get_default_model("video").id == AI_MODELS[0].id
