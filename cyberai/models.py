from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str
    provider: str
    description: str
    capabilities: Tuple[str, ...]
    max_tokens: int
    cost_per_1k_tokens: float
    category: str        # chat | code | multimodal


AI_MODELS: List[ModelDescriptor] = [
    # ---------- chat ----------
    ModelDescriptor("gpt-4-turbo", "GPT-4 Turbo", "OpenAI",
                    "Most capable GPT-4 model with 128k context",
                    ("chat", "reasoning", "analysis", "coding"), 128000, 0.01, "chat"),
    ModelDescriptor("claude-3-opus", "Claude 3 Opus", "Anthropic",
                    "Most powerful Claude model for complex tasks",
                    ("chat", "reasoning", "analysis", "creative"), 200000, 0.015, "chat"),
    ModelDescriptor("gemini-pro", "Gemini Pro", "Google",
                    "Google's advanced multimodal AI",
                    ("chat", "multimodal", "reasoning"), 32000, 0.0005, "multimodal"),
    ModelDescriptor("llama-3-70b", "Llama 3 70B", "Meta",
                    "Open-source powerhouse for general tasks",
                    ("chat", "reasoning", "multilingual"), 8000, 0.0008, "chat"),
    ModelDescriptor("mixtral-8x7b", "Mixtral 8x7B", "Mistral",
                    "Efficient mixture of experts model",
                    ("chat", "coding", "multilingual"), 32000, 0.0006, "chat"),
    # ---------- code ----------
    ModelDescriptor("codellama-34b", "CodeLlama 34B", "Meta",
                    "Specialized for code generation and debugging",
                    ("coding", "debugging", "explanation"), 16000, 0.0008, "code"),
    ModelDescriptor("deepseek-coder", "DeepSeek Coder", "DeepSeek",
                    "Advanced coding assistant",
                    ("coding", "architecture", "optimization"), 16000, 0.0014, "code"),
    ModelDescriptor("wizardcoder-34b", "WizardCoder 34B", "WizardLM",
                    "Powerful code generation model",
                    ("coding", "refactoring", "documentation"), 8000, 0.0008, "code"),
    # ---------- specialized ----------
    ModelDescriptor("grok-1", "Grok-1", "xAI",
                    "Conversational AI with real-time web access",
                    ("chat", "web-search", "humor", "uncensored"), 8000, 0.005, "chat"),
    ModelDescriptor("perplexity-70b", "Perplexity 70B", "Perplexity",
                    "Search-focused AI with citations",
                    ("search", "research", "citations"), 4000, 0.001, "chat"),
]


def get_model_by_id(model_id: str) -> Optional[ModelDescriptor]:
    return next((m for m in AI_MODELS if m.id == model_id), None)


def get_models_by_category(category: str) -> List[ModelDescriptor]:
    return [m for m in AI_MODELS if m.category == category]


def get_default_model(category: str = "chat") -> ModelDescriptor:
    models = get_models_by_category(category)
    return models[0] if models else AI_MODELS[0]
