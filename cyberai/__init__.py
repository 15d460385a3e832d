from .context import estimate_tokens, optimize_context
from .dispatch import ModelDispatcher
from .errors import (
    ConfigurationError,
    DispatchError,
    ExhaustedFallbackError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from .llm import LLM
from .memory import Memory
from .orchestrator import Orchestrator
from .prompts import assemble_system_prompt
from .schema import ChatOptions, DispatchResult, Message

__version__ = "0.1.0"
