from typing import List, Optional, Tuple


class ConfigurationError(RuntimeError):
    """Deployment problem (e.g. no API key); not a dispatch failure."""


class DispatchError(Exception):
    pass


class TransportError(DispatchError):
    """Network unreachable, DNS failure or timeout."""


class ProviderError(DispatchError):
    """Non-2xx status or an explicit error envelope from the provider."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(DispatchError):
    """2xx response without a usable ``choices[0].message.content``."""


class ExhaustedFallbackError(DispatchError):
    """The fallback model failed too; final, not retried."""
    def __init__(self, message: str, attempts: List[Tuple[str, DispatchError]]):
        super().__init__(message)
        self.attempts = attempts

    @property
    def last_error(self) -> Optional[DispatchError]:
        return self.attempts[-1][1] if self.attempts else None


def user_message(error: BaseException) -> str:
    """Friendly text for the chat window."""
    if isinstance(error, ExhaustedFallbackError) and error.last_error is not None:
        error = error.last_error
    if isinstance(error, TransportError):
        return "Network connection failed. Please check your internet connection and try again."
    if isinstance(error, (ProviderError, MalformedResponseError)):
        return "AI service is temporarily unavailable. Please try again in a moment."
    return "An unexpected error occurred. Please try again."
