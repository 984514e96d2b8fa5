from __future__ import annotations

from typing import Optional

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class ValidationError(Exception):
    """The client sent an incomplete payload."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderError(Exception):
    """The call to the hosted model failed.

    The dispatcher raises it with a fixed client-facing ``message``; the
    provider's own error stays on ``cause`` and only reaches the server log.
    """

    def __init__(
        self,
        message: str,
        rate_limited: bool = False,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.rate_limited = rate_limited
        self.cause = cause

    @property
    def status_code(self) -> int:
        return 429 if self.rate_limited else 500


def is_rate_limited(exc: BaseException) -> bool:
    """Tell whether ``exc`` reports the provider's rate limit.

    Looks at a structured status code first (openai's ``RateLimitError`` and
    ``APIStatusError`` both carry ``status_code``), then falls back to
    matching "429" in the message.
    """
    if isinstance(exc, ProviderError):
        return exc.rate_limited
    status = getattr(exc, "status_code", None)
    if status is not None:
        return status == 429
    return "429" in str(exc)
