from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_SCHOLARSHIP = "A.J. Wang Foundation Scholarship"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    temperature: Optional[float] = None
    scholarship_name: str = DEFAULT_SCHOLARSHIP
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from the environment (after loading ``.env``).

        Raises ``ConfigError`` when ``OPENAI_API_KEY`` is unset, so the
        process can refuse to start instead of failing on every request.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        api_key = environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ConfigError("OPENAI_API_KEY environment variable is not set.")

        temperature = environ.get("OPENAI_TEMPERATURE")
        port = environ.get("PORT")
        try:
            return cls(
                api_key=api_key,
                model=environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
                base_url=environ.get("OPENAI_BASE_URL") or None,
                temperature=float(temperature) if temperature else None,
                scholarship_name=environ.get("SCHOLARSHIP_NAME") or DEFAULT_SCHOLARSHIP,
                host=environ.get("HOST") or "0.0.0.0",
                port=int(port) if port else DEFAULT_PORT,
            )
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e
