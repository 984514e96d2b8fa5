from __future__ import annotations

from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from .config import DEFAULT_MODEL, Settings
from .errors import ProviderError


class ModelGateway:
    """Sends one prompt to the hosted model and returns its text.

    A single ``AsyncOpenAI`` client is shared by every request; it is safe to
    use concurrently. Errors from the SDK propagate unchanged so the caller
    can classify them (see ``errors.is_rate_limited``).
    """

    def __init__(self, client: Any, model: str = DEFAULT_MODEL, temperature: Optional[float] = None):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        client = AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url)
        return cls(client, model=settings.model, temperature=settings.temperature)

    async def complete(self, prompt: str) -> str:
        kwargs: Dict[str, Any] = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        resp = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        text = resp.choices[0].message.content if resp.choices else None
        if not text:
            raise ProviderError("Model returned an empty completion.")
        return text
