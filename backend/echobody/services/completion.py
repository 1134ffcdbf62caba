# echobody/services/completion.py
# 텍스트 생성 (OpenAI Chat Completions) — one call per request, no retries

from __future__ import annotations
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from echobody.core.config import Settings

log = logging.getLogger(__name__)


class CompletionFailed(Exception):
    # network error, non-2xx, malformed reply: callers don't tell them apart
    pass


class CompletionNotReady(CompletionFailed):
    # API key missing
    pass


class CompletionGateway:
    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.model = settings.OPENAI_MODEL
        if client is None and settings.OPENAI_API_KEY:
            client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self._client = client

    async def complete(self, prompt: str, model: Optional[str] = None) -> Optional[str]:
        """
        Send ``prompt`` as a single user message and return the first choice's text.
        Returns None when the service answers without choices or with empty content.
        """
        if self._client is None:
            raise CompletionNotReady("OPENAI_API_KEY not set")

        try:
            chat = await self._client.chat.completions.create(
                model=model or self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as e:
            log.warning("Chat completion failed: %s", e)
            raise CompletionFailed(str(e)) from e

        try:
            text = chat.choices[0].message.content if chat and chat.choices else None
        except (AttributeError, IndexError, TypeError) as e:
            raise CompletionFailed(f"malformed completion reply: {e}") from e

        return text or None
