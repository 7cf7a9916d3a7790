# session_backend/services/llm_service.py
"""
Text-generation client for Groq's OpenAI-compatible chat completions API.
"""
import logging
from typing import Optional

import httpx

from ..config import Settings, get_settings
from ..exceptions import LLMServiceError

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Thin async client: one system prompt + one user prompt in, text out.

    A custom httpx transport can be passed for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Run a single chat completion.

        Returns:
            The message content of the first choice ("" if the model sent none)

        Raises:
            LLMServiceError: missing API key, network error, non-200 response
                or a response without choices
        """
        if not self.settings.groq_api_key:
            raise LLMServiceError("GROQ_API_KEY is not set in environment variables")

        payload = {
            "model": self.settings.groq_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.groq_base_url,
                timeout=self.settings.llm_timeout_seconds,
                transport=self.transport,
            ) as client:
                resp = await client.post(
                    "/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.settings.groq_api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise LLMServiceError(f"Chat completion request failed: {e}") from e

        if resp.status_code != 200:
            raise LLMServiceError(f"Chat completion failed ({resp.status_code}): {resp.text}")

        try:
            data = resp.json()
            choices = data["choices"]
        except (ValueError, KeyError, TypeError) as e:
            raise LLMServiceError(f"Unexpected chat completion response: {resp.text}") from e

        if not choices:
            raise LLMServiceError("Chat completion returned no choices")

        message = choices[0].get("message") or {}
        content = message.get("content") or ""
        logger.debug(f"Chat completion ok: model={self.settings.groq_model}, chars={len(content)}")
        return content
