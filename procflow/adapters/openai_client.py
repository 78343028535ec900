"""Shared OpenAI plumbing for the AI collaborators."""

import json
import logging
from typing import Any

from procflow import config
from procflow.errors import CollaboratorError, ConfigurationError

logger = logging.getLogger(__name__)


def create_openai_client(api_key: str | None = None):
    """Build an AsyncOpenAI client from an explicit key or OPENAI_API_KEY."""
    import openai

    api_key = api_key or config.get_openai_api_key()
    if not api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY environment variable not set",
            user_message="OpenAI APIキーが設定されていません。環境変数OPENAI_API_KEYを設定してください。",
        )
    return openai.AsyncOpenAI(api_key=api_key)


class JsonChatClient:
    """Requests a JSON object from a chat completion and decodes it."""

    def __init__(
        self,
        client: Any = None,
        model: str | None = None,
        temperature: float = 0.7,
    ) -> None:
        self._client = client
        self.model = model or config.OPENAI_MODEL
        self.temperature = temperature

    @property
    def client(self):
        # constructed lazily so the key is only needed once a request is made
        if self._client is None:
            self._client = create_openai_client()
        return self._client

    async def complete_json(self, system: str, user: str) -> dict[str, Any]:
        """Send one system+user exchange and return the decoded JSON object.

        Raises:
            CollaboratorError: on transport failure, an empty reply, or a
                reply that is not a JSON object.
        """
        client = self.client
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except Exception as exc:
            logger.warning("OpenAI request failed: %s", exc)
            raise CollaboratorError(f"OpenAI API error: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CollaboratorError("No response from AI")

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise CollaboratorError("AI response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise CollaboratorError("AI response is not a JSON object")
        return payload
