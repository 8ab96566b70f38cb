"""Google Gemini JSON generation using the google.genai SDK.

Structured output goes through Gemini's native JSON mode: the Pydantic
model's JSON schema is sent as ``response_json_schema`` and the reply is
validated back into the same model.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from ..media.errors import ContentGenerationError, MissingCredentialError
from ..utils.retry import run_with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class GeminiJSONProvider:
    """Gemini text model constrained to a JSON schema."""

    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: str | None,
        model: str | None = None,
        temperature: float = 0.8,
        top_p: float = 0.9,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature
        self.top_p = top_p
        self._client = client

    def _ensure_client(self):
        """Lazy-init the Google GenAI client."""
        if self._client is None:
            if not self.api_key:
                raise MissingCredentialError("GOOGLE_API_KEY environment variable not set")
            from google import genai
            self._client = genai.Client(api_key=self.api_key)

    async def generate_json(self, prompt: str, schema: type[T]) -> T:
        """Generate a response for ``prompt`` and parse it into ``schema``.

        Raises:
            MissingCredentialError: no API key configured.
            ContentGenerationError: the call failed or returned invalid JSON.
        """
        self._ensure_client()

        config = {
            "response_mime_type": "application/json",
            "response_json_schema": schema.model_json_schema(by_alias=True),
            "temperature": self.temperature,
            "top_p": self.top_p,
        }

        def _generate():
            return self._client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )

        try:
            response = await run_with_retry(_generate, f"json:{schema.__name__}")
            content = (response.text or "").strip()
            return schema.model_validate(json.loads(content))
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise ContentGenerationError(
                "Failed to generate content from AI. Please check the logs for details."
            ) from e
