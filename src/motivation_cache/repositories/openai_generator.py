"""OpenAI-based message generator.

Uses the OpenAI Responses API to write the motivational line. The async
client is created lazily, so the app can start (and tests can run) without
an API key as long as no message is generated.

Requirements:
    - OPENAI_API_KEY set in the environment or .env
"""

import logging

from openai import AsyncOpenAI, OpenAIError

from motivation_cache.config import settings
from motivation_cache.exceptions import GenerationError
from motivation_cache.prompts import build_message_prompt, normalize_message

logger = logging.getLogger(__name__)


class OpenAIMessageGenerator:
    """OpenAI implementation of MessageGenerator protocol.

    This class satisfies the MessageGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = OpenAIMessageGenerator.create(model_name="gpt-4o-mini")
        message = await generator.generate("Puntualidad", 4.8)
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the OpenAI message generator.

        Args:
            model_name: OpenAI model. Defaults to settings.openai_model.
            api_key: API key. Defaults to settings.openai_api_key.
            temperature: Sampling temperature. Defaults to settings.generation_temperature.
            timeout: Request timeout in seconds. Defaults to settings.generation_timeout_seconds.
            client: Pre-built client (mainly for testing).
        """
        self._model_name = model_name or settings.openai_model
        self._api_key = api_key or settings.openai_api_key
        self._temperature = settings.generation_temperature if temperature is None else temperature
        self._timeout = timeout or settings.generation_timeout_seconds or None
        self._client = client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        api_key: str | None = None,
    ) -> "OpenAIMessageGenerator":
        """Factory method to create OpenAIMessageGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            api_key: API key. If None, uses settings.

        Returns:
            Configured OpenAIMessageGenerator
        """
        return cls(model_name=model_name, api_key=api_key)

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the async OpenAI client.

        Raises:
            GenerationError: If no API key is configured
        """
        if self._client is None:
            try:
                self._client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout)
            except OpenAIError as e:
                raise GenerationError(f"OpenAI client unavailable: {e}") from e
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate(self, category: str, score: float) -> str:
        """Generate a motivational line for a category and score.

        Args:
            category: Normalized category
            score: Clamped score in [0, 5]

        Returns:
            A single line of text, or the fallback message if the model
            returned nothing usable

        Raises:
            GenerationError: If the OpenAI request fails
        """
        prompt = build_message_prompt(category, score)

        try:
            response = await self.client.responses.create(
                model=self._model_name,
                input=prompt,
                temperature=self._temperature,
            )
        except OpenAIError as e:
            raise GenerationError(f"OpenAI API error: {e}") from e

        return normalize_message(_extract_text(response))

    async def is_available(self) -> bool:
        """Check that the API key can retrieve the configured model."""
        try:
            await self.client.models.retrieve(self._model_name)
            return True
        except (GenerationError, OpenAIError) as e:
            logger.warning("OpenAI unavailable: %s", e)
            return False

    async def close(self) -> None:
        """Close the async OpenAI client."""
        if self._client is not None:
            await self._client.close()
            self._client = None


def _extract_text(response) -> str | None:
    """Pull the text out of a Responses API result."""
    text = getattr(response, "output_text", None)
    if text:
        return text

    # Older SDKs without the output_text helper
    try:
        return response.output[0].content[0].text
    except (AttributeError, IndexError, TypeError):
        return None
