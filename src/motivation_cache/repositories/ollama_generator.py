"""Ollama-based message generator.

Uses Ollama's local API to write the motivational line, for running the
service without a hosted provider.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull llama3.2`
    - Ollama running: `ollama serve` (usually runs automatically)
"""

import httpx

from motivation_cache.config import settings
from motivation_cache.exceptions import GenerationError
from motivation_cache.prompts import build_message_prompt, normalize_message


class OllamaMessageGenerator:
    """Ollama implementation of MessageGenerator protocol.

    This class satisfies the MessageGenerator protocol through structural
    typing - no explicit inheritance needed.

    Uses the non-streaming endpoint http://localhost:11434/api/generate
    by default.

    Example:
        ```python
        generator = OllamaMessageGenerator.create(
            model_name="llama3.2",
            base_url="http://localhost:11434"
        )
        message = await generator.generate("Trato", 3.5)
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama message generator.

        Args:
            model_name: Name of the Ollama model.
                       Defaults to settings.ollama_model.
            base_url: Ollama API base URL.
                     Defaults to settings.ollama_base_url.
            temperature: Sampling temperature. Defaults to settings.generation_temperature.
            timeout: Request timeout in seconds. Defaults to settings.generation_timeout_seconds.
            client: Pre-built HTTP client (mainly for testing).
        """
        self._model_name = model_name or settings.ollama_model
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._temperature = settings.generation_temperature if temperature is None else temperature
        self._timeout = timeout or settings.generation_timeout_seconds or None
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OllamaMessageGenerator":
        """Factory method to create OllamaMessageGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.

        Returns:
            Configured OllamaMessageGenerator
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier.

        Returns:
            Model name (e.g., "llama3.2")
        """
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
            GenerationError: If the Ollama API request fails
        """
        url = f"{self._base_url}/api/generate"
        payload = {
            "model": self._model_name,
            "prompt": build_message_prompt(category, score),
            "stream": False,
            "options": {"temperature": self._temperature},
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if "connection refused" in str(e).lower():
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            elif "model" in str(e).lower() and "not found" in str(e).lower():
                error_msg += f"\n  → Model not found. Try: ollama pull {self._model_name}"
            raise GenerationError(error_msg) from e
        except ValueError as e:
            raise GenerationError(f"Ollama returned invalid JSON: {e}") from e

        text = data.get("response") if isinstance(data, dict) else None
        return normalize_message(text if isinstance(text, str) else None)

    async def is_available(self) -> bool:
        """Check if Ollama is running and serves the configured model.

        Returns:
            True if the model is listed by /api/tags, False otherwise
        """
        try:
            response = await self.client.get(f"{self._base_url}/api/tags")
            response.raise_for_status()
            models = response.json().get("models", [])
        except (httpx.HTTPError, ValueError):
            return False

        names = {m.get("name", "") for m in models}
        return self._model_name in names or f"{self._model_name}:latest" in names

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
