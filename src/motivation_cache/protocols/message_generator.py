"""Message generator protocol.

Defines the interface for the text-generation service producing a short
motivational line for a category and score.

Implementations can include:
- OpenAI Responses API (default)
- A local Ollama server
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageGenerator(Protocol):
    """Protocol for motivational message generators.

    Implementations return a fallback message instead of failing when the
    provider answers with no usable text, and raise GenerationError for
    transport or provider failures.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def generate(self, category: str, score: float) -> str:
        """Generate a single short line of positive text.

        Args:
            category: Normalized category
            score: Clamped score in [0, 5]

        Returns:
            The generated message

        Raises:
            GenerationError: If the provider call fails
        """
        ...

    async def is_available(self) -> bool:
        """Check if the provider is reachable."""
        ...

    async def close(self) -> None:
        """Release any underlying HTTP client."""
        ...
