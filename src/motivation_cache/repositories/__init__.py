"""Repository layer for data access.

This layer abstracts external dependencies (LLM providers, the system
clock, the message store) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (OpenAI → Ollama, in-memory → external store)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from motivation_cache.protocols import Clock, MessageGenerator, MessageStore

from .in_memory_store import InMemoryMessageStore
from .ollama_generator import OllamaMessageGenerator
from .openai_generator import OpenAIMessageGenerator
from .zoned_clock import ZonedClock

__all__ = [
    "Clock",
    "MessageGenerator",
    "MessageStore",
    "InMemoryMessageStore",
    "OllamaMessageGenerator",
    "OpenAIMessageGenerator",
    "ZonedClock",
]
