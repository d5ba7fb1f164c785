"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (OpenAI → Ollama, in-memory → external store)
- Unit testing with fake clocks and scripted generators
- Clear separation of concerns

Usage:
    ```python
    from motivation_cache.protocols import Clock, MessageGenerator, MessageStore

    store: MessageStore = InMemoryMessageStore()
    generator: MessageGenerator = OpenAIMessageGenerator.create()
    ```
"""

from .clock import Clock
from .message_generator import MessageGenerator
from .message_store import MessageStore

__all__ = [
    "Clock",
    "MessageGenerator",
    "MessageStore",
]
