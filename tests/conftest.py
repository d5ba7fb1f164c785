"""
Shared fixtures: a controllable clock, a scripted generator and a service
wired to both.
"""

import asyncio
from datetime import date, datetime, timedelta

import pytest
import pytz

from motivation_cache.exceptions import GenerationError
from motivation_cache.repositories import InMemoryMessageStore
from motivation_cache.services import MessageCacheService

GUAYAQUIL = pytz.timezone("America/Guayaquil")


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self._now = start

    def now_ms(self) -> int:
        return int(self._now.timestamp() * 1000)

    def today(self) -> date:
        return self._now.astimezone(GUAYAQUIL).date()

    def advance(self, **kwargs) -> None:
        self._now = self._now + timedelta(**kwargs)


class ScriptedGenerator:
    """Generator returning numbered messages and recording its calls."""

    model_name = "scripted"

    def __init__(self, delay: float = 0.0) -> None:
        self.calls: list[tuple[str, float]] = []
        self.fail = False
        self.available = True
        self.delay = delay

    async def generate(self, category: str, score: float) -> str:
        self.calls.append((category, score))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise GenerationError("provider down")
        return f"Mensaje {len(self.calls)} sobre {category}"

    async def is_available(self) -> bool:
        return self.available

    async def close(self) -> None:
        pass


@pytest.fixture
def clock():
    """Clock at 09:00 on 2026-10-17, Guayaquil time."""
    return FixedClock(GUAYAQUIL.localize(datetime(2026, 10, 17, 9, 0, 0)))


@pytest.fixture
def generator():
    return ScriptedGenerator()


@pytest.fixture
def store():
    return InMemoryMessageStore()


@pytest.fixture
def service(store, generator, clock):
    return MessageCacheService.create(
        store=store,
        generator=generator,
        clock=clock,
        staleness_window_ms=3_600_000,
        change_threshold=0.5,
        generation_timeout=5,
    )
