"""
Tests for the in-memory store and the zoned clock.
"""

import dataclasses
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from motivation_cache.config import settings
from motivation_cache.entities import CacheEntryEntity, CacheKey
from motivation_cache.repositories import InMemoryMessageStore, ZonedClock


def make_entry(**overrides) -> CacheEntryEntity:
    fields = {
        "message": "¡Sigue así!",
        "date": date(2026, 10, 17),
        "user_id": "u1",
        "category": "Trato",
        "score": 4.0,
        "created_at_ms": 1_000,
    }
    fields.update(overrides)
    return CacheEntryEntity(**fields)


def test_put_overwrites_in_place():
    store = InMemoryMessageStore()
    first = make_entry()
    second = make_entry(message="Otro", created_at_ms=2_000)

    store.put(first.key, first)
    store.put(second.key, second)

    assert store.count_all() == 1
    assert store.get(CacheKey("u1", date(2026, 10, 17), "Trato")) is second


def test_get_miss_returns_none():
    assert InMemoryMessageStore().get(CacheKey("u1", date(2026, 10, 17), "Trato")) is None


def test_put_rejects_mismatched_key():
    store = InMemoryMessageStore()

    with pytest.raises(ValueError):
        store.put(CacheKey("u2", date(2026, 10, 17), "Trato"), make_entry())


def test_entries_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        make_entry().score = 1.0  # type: ignore[misc]


def test_zoned_clock_uses_reference_timezone():
    # 03:00 UTC on the 18th is still the 17th in Guayaquil (UTC-5).
    instant = datetime(2026, 10, 18, 3, 0, tzinfo=timezone.utc)

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return instant.astimezone(tz) if tz else instant.replace(tzinfo=None)

    with patch("motivation_cache.repositories.zoned_clock.datetime", FrozenDatetime):
        assert ZonedClock("America/Guayaquil").today() == date(2026, 10, 17)
        assert ZonedClock("UTC").today() == date(2026, 10, 18)


def test_zoned_clock_now_is_epoch_milliseconds():
    with patch("motivation_cache.repositories.zoned_clock.time.time_ns", return_value=1_792_245_600_123_456_789):
        assert ZonedClock.create().now_ms() == 1_792_245_600_123


def test_zoned_clock_defaults_to_settings_timezone():
    assert ZonedClock.create().timezone_name == settings.reference_timezone


def test_implementations_satisfy_protocols():
    from motivation_cache.protocols import Clock, MessageStore

    assert isinstance(InMemoryMessageStore(), MessageStore)
    assert isinstance(ZonedClock.create(), Clock)
