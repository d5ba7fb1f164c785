"""
Tests for caller identity resolution.
"""

import dataclasses
from types import SimpleNamespace

from starlette.requests import Request

from motivation_cache.api import identity
from motivation_cache.config import settings


def make_request(session=None, user=None, client=("10.0.0.7", 5050)) -> Request:
    scope = {"type": "http", "method": "POST", "path": "/", "headers": [], "client": client}
    if session is not None:
        scope["session"] = session
    request = Request(scope)
    if user is not None:
        request.state.user = user
    return request


def test_session_cedula_wins():
    request = make_request(session={"user": {"cedula": "0912345678"}}, user=SimpleNamespace(id=42))

    assert identity.get_user_id(request) == "0912345678"


def test_auth_user_id_is_used_without_session():
    assert identity.get_user_id(make_request(user=SimpleNamespace(id=42))) == "42"
    assert identity.get_user_id(make_request(user={"id": "abc"})) == "abc"


def test_anonymous_callers_share_one_bucket():
    assert identity.get_user_id(make_request()) == settings.anonymous_user_id
    assert identity.get_user_id(make_request(session={})) == settings.anonymous_user_id


def test_anonymous_buckets_can_be_split_per_client(monkeypatch):
    monkeypatch.setattr(
        identity, "settings", dataclasses.replace(settings, share_anonymous_bucket=False)
    )

    assert identity.get_user_id(make_request()) == f"{settings.anonymous_user_id}:10.0.0.7"
    assert identity.get_user_id(make_request(client=None)) == f"{settings.anonymous_user_id}:unknown"
