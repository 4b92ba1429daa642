from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from shop_api.core.tokens import SELLER_SESSION, USER_SESSION, TokenInvalidError, TokenIssuer

BUNDLE = {
    "name": "Green Grocer",
    "email": "grocer@example.com",
    "password_hash": "argon2-hash",
    "address": "12 Market Street",
    "phoneNumber": "5551234",
    "zipCode": "10115",
    "avatar": {"public_id": "avatars/a1", "url": "https://media.test/a1.png"},
}


def test_activation_token_round_trip(tokens):
    token = tokens.create_activation_token(BUNDLE)

    assert tokens.decode_activation_token(token) == BUNDLE


def test_activation_token_expires_after_window(tokens, monkeypatch):
    monkeypatch.setattr(tokens, "_now", lambda: datetime.now(timezone.utc) - timedelta(seconds=301))
    token = tokens.create_activation_token(BUNDLE)
    monkeypatch.undo()

    with pytest.raises(TokenInvalidError) as excinfo:
        tokens.decode_activation_token(token)
    assert excinfo.value.message == "Invalid token or token expired"


def test_activation_token_still_valid_inside_window(tokens, monkeypatch):
    monkeypatch.setattr(tokens, "_now", lambda: datetime.now(timezone.utc) - timedelta(seconds=240))
    token = tokens.create_activation_token(BUNDLE)
    monkeypatch.undo()

    assert tokens.decode_activation_token(token)["email"] == "grocer@example.com"


def test_tampered_payload_is_rejected(tokens):
    genuine = tokens.create_activation_token(BUNDLE)
    other = tokens.create_activation_token(dict(BUNDLE, email="attacker@example.com"))
    header, _, signature = genuine.split(".")
    forged = ".".join([header, other.split(".")[1], signature])

    with pytest.raises(TokenInvalidError):
        tokens.decode_activation_token(forged)


def test_foreign_secret_is_rejected(tokens):
    foreign = jwt.encode(dict(BUNDLE, exp=datetime.now(timezone.utc) + timedelta(minutes=5)), "other", algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        tokens.decode_activation_token(foreign)


def test_session_token_is_not_an_activation_token(tokens):
    session = tokens.create_session_token("abc123", SELLER_SESSION)

    with pytest.raises(TokenInvalidError):
        tokens.decode_activation_token(session)


@pytest.mark.parametrize("value", [None, "", "garbage", "a.b.c"])
def test_malformed_tokens_share_one_error(tokens, value):
    with pytest.raises(TokenInvalidError):
        tokens.decode_session_token(value, SELLER_SESSION)


def test_session_namespaces_do_not_mix(tokens):
    seller = tokens.create_session_token("shop1", SELLER_SESSION)

    assert tokens.decode_session_token(seller, SELLER_SESSION)["id"] == "shop1"
    with pytest.raises(TokenInvalidError):
        tokens.decode_session_token(seller, USER_SESSION)


def test_session_ttl_comes_from_settings(settings):
    short = TokenIssuer(replace(settings, session_ttl_seconds=-1))

    with pytest.raises(TokenInvalidError):
        short.decode_session_token(short.create_session_token("u1", USER_SESSION), USER_SESSION)
