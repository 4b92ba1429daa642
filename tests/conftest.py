from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the shop_api package is importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shop_api.app import create_app  # noqa: E402
from shop_api.core.config import Settings  # noqa: E402
from shop_api.core.mailer import MailDeliveryError  # noqa: E402
from shop_api.core.media import MediaAsset, MediaHostError  # noqa: E402
from shop_api.core.tokens import TokenIssuer  # noqa: E402
from shop_api.db import session as db_session  # noqa: E402
from shop_api.repositories.shop_repository import ShopRepository  # noqa: E402


class FakeMailer:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail_with: str | None = None

    def send(self, recipient: str, subject: str, message: str) -> None:
        if self.fail_with:
            raise MailDeliveryError(self.fail_with)
        self.sent.append({"recipient": recipient, "subject": subject, "message": message})


class FakeMedia:
    def __init__(self) -> None:
        self.uploads: list[dict] = []
        self.destroyed: list[str] = []
        self.fail_with: str | None = None

    def upload(self, payload, folder=None, width=None) -> MediaAsset:
        if self.fail_with:
            raise MediaHostError(self.fail_with)
        self.uploads.append({"payload": payload, "folder": folder, "width": width})
        public_id = f"{folder}/img{len(self.uploads)}"
        return MediaAsset(public_id=public_id, url=f"https://media.test/{public_id}.png")

    def destroy(self, public_id: str) -> bool:
        self.destroyed.append(public_id)
        return True


def make_settings(database_url: str, **overrides) -> Settings:
    base = Settings(
        app_env="test",
        frontend_base_url="http://localhost:3000",
        database_url=database_url,
        activation_secret="test-activation-secret-0123456789abcdef",
        activation_ttl_seconds=300,
        jwt_secret="test-session-secret-0123456789abcdef",
        session_ttl_seconds=3600,
        user_cookie_name="token",
        seller_cookie_name="seller_token",
        cookie_secure=True,
        smtp_host="",
        smtp_port=465,
        smtp_user="",
        smtp_password="",
        smtp_from="",
        media_cloud_name="demo",
        media_api_key="key123",
        media_api_secret="secret456",
        media_folder="avatars",
        cors_origins=("http://localhost:3000",),
    )
    return replace(base, **overrides)


@pytest.fixture()
def settings(tmp_path):
    """Temporary SQLite database; engine caches are reset so every test starts clean."""
    db_file = tmp_path / "test.db"
    cfg = make_settings(f"sqlite:///{db_file}")
    db_session.reset_databases()
    db_session.database_for(cfg.database_url).create_schema()

    yield cfg

    db_session.reset_databases()


@pytest.fixture()
def repo(settings):
    return ShopRepository(settings.database_url)


@pytest.fixture()
def tokens(settings):
    return TokenIssuer(settings)


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def media():
    return FakeMedia()


@pytest.fixture()
def app(settings, mailer, media):
    return create_app(settings, mailer=mailer, media=media)


@pytest.fixture()
def client(app):
    # https so the jar keeps (and sends back) Secure cookies
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client


SHOP_FORM = {
    "name": "Green Grocer",
    "email": "grocer@example.com",
    "password": "s3cret-pass",
    "address": "12 Market Street",
    "phoneNumber": 5551234,
    "zipCode": 10115,
    "avatar": "data:image/png;base64,iVBORw0KGgo=",
}


def activation_token_from(mail: dict) -> str:
    return mail["message"].rsplit("/", 1)[-1]


@pytest.fixture()
def register_shop(client, mailer):
    """Submit a registration and return its activation token."""

    def _register(**overrides) -> str:
        form = dict(SHOP_FORM, **overrides)
        resp = client.post("/api/v2/shop/create-shop", json=form)
        assert resp.status_code == 201, resp.text
        return activation_token_from(mailer.sent[-1])

    return _register


@pytest.fixture()
def seller_client(client, register_shop):
    """Client holding a seller session cookie for a freshly activated shop."""
    token = register_shop()
    resp = client.post("/api/v2/shop/activation", json={"activation_token": token})
    assert resp.status_code == 201, resp.text
    return client
