from __future__ import annotations

from dataclasses import replace

import cloudinary
import cloudinary.exceptions
import pytest

import shop_api.core.media as media_module
from shop_api.core.media import MediaAsset, MediaHost, MediaHostError


class _Uploader:
    """Stands in for `cloudinary.uploader`, recording every call."""

    def __init__(self, upload_result=None, destroy_result=None, exc=None):
        self.upload_result = upload_result or {}
        self.destroy_result = destroy_result or {}
        self.exc = exc
        self.calls = []

    def upload(self, file, **options):
        self.calls.append(("upload", file, options))
        if self.exc:
            raise self.exc
        return self.upload_result

    def destroy(self, public_id, **options):
        self.calls.append(("destroy", public_id, options))
        if self.exc:
            raise self.exc
        return self.destroy_result


@pytest.fixture()
def uploader(monkeypatch):
    fake = _Uploader()
    monkeypatch.setattr(media_module.cloudinary.uploader, "upload", fake.upload)
    monkeypatch.setattr(media_module.cloudinary.uploader, "destroy", fake.destroy)
    return fake


def test_host_configures_sdk_from_settings(settings):
    MediaHost(settings)

    config = cloudinary.config()
    assert config.cloud_name == "demo"
    assert config.api_key == "key123"
    assert config.api_secret == "secret456"


def test_upload_scales_into_folder(settings, uploader):
    uploader.upload_result = {"public_id": "avatars/abc", "secure_url": "https://res.test/abc.png"}

    asset = MediaHost(settings).upload("data:image/png;base64,AAAA", folder="avatars", width=150)

    assert asset == MediaAsset(public_id="avatars/abc", url="https://res.test/abc.png")
    action, file, options = uploader.calls[0]
    assert action == "upload"
    assert file == "data:image/png;base64,AAAA"
    assert options["folder"] == "avatars"
    assert options["width"] == 150
    assert options["crop"] == "scale"


def test_upload_without_width_keeps_original_size(settings, uploader):
    uploader.upload_result = {"public_id": "avatars/abc", "secure_url": "https://res.test/abc.png"}

    MediaHost(settings).upload("data:image/png;base64,AAAA")

    _, _, options = uploader.calls[0]
    assert options["folder"] == settings.media_folder
    assert "width" not in options and "crop" not in options


def test_upload_surfaces_provider_error(settings, uploader):
    uploader.exc = cloudinary.exceptions.Error("Invalid image file")

    with pytest.raises(MediaHostError) as excinfo:
        MediaHost(settings).upload("data:bogus")
    assert excinfo.value.message == "Invalid image file"


def test_upload_rejects_incomplete_response(settings, uploader):
    uploader.upload_result = {"public_id": "avatars/abc"}

    with pytest.raises(MediaHostError):
        MediaHost(settings).upload("data:image/png;base64,AAAA")


def test_destroy_tolerates_missing_asset(settings, uploader):
    uploader.destroy_result = {"result": "not found"}

    assert MediaHost(settings).destroy("avatars/gone") is False
    assert uploader.calls[0][:2] == ("destroy", "avatars/gone")


def test_destroy_reports_deleted_asset(settings, uploader):
    uploader.destroy_result = {"result": "ok"}

    assert MediaHost(settings).destroy("avatars/abc") is True


def test_destroy_surfaces_unexpected_result(settings, uploader):
    uploader.destroy_result = {"result": "error"}

    with pytest.raises(MediaHostError):
        MediaHost(settings).destroy("avatars/abc")


def test_missing_credentials_skip_the_provider(settings, uploader):
    host = MediaHost(replace(settings, media_api_secret=""))

    with pytest.raises(MediaHostError):
        host.upload("data:image/png;base64,AAAA")
    assert uploader.calls == []
