"""
Media host adapter on top of the Cloudinary SDK.

Uploads accept anything the provider accepts as `file`: a data URI, a remote URL
or raw bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from .config import Settings

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class MediaHostError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class MediaAsset:
    public_id: str
    url: str

    def as_dict(self) -> dict[str, str]:
        return {"public_id": self.public_id, "url": self.url}


class MediaHost:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        cloudinary.config(
            cloud_name=settings.media_cloud_name,
            api_key=settings.media_api_key,
            api_secret=settings.media_api_secret,
            secure=True,
        )

    def _ensure_configured(self) -> None:
        s = self.settings
        if not (s.media_cloud_name and s.media_api_key and s.media_api_secret):
            raise MediaHostError("Media host credentials are not configured")

    def upload(self, payload: Any, folder: str | None = None, width: int | None = None) -> MediaAsset:
        if not payload:
            raise MediaHostError("Empty media payload")
        self._ensure_configured()
        options: dict[str, Any] = {"folder": folder or self.settings.media_folder, "timeout": REQUEST_TIMEOUT}
        if width:
            options.update(width=int(width), crop="scale")
        try:
            body = cloudinary.uploader.upload(payload, **options)
        except cloudinary.exceptions.Error as exc:
            logger.error("Media upload failed: %s", exc)
            raise MediaHostError(str(exc) or "Media host rejected the upload") from exc
        public_id = body.get("public_id")
        url = body.get("secure_url") or body.get("url")
        if not public_id or not url:
            raise MediaHostError("Media host response is missing the asset reference")
        return MediaAsset(public_id=public_id, url=url)

    def destroy(self, public_id: str) -> bool:
        """Delete an asset; returns False when the provider no longer knows it."""
        self._ensure_configured()
        try:
            body = cloudinary.uploader.destroy(public_id, timeout=REQUEST_TIMEOUT)
        except cloudinary.exceptions.Error as exc:
            logger.error("Media destroy of %s failed: %s", public_id, exc)
            raise MediaHostError(str(exc) or "Media host rejected the delete") from exc
        result = body.get("result")
        if result not in ("ok", "not found"):
            raise MediaHostError(f"Media host could not delete asset: {result}")
        return result == "ok"
