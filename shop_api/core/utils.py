"""
Utility helpers shared across routers/services.
"""

from datetime import datetime, timezone
from urllib.parse import quote


def absolute_url(path: str, base: str) -> str:
    """
    Join a relative path onto the storefront base URL; absolute URLs pass through.
    """
    base_url = (base or "").rstrip("/")
    if not path:
        return base_url + "/"
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path


def activation_url(token: str, base: str) -> str:
    return absolute_url(f"/seller/activation/{quote(token, safe='')}", base)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
