"""
Signed, self-contained tokens.

Two kinds share one validator shape:
- activation tokens carry a whole pending registration and live for a few minutes;
- session tokens carry an account id and an audience ("user" or "seller") so buyer
  and seller sessions never validate against each other.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .config import Settings

ALGORITHM = "HS256"
USER_SESSION = "user"
SELLER_SESSION = "seller"
_REGISTERED_CLAIMS = ("exp", "iat", "nbf", "aud")


class TokenInvalidError(Exception):
    """Bad signature, expiry, wrong audience or garbage; deliberately indistinct."""

    def __init__(self, message: str = "Invalid token or token expired"):
        super().__init__(message)
        self.message = message


class TokenIssuer:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _encode(self, claims: dict[str, Any], secret: str, ttl_seconds: int) -> str:
        now = self._now()
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + timedelta(seconds=ttl_seconds)
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def _decode(self, token: str | None, secret: str, audience: str | None = None) -> dict[str, Any]:
        if not token:
            raise TokenInvalidError()
        try:
            return jwt.decode(token, secret, algorithms=[ALGORITHM], audience=audience)
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError() from exc

    # ----------------------------------- activation -----------------------------------
    def create_activation_token(self, bundle: dict[str, Any]) -> str:
        return self._encode(bundle, self.settings.activation_secret, self.settings.activation_ttl_seconds)

    def decode_activation_token(self, token: str | None) -> dict[str, Any]:
        """Return the pending-registration bundle embedded in the token."""
        claims = self._decode(token, self.settings.activation_secret)
        return {key: value for key, value in claims.items() if key not in _REGISTERED_CLAIMS}

    # ------------------------------------- session -------------------------------------
    def create_session_token(self, account_id: str, kind: str) -> str:
        return self._encode({"id": account_id, "aud": kind}, self.settings.jwt_secret, self.settings.session_ttl_seconds)

    def decode_session_token(self, token: str | None, kind: str) -> dict[str, Any]:
        claims = self._decode(token, self.settings.jwt_secret, audience=kind)
        if not claims.get("id"):
            raise TokenInvalidError()
        return claims
