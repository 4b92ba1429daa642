"""
Access control: resolve session tokens to accounts and gate on roles.

Authentication returns a typed context; role checks take that context as an
argument, so a role gate cannot run before authentication has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shop_api.core.errors import AuthError, ForbiddenError, NotFoundError, ServiceError
from shop_api.core.tokens import SELLER_SESSION, USER_SESSION, TokenInvalidError, TokenIssuer
from shop_api.db.models import Shop, User
from shop_api.repositories.shop_repository import ShopRepository

LOGIN_REQUIRED = "Please login to continue"


@dataclass(frozen=True)
class UserContext:
    user: User

    @property
    def role(self) -> str:
        return self.user.role


@dataclass(frozen=True)
class SellerContext:
    seller: Shop


class AccessService:
    def __init__(self, tokens: TokenIssuer, repository: ShopRepository) -> None:
        self.tokens = tokens
        self.repository = repository

    def _decode(self, token: str | None, kind: str) -> dict | ServiceError:
        if not token:
            return AuthError(LOGIN_REQUIRED)
        try:
            return self.tokens.decode_session_token(token, kind)
        except TokenInvalidError as exc:
            return AuthError(exc.message)

    def authenticate_user(self, token: str | None) -> UserContext | ServiceError:
        claims = self._decode(token, USER_SESSION)
        if isinstance(claims, ServiceError):
            return claims
        user = self.repository.get_user(claims["id"])
        if not user:
            return NotFoundError("User not found")
        return UserContext(user=user)

    def authenticate_seller(self, token: str | None) -> SellerContext | ServiceError:
        claims = self._decode(token, SELLER_SESSION)
        if isinstance(claims, ServiceError):
            return claims
        seller = self.repository.get_shop(claims["id"])
        if not seller:
            return NotFoundError("Seller not found")
        return SellerContext(seller=seller)


def authorize_role(ctx: UserContext, roles: Iterable[str]) -> UserContext | ServiceError:
    if ctx.role not in set(roles):
        return ForbiddenError(f"{ctx.role} cannot access this resource!")
    return ctx
