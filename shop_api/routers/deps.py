"""Request-scoped dependencies: service lookup and authentication gates."""
from __future__ import annotations

from fastapi import Depends, Request

from shop_api.core.config import Settings
from shop_api.core.errors import ServiceError, ServiceFailure
from shop_api.services.access_service import AccessService, SellerContext, UserContext, authorize_role
from shop_api.services.shop_service import ShopService


def _state(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} is not configured")
    return value


def get_settings_dep(request: Request) -> Settings:
    return _state(request, "settings")


def get_shop_service(request: Request) -> ShopService:
    return _state(request, "shop_service")


def get_access_service(request: Request) -> AccessService:
    return _state(request, "access_service")


def current_user(request: Request) -> UserContext:
    settings = get_settings_dep(request)
    result = get_access_service(request).authenticate_user(request.cookies.get(settings.user_cookie_name))
    if isinstance(result, ServiceError):
        raise ServiceFailure(result)
    return result


def current_seller(request: Request) -> SellerContext:
    settings = get_settings_dep(request)
    result = get_access_service(request).authenticate_seller(request.cookies.get(settings.seller_cookie_name))
    if isinstance(result, ServiceError):
        raise ServiceFailure(result)
    return result


def require_role(*roles: str):
    """Dependency factory; the role gate always runs on an authenticated user context."""

    def _dependency(ctx: UserContext = Depends(current_user)) -> UserContext:
        result = authorize_role(ctx, roles)
        if isinstance(result, ServiceError):
            raise ServiceFailure(result)
        return result

    return _dependency
