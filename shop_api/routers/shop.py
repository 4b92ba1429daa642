from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shop_api.core.config import Settings
from shop_api.core.errors import ServiceError, error_response
from shop_api.routers.deps import (
    current_seller,
    get_settings_dep,
    get_shop_service,
    require_role,
)
from shop_api.services.access_service import SellerContext, UserContext
from shop_api.services.shop_service import SellerSession, ShopService

router = APIRouter(prefix="/api/v2/shop", tags=["shop"])

Scalar = Optional[Union[int, str]]


class CreateShopRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    address: Optional[str] = None
    phoneNumber: Scalar = None
    zipCode: Scalar = None
    avatar: Optional[str] = None


class ActivationRequest(BaseModel):
    activation_token: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AvatarRequest(BaseModel):
    avatar: Optional[str] = None


class UpdateSellerRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    phoneNumber: Scalar = None
    zipCode: Scalar = None


def _ok(status_code: int = 200, **payload) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, **payload})


def _cookie_flags(settings: Settings) -> dict:
    # browsers drop SameSite=None cookies that are not Secure
    return {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "none" if settings.cookie_secure else "lax",
        "path": "/",
    }


def _session_response(session: SellerSession, settings: Settings) -> JSONResponse:
    response = _ok(201, seller=session.shop.to_dict(), token=session.token)
    response.set_cookie(
        settings.seller_cookie_name,
        session.token,
        max_age=settings.session_ttl_seconds,
        **_cookie_flags(settings),
    )
    return response


@router.post("/create-shop")
def create_shop(body: Optional[CreateShopRequest] = None, service: ShopService = Depends(get_shop_service)):
    body = body or CreateShopRequest()
    result = service.create_shop(
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        phone_number=body.phoneNumber,
        zip_code=body.zipCode,
        avatar=body.avatar,
    )
    if isinstance(result, ServiceError):
        return error_response(result)
    return _ok(201, message=result.message)


@router.post("/activation")
def activation(
    body: Optional[ActivationRequest] = None,
    service: ShopService = Depends(get_shop_service),
    settings: Settings = Depends(get_settings_dep),
):
    body = body or ActivationRequest()
    result = service.activate(body.activation_token)
    if isinstance(result, ServiceError):
        return error_response(result)
    return _session_response(result, settings)


@router.post("/login-shop")
def login_shop(
    body: Optional[LoginRequest] = None,
    service: ShopService = Depends(get_shop_service),
    settings: Settings = Depends(get_settings_dep),
):
    body = body or LoginRequest()
    result = service.login(body.email, body.password)
    if isinstance(result, ServiceError):
        return error_response(result)
    return _session_response(result, settings)


@router.get("/getSeller")
def get_seller(ctx: SellerContext = Depends(current_seller), service: ShopService = Depends(get_shop_service)):
    result = service.get_seller(ctx)
    if isinstance(result, ServiceError):
        return error_response(result)
    return _ok(seller=result.to_dict())


@router.get("/logout")
def logout(settings: Settings = Depends(get_settings_dep)):
    response = _ok(message="Log out successful!")
    response.delete_cookie(settings.seller_cookie_name, **_cookie_flags(settings))
    return response


@router.get("/get-shop-info/{shop_id}")
def get_shop_info(shop_id: str, service: ShopService = Depends(get_shop_service)):
    result = service.get_shop_info(shop_id)
    if isinstance(result, ServiceError):
        return error_response(result)
    return _ok(shop=result.to_dict())


@router.put("/update-shop-avatar")
def update_shop_avatar(
    body: Optional[AvatarRequest] = None,
    ctx: SellerContext = Depends(current_seller),
    service: ShopService = Depends(get_shop_service),
):
    body = body or AvatarRequest()
    result = service.update_avatar(ctx, body.avatar)
    if isinstance(result, ServiceError):
        return error_response(result)
    return _ok(seller=result.to_dict())


@router.put("/update-seller-info")
def update_seller_info(
    body: Optional[UpdateSellerRequest] = None,
    ctx: SellerContext = Depends(current_seller),
    service: ShopService = Depends(get_shop_service),
):
    body = body or UpdateSellerRequest()
    result = service.update_info(
        ctx,
        name=body.name,
        description=body.description,
        address=body.address,
        phone_number=body.phoneNumber,
        zip_code=body.zipCode,
    )
    if isinstance(result, ServiceError):
        return error_response(result)
    return _ok(shop=result.to_dict())


@router.get("/admin-all-sellers")
def admin_all_sellers(
    _admin: UserContext = Depends(require_role("Admin")),
    service: ShopService = Depends(get_shop_service),
):
    sellers = service.list_sellers()
    return _ok(sellers=[shop.to_dict() for shop in sellers])
