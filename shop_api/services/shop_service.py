"""
Seller (shop) account use cases: registration with email activation, login,
profile and avatar maintenance, and the admin listing.

Every public operation returns either its success value or a ServiceError;
nothing here raises for an expected failure.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Optional

from shop_api.core.config import Settings
from shop_api.core.errors import (
    DuplicateError,
    ExternalServiceError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from shop_api.core.mailer import MailDeliveryError, Mailer
from shop_api.core.media import MediaHost, MediaHostError
from shop_api.core.security import hash_password
from shop_api.core.tokens import SELLER_SESSION, TokenInvalidError, TokenIssuer
from shop_api.core.utils import activation_url
from shop_api.db.models import Shop
from shop_api.repositories.shop_repository import EmailTakenError, ShopRepository
from shop_api.services.access_service import SellerContext

logger = logging.getLogger(__name__)

AVATAR_WIDTH = 150
ACTIVATION_SUBJECT = "Activate your Shop"
_BUNDLE_KEYS = ("name", "email", "password_hash", "address", "phoneNumber", "zipCode")


@dataclass
class RegistrationPending:
    email: str
    activation_url: str

    @property
    def message(self) -> str:
        return f"Please check your email: {self.email} to activate your shop!"


@dataclass
class SellerSession:
    shop: Shop
    token: str


def _clean(value: Any) -> str:
    # falsy form values (None, "", 0) count as missing
    if not value:
        return ""
    return str(value).strip()


class ShopService:
    """Handles seller registration, activation, login and profile flows."""

    def __init__(
        self,
        settings: Settings,
        repository: ShopRepository,
        tokens: TokenIssuer,
        mailer: Mailer,
        media: MediaHost,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.tokens = tokens
        self.mailer = mailer
        self.media = media

    # -------------------------------------- helpers --------------------------------------
    def _start_session(self, shop: Shop) -> SellerSession:
        return SellerSession(shop=shop, token=self.tokens.create_session_token(shop.id, SELLER_SESSION))

    def _upload_avatar(self, payload: Any, width: int | None = None) -> dict | ServiceError:
        try:
            asset = self.media.upload(payload, folder=self.settings.media_folder, width=width)
        except MediaHostError as exc:
            return ExternalServiceError(exc.message)
        return asset.as_dict()

    # -------------------------------------- registration --------------------------------------
    def create_shop(
        self,
        *,
        name: Any,
        email: Any,
        password: Any,
        address: Any,
        phone_number: Any,
        zip_code: Any,
        avatar: Any = None,
    ) -> RegistrationPending | ServiceError:
        fields = {
            "name": _clean(name),
            "email": _clean(email),
            "address": _clean(address),
            "phoneNumber": _clean(phone_number),
            "zipCode": _clean(zip_code),
        }
        if not all(fields.values()) or not password:
            return ValidationError("Please provide all required fields")

        if self.repository.get_shop_by_email(fields["email"]):
            return DuplicateError("User already exists")

        uploaded = None
        if avatar:
            uploaded = self._upload_avatar(avatar)
            if isinstance(uploaded, ServiceError):
                return uploaded

        bundle = dict(fields, password_hash=hash_password(str(password)), avatar=uploaded)
        token = self.tokens.create_activation_token(bundle)
        url = activation_url(token, self.settings.frontend_base_url)
        try:
            self.mailer.send(
                recipient=fields["email"],
                subject=ACTIVATION_SUBJECT,
                message=f"Hello {fields['name']}, please click on the link to activate your shop: {url}",
            )
        except MailDeliveryError as exc:
            return ExternalServiceError(exc.message)
        logger.info("Activation email dispatched for a new shop")
        return RegistrationPending(email=fields["email"], activation_url=url)

    def activate(self, activation_token: Optional[str]) -> SellerSession | ServiceError:
        try:
            bundle = self.tokens.decode_activation_token(activation_token)
        except TokenInvalidError:
            return ValidationError("Invalid token or token expired")
        if any(not bundle.get(key) for key in _BUNDLE_KEYS):
            return ValidationError("Invalid token or token expired")

        if self.repository.get_shop_by_email(bundle["email"]):
            return DuplicateError("User already exists")
        try:
            shop = self.repository.create_shop(
                name=bundle["name"],
                email=bundle["email"],
                password_hash=bundle["password_hash"],
                address=bundle["address"],
                phone_number=bundle["phoneNumber"],
                zip_code=bundle["zipCode"],
                avatar=bundle.get("avatar"),
            )
        except EmailTakenError:
            return DuplicateError("User already exists")
        logger.info("Shop %s activated", shop.id)
        return self._start_session(shop)

    # -------------------------------------- login --------------------------------------
    def login(self, email: Any, password: Any) -> SellerSession | ServiceError:
        raw_email = _clean(email)
        if not raw_email or not password:
            return ValidationError("Please provide all fields!")
        shop = self.repository.get_shop_by_email(raw_email, with_password=True)
        if not shop:
            return ValidationError("User doesn't exist!")
        if not shop.compare_password(str(password)):
            return ValidationError("Incorrect password")
        return self._start_session(shop)

    # -------------------------------------- profile --------------------------------------
    def get_seller(self, ctx: SellerContext) -> Shop | ServiceError:
        shop = self.repository.get_shop(ctx.seller.id)
        if not shop:
            return ValidationError("User doesn't exist")
        return shop

    def get_shop_info(self, shop_id: str) -> Shop | ServiceError:
        shop = self.repository.get_shop(shop_id)
        if not shop:
            return NotFoundError("Shop not found")
        return shop

    def update_avatar(self, ctx: SellerContext, avatar: Any) -> Shop | ServiceError:
        if not avatar:
            return ValidationError("Please provide an avatar")
        shop = self.repository.get_shop(ctx.seller.id)
        if not shop:
            return NotFoundError("User not found")
        if shop.avatar_public_id:
            try:
                self.media.destroy(shop.avatar_public_id)
            except MediaHostError as exc:
                return ExternalServiceError(exc.message)
        uploaded = self._upload_avatar(avatar, width=AVATAR_WIDTH)
        if isinstance(uploaded, ServiceError):
            return uploaded
        updated = self.repository.update_shop(
            shop.id, avatar_public_id=uploaded["public_id"], avatar_url=uploaded["url"]
        )
        return updated or NotFoundError("User not found")

    def update_info(
        self,
        ctx: SellerContext,
        *,
        name: Any = None,
        description: Any = None,
        address: Any = None,
        phone_number: Any = None,
        zip_code: Any = None,
    ) -> Shop | ServiceError:
        shop = self.repository.get_shop(ctx.seller.id)
        if not shop:
            return NotFoundError("User not found")
        changes = {
            "name": name,
            "description": description,
            "address": address,
            "phone_number": phone_number,
            "zip_code": zip_code,
        }
        values = {field: _clean(value) for field, value in changes.items() if value is not None}
        for required in ("name", "address", "phone_number", "zip_code"):
            if required in values and not values[required]:
                return ValidationError("Please provide all required fields")
        if not values:
            return shop
        updated = self.repository.update_shop(shop.id, **values)
        return updated or NotFoundError("User not found")

    # -------------------------------------- admin --------------------------------------
    def list_sellers(self) -> list[Shop]:
        return self.repository.list_shops_newest_first()
