"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import undefer

from shop_api.core.utils import utcnow
from shop_api.db.models import Shop, User
from shop_api.db.session import database_for

SHOP_MUTABLE_FIELDS = {
    "name",
    "description",
    "address",
    "phone_number",
    "zip_code",
    "avatar_public_id",
    "avatar_url",
}


class EmailTakenError(Exception):
    """The unique email index rejected an insert (lost check-then-create race)."""


class ShopRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.db = database_for(database_url)

    # -------------------------- shops --------------------------
    def get_shop(self, shop_id: str) -> Optional[Shop]:
        if not shop_id:
            return None
        with self.db.session() as session:
            return session.get(Shop, shop_id)

    def get_shop_by_email(self, email: str, with_password: bool = False) -> Optional[Shop]:
        stmt = select(Shop).where(Shop.email == email)
        if with_password:
            stmt = stmt.options(undefer(Shop.password_hash))
        with self.db.session() as session:
            return session.execute(stmt).scalar_one_or_none()

    def create_shop(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        address: str,
        phone_number: str,
        zip_code: str,
        avatar: dict[str, Any] | None = None,
        description: str | None = None,
        created_at: datetime | None = None,
    ) -> Shop:
        avatar = avatar or {}
        entity = Shop(
            name=name,
            email=email,
            password_hash=password_hash,
            address=address,
            phone_number=phone_number,
            zip_code=zip_code,
            description=description,
            avatar_public_id=avatar.get("public_id"),
            avatar_url=avatar.get("url"),
            created_at=created_at or utcnow(),
        )
        with self.db.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise EmailTakenError(email) from exc
            session.refresh(entity)
            return entity

    def update_shop(self, shop_id: str, **values: Any) -> Optional[Shop]:
        unknown = set(values) - SHOP_MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown shop fields: {sorted(unknown)}")
        with self.db.session() as session:
            shop = session.get(Shop, shop_id)
            if not shop:
                return None
            for field, value in values.items():
                setattr(shop, field, value)
            session.commit()
            session.refresh(shop)
            return shop

    def list_shops_newest_first(self) -> list[Shop]:
        with self.db.session() as session:
            stmt = select(Shop).order_by(Shop.created_at.desc())
            return session.execute(stmt).scalars().all()

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with self.db.session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self.db.session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, *, name: str, email: str, password_hash: str, role: str = "user") -> User:
        entity = User(name=name, email=email, password_hash=password_hash, role=role, created_at=utcnow())
        with self.db.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise EmailTakenError(email) from exc
            session.refresh(entity)
            return entity
