"""SQLAlchemy models for seller shops and buyer/admin users."""
from __future__ import annotations

import secrets

from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.orm import deferred

from shop_api.core.security import verify_password

from .session import Base


def new_object_id() -> str:
    return secrets.token_hex(12)


class Shop(Base):
    __tablename__ = "shops"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # only loaded on the login path (undefer)
    password_hash = deferred(Column(Text, nullable=False))
    description = Column(Text, nullable=True)
    address = Column(String(512), nullable=False)
    phone_number = Column(String(64), nullable=False)
    zip_code = Column(String(32), nullable=False)
    avatar_public_id = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    role = Column(String(32), default="Seller", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def compare_password(self, candidate: str) -> bool:
        return verify_password(candidate, self.password_hash)

    def to_dict(self) -> dict:
        avatar = None
        if self.avatar_public_id or self.avatar_url:
            avatar = {"public_id": self.avatar_public_id, "url": self.avatar_url}
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "description": self.description,
            "address": self.address,
            "phoneNumber": self.phone_number,
            "zipCode": self.zip_code,
            "avatar": avatar,
            "role": self.role,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = deferred(Column(Text, nullable=False))
    role = Column(String(32), default="user", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
