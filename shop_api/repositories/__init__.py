"""
Persistence adapters.

Services depend on these repositories instead of opening SQLAlchemy sessions.
"""

from .shop_repository import EmailTakenError, ShopRepository

__all__ = ["EmailTakenError", "ShopRepository"]
