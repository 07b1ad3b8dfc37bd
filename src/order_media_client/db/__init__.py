from .base import Base, get_session
from .orders import OrderORM, FileORM, DEFAULT_ORDER_STATUS
from .users import AuthUserORM, SellerORM

__all__ = [
    "Base", "get_session",
    "OrderORM", "FileORM", "DEFAULT_ORDER_STATUS",
    "AuthUserORM", "SellerORM",
]
