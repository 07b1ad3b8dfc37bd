from .users import AuthUserORM
from .sellers import SellerORM

__all__ = ["AuthUserORM", "SellerORM"]
