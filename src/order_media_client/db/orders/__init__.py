from .order_orm import OrderORM, DEFAULT_ORDER_STATUS
from .file_orm import FileORM

__all__ = ["OrderORM", "FileORM", "DEFAULT_ORDER_STATUS"]
