from .pg_repositoryOrder import OrderRepository
from .pg_repositoryFile import FileRepository
from .pg_repositorySeller import SellerRepository
from .auth.pg_repositoryUser import UserRepository
from .minio_repository import MinioRepository

__all__ = [
    "OrderRepository",
    "FileRepository",
    "SellerRepository",
    "UserRepository",
    "MinioRepository",
]
