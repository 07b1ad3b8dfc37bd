from .pg_repositoryUser import UserRepository

__all__ = ["UserRepository"]
