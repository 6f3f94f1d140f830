from app.repositories.user_repository import UserRepository
from app.repositories.log_repository import LogRepository

__all__ = ["UserRepository", "LogRepository"]
