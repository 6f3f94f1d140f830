# app/routers/__init__.py

from .users.user_router import router as user_router


__all__ = [
"user_router",
]
