"""Identity domain API package."""

from identity.api.routes import profile_router

__all__ = ["profile_router"]
