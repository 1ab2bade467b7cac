"""Default collaborator implementations."""

from .user_provider import InMemoryUserDirectory

__all__ = ["InMemoryUserDirectory"]
