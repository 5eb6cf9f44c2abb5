"""Route registration helpers."""

from .diary import register_diary_routes

__all__ = [
    "register_diary_routes",
]
