"""HTTP routes for Statform."""

from .pages import router as pages_router

__all__ = ["pages_router"]
