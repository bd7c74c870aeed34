"""API routes for specs."""

from . import specs

__all__ = ["specs"]
