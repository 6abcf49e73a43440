"""Helpers for invalidating cached views."""

from flask import current_app

from app import cache

# Key layout used by ``cache.cached`` for views; ``%s`` is the request path.
VIEW_KEY_PREFIX = "view/%s"


def view_cache_key(path: str) -> str:
    return VIEW_KEY_PREFIX % path


def revalidate_path(path: str) -> None:
    """Drop the cached response for ``path`` so the next request recomputes it."""
    cache.delete(view_cache_key(path))
    current_app.logger.debug("Revalidated %s", path)
