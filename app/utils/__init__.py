"""Utility functions for the invoice application."""

from .activity import log_activity
from .cache import revalidate_path
from .numeric import coerce_amount, to_cents

__all__ = [
    "log_activity",
    "revalidate_path",
    "coerce_amount",
    "to_cents",
]
