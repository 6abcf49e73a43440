"""Errors raised by the invoice actions and mapped to JSON responses."""

from __future__ import annotations

from typing import Dict, List, Optional


class InvoiceActionError(Exception):
    """Base class for a request-scoped failure of an invoice action."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, object]:
        return {"message": self.message}


class InvoiceValidationError(InvoiceActionError):
    """Raised when submitted form data fails validation.

    The database is never touched when this is raised.
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})

    def to_dict(self) -> Dict[str, object]:
        return {"errors": self.errors, "message": self.message}


class InvoiceDatabaseError(InvoiceActionError):
    """Raised when an invoice statement fails. Only a generic message is kept."""
