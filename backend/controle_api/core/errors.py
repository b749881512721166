"""Erros da API e conversão para o envelope JSON {success: false, error, details}."""
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError


class ApiError(Exception):
    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, **extra: Any):
        super().__init__(error)
        self.error = error
        self.details = details
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class ConnectivityError(ApiError):
    status_code = 500


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class QueryError(ApiError):
    status_code = 500


def is_unique_violation(exc: Exception) -> bool:
    """MySQL: "Duplicate entry", PostgreSQL: "duplicate key", SQLite: "UNIQUE constraint failed"."""
    if not isinstance(exc, IntegrityError):
        return False
    msg = str(exc.orig if exc.orig is not None else exc).lower()
    return "duplicate" in msg or "unique" in msg
