"""
EditMatch — Service error taxonomy.

Services raise these; the single handler registered in ``editmatch.main``
turns them into ``{"detail": ...}`` responses with ``status_code``.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for errors that carry an HTTP-style status code."""

    status_code: int = 500

    def __init__(self, detail: Any) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return str(self.detail)


class NotFoundError(ServiceError, LookupError):
    """A referenced project, user or profile does not exist."""

    status_code = 404


class ValidationFailedError(ServiceError, ValueError):
    """A precondition on stored or submitted data is not met."""

    status_code = 400


class ConflictError(ServiceError):
    """The selection being written is already recorded."""

    status_code = 409


class ForbiddenError(ServiceError):
    status_code = 403
