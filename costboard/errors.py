"""Exception types shared by the ledgers, the persistence layer and the API."""

from __future__ import annotations


class CostboardError(Exception):
    """Base class for every error raised by costboard."""

    status_code = 500


class NotAuthenticatedError(CostboardError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class PersistenceError(CostboardError):
    status_code = 502


class ValidationError(CostboardError):
    status_code = 400


class RecordNotFoundError(CostboardError):
    status_code = 404
