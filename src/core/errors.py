from __future__ import annotations


class CacheServiceError(Exception):
    """Base error for the cache server."""

    status = 500


class ValidationError(CacheServiceError):
    """Raised when user input or configuration is invalid."""

    status = 400


class NotFoundError(CacheServiceError):
    """Raised when a requested key is absent (expired, deleted or never written)."""

    status = 404


class StorageFullError(CacheServiceError):
    """Raised when the cache is at capacity and the policy rejects new entries."""

    status = 507


class StoreUnavailableError(CacheServiceError):
    """Raised when the store cannot be reached or the engine is not configured."""

    status = 500


class ExternalServiceError(CacheServiceError):
    """Raised when the store fails for a reason other than connectivity."""

    status = 502
