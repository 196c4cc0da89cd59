"""Custom exception hierarchy for the PaceLink backend client."""

from __future__ import annotations


class PaceLinkClientError(Exception):
    """Base exception for all pacelink_client errors."""


class ConfigurationError(PaceLinkClientError):
    """Backend URL or key missing from the environment."""


class PaceLinkAuthError(PaceLinkClientError):
    """Authentication failed (bad credentials, invite rejected, etc.)."""


class AuthExpiredError(PaceLinkAuthError):
    """No signed-in user, or the session has expired."""


class PersistenceError(PaceLinkClientError):
    """A backend read or write failed."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ConstraintMismatchError(PersistenceError):
    """A write was rejected because ``status`` / ``template_type`` is not an accepted value."""


class UniquenessConflictError(PersistenceError):
    """Unique-constraint violation (Postgres 23505), e.g. a share-slug collision."""


class RateLimitError(PersistenceError):
    """HTTP 429 — too many requests."""

    def __init__(self, message: str = "Rate limited by the backend") -> None:
        super().__init__(message, code="429")


class ExecutionRefusedError(PersistenceError):
    """The workout cannot be started or completed in its current state."""


class SlugGenerationError(PaceLinkClientError):
    """No unique share slug could be persisted within the attempt bound."""
