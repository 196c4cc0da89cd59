"""PaceLink backend client — all Supabase network I/O lives here."""

from pacelink_client.client import PaceLinkClient, SavedWorkout
from pacelink_client.exceptions import (
    AuthExpiredError,
    ConfigurationError,
    ConstraintMismatchError,
    ExecutionRefusedError,
    PaceLinkAuthError,
    PaceLinkClientError,
    PersistenceError,
    RateLimitError,
    SlugGenerationError,
    UniquenessConflictError,
)
from pacelink_client.persistence import SaveCandidates

__all__ = [
    "PaceLinkClient",
    "SavedWorkout",
    "SaveCandidates",
    "AuthExpiredError",
    "ConfigurationError",
    "ConstraintMismatchError",
    "ExecutionRefusedError",
    "PaceLinkAuthError",
    "PaceLinkClientError",
    "PersistenceError",
    "RateLimitError",
    "SlugGenerationError",
    "UniquenessConflictError",
]
