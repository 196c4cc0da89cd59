"""Share-slug generation.

A slug is the short public identifier in a workout's share link
(``.../w/<slug>``). Uniqueness is enforced by the backend; this module
only draws candidates and retries on collisions.
"""

from __future__ import annotations

import logging
import random
import secrets
import string
import time
from typing import Any, Callable

from pacelink_client.exceptions import SlugGenerationError, UniquenessConflictError

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_LENGTH = 12
MAX_SLUG_ATTEMPTS = 8


def generate_slug(length: int = SLUG_LENGTH) -> str:
    """Random lowercase-alphanumeric slug of *length* characters."""
    try:
        return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))
    except NotImplementedError:
        # No OS randomness source
        return _weak_slug(length)


def _weak_slug(length: int) -> str:
    mixed = _base36(time.time_ns()) + _base36(random.getrandbits(64))
    return mixed[-length:].rjust(length, "0")


def _base36(n: int) -> str:
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(SLUG_ALPHABET[26 + rem] if rem < 10 else SLUG_ALPHABET[rem - 10])
    return "".join(reversed(digits)) or "0"


def generate_unique_slug(
    persist: Callable[[str], Any],
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> str:
    """Persist fresh slugs until one is accepted; return it.

    *persist* raises ``UniquenessConflictError`` on a collision, which
    triggers another candidate. Any other exception propagates.

    Raises:
        SlugGenerationError: After *max_attempts* collisions.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_slug()
        try:
            persist(candidate)
        except UniquenessConflictError:
            logger.warning(
                "Share slug collision (attempt %d/%d)", attempt, max_attempts
            )
            continue
        return candidate

    raise SlugGenerationError(
        f"Could not generate a unique share slug after {max_attempts} attempts"
    )
