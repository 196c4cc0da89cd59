"""Tests for share-slug generation and the bounded uniqueness retry."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from pacelink_client.exceptions import (
    PersistenceError,
    SlugGenerationError,
    UniquenessConflictError,
)
from pacelink_client.slugs import (
    SLUG_ALPHABET,
    _base36,
    generate_slug,
    generate_unique_slug,
)


class TestGenerateSlug:
    def test_default_length_and_alphabet(self) -> None:
        slug = generate_slug()
        assert len(slug) == 12
        assert set(slug) <= set(SLUG_ALPHABET)

    def test_custom_length(self) -> None:
        assert len(generate_slug(20)) == 20

    def test_slugs_differ(self) -> None:
        assert len({generate_slug() for _ in range(50)}) == 50

    def test_falls_back_without_os_randomness(self) -> None:
        with patch("pacelink_client.slugs.secrets.choice", side_effect=NotImplementedError):
            slug = generate_slug()
        assert len(slug) == 12
        assert set(slug) <= set(SLUG_ALPHABET)

    def test_base36(self) -> None:
        assert _base36(0) == "0"
        assert _base36(35) == "z"
        assert _base36(36) == "10"


class TestGenerateUniqueSlug:
    def test_returns_persisted_candidate(self) -> None:
        seen = []
        slug = generate_unique_slug(seen.append)
        assert seen == [slug]

    def test_retries_on_conflict(self) -> None:
        seen = []

        def persist(candidate):
            seen.append(candidate)
            if len(seen) < 3:
                raise UniquenessConflictError("duplicate key", "23505")

        slug = generate_unique_slug(persist)
        assert len(seen) == 3
        assert slug == seen[-1]

    def test_gives_up_after_eight_attempts(self) -> None:
        seen = []

        def persist(candidate):
            seen.append(candidate)
            raise UniquenessConflictError("duplicate key", "23505")

        with pytest.raises(SlugGenerationError):
            generate_unique_slug(persist)
        assert len(seen) == 8

    def test_other_errors_propagate(self) -> None:
        seen = []

        def persist(candidate):
            seen.append(candidate)
            raise PersistenceError("network down")

        with pytest.raises(PersistenceError, match="network down"):
            generate_unique_slug(persist)
        assert len(seen) == 1
