"""Environment-variable-based configuration for the backend client."""

from __future__ import annotations

import os


def _split(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY: str = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY: str = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Accepted ``status`` spellings, tried in order until the backend accepts one
DRAFT_STATUSES: tuple[str, ...] = _split(
    os.environ.get("PACELINK_DRAFT_STATUSES", "draft,rascunho,DRAFT,RASCUNHO")
)
READY_STATUSES: tuple[str, ...] = _split(os.environ.get("PACELINK_READY_STATUSES", "ready"))

# Base URL of the public workout page; the share slug is appended
PUBLIC_BASE_URL: str = os.environ.get("PACELINK_PUBLIC_URL", "http://localhost:3000/w")

# Zone that defines "today" for week bucketing and share titles
TIMEZONE: str = os.environ.get("PACELINK_TIMEZONE", "America/Sao_Paulo")
