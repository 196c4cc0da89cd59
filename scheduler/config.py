"""Environment-variable-based configuration for the nightly scheduler."""

from __future__ import annotations

import os

SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY: str = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "3"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
WEEKS_AHEAD: int = int(os.environ.get("PACELINK_WEEKS_AHEAD", "8"))
TIMEZONE: str = os.environ.get("PACELINK_TIMEZONE", "America/Sao_Paulo")
