"""Supabase authentication helpers.

Wraps supabase-py's ``auth`` namespace with the pacelink_client error
hierarchy. Coach sessions use the anon key; the scheduler and the invite
flow use the service-role key.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from pacelink_client.exceptions import (
    AuthExpiredError,
    ConfigurationError,
    PaceLinkAuthError,
)

logger = logging.getLogger(__name__)


def create_session(url: str, key: str) -> Client:
    """Create a Supabase client.

    Parameters
    ----------
    url : str
        Project URL (``SUPABASE_URL``).
    key : str
        Anon or service-role key.

    Returns
    -------
    Client
        Unauthenticated client; call :func:`sign_in` for a coach session.
    """
    if not url or not key:
        raise ConfigurationError(
            "Supabase is not configured: set SUPABASE_URL and SUPABASE_ANON_KEY"
        )
    try:
        return create_client(url, key)
    except Exception as exc:
        raise ConfigurationError(f"Could not create Supabase client: {exc}") from exc


def sign_in(client: Client, email: str, password: str) -> Any:
    """Sign in with email + password. Returns the signed-in user."""
    try:
        response = client.auth.sign_in_with_password(
            {"email": email.strip(), "password": password}
        )
    except Exception as exc:
        raise PaceLinkAuthError(f"Login failed: {exc}") from exc

    user = getattr(response, "user", None)
    if user is None:
        raise PaceLinkAuthError("Login failed: no user returned")
    logger.info("Signed in user %s", getattr(user, "id", "?"))
    return user


def sign_out(client: Client) -> None:
    try:
        client.auth.sign_out()
    except Exception as exc:
        raise PaceLinkAuthError(f"Sign-out failed: {exc}") from exc
    logger.info("Signed out")


def current_user(client: Client) -> Any:
    """Return the signed-in user.

    Raises ``AuthExpiredError`` if there is no session or it has expired.
    """
    try:
        response = client.auth.get_user()
    except Exception as exc:
        raise AuthExpiredError(f"Session expired: {exc}") from exc

    user = getattr(response, "user", None) if response is not None else None
    if user is None:
        raise AuthExpiredError("Not signed in")
    return user


def is_authenticated(client: Client) -> bool:
    """Return True if *client* holds a valid session."""
    try:
        current_user(client)
        return True
    except AuthExpiredError:
        return False


def invite_user(client: Client, email: str, redirect_to: Optional[str] = None) -> Any:
    """Send a portal invite e-mail to a student. Requires the service-role key.

    Returns the invited user (its id is linked to the ``students`` row).
    """
    options = {"redirect_to": redirect_to} if redirect_to else {}
    try:
        response = client.auth.admin.invite_user_by_email(email.strip(), options)
    except Exception as exc:
        raise PaceLinkAuthError(f"Invite failed: {exc}") from exc
    logger.info("Invited %s", email)
    return getattr(response, "user", None)


def reset_password(client: Client, email: str, redirect_to: Optional[str] = None) -> None:
    """Send a password-reset e-mail."""
    options = {"redirect_to": redirect_to} if redirect_to else {}
    try:
        client.auth.reset_password_for_email(email.strip(), options)
    except Exception as exc:
        raise PaceLinkAuthError(f"Password reset failed: {exc}") from exc
    logger.info("Password reset requested for %s", email)
