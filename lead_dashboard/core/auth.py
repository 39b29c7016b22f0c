"""Session-flag authentication for the dashboard."""

import hmac
import logging
from typing import Any, Optional

from flask import jsonify, redirect, request, session, url_for

from lead_dashboard.core.config import Settings

logger = logging.getLogger(__name__)

SESSION_FLAG = "authenticated"
PROTECTED_PREFIXES = ("/dashboard", "/api/search", "/api/autocomplete", "/api/export")


def check_credentials(username: Any, password: Any, settings: Settings) -> bool:
    if not settings.auth_username or not settings.auth_password:
        return False
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    user_ok = hmac.compare_digest(username.encode(), settings.auth_username.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.auth_password.encode())
    return user_ok and password_ok


def is_authenticated() -> bool:
    return session.get(SESSION_FLAG) is True


def login_user() -> None:
    session.clear()
    session.permanent = True
    session[SESSION_FLAG] = True


def logout_user() -> None:
    session.clear()


def is_protected(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in PROTECTED_PREFIXES)


def gate_request() -> Optional[Any]:
    """``before_request`` hook: None lets the request through, anything else short-circuits it."""
    path = request.path
    authenticated = is_authenticated()

    if path == "/login" and authenticated:
        return redirect(url_for("dashboard"))

    if is_protected(path) and not authenticated:
        if path.startswith("/api/"):
            logger.info("Rejected unauthenticated API call to %s", path)
            return jsonify({"error": "Unauthorized"}), 401
        return redirect(url_for("login_page"))

    return None
