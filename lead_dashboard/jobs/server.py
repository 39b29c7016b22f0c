"""HTTP entrypoint serving the lead dashboard and its JSON API."""

from __future__ import annotations

import io
import logging
import os
from datetime import timedelta
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, redirect, render_template, request, send_file, url_for

from lead_dashboard.core import auth
from lead_dashboard.core.config import ConfigError, get_settings
from lead_dashboard.etl.transform import to_suggestions
from lead_dashboard.export.formats import CONTENT_TYPES, ExportError, export_results
from lead_dashboard.jobs.search_leads import run_search_job
from lead_dashboard.search.aggregator import InvalidSearchError
from lead_dashboard.search.industries import INDUSTRY_LABELS
from lead_dashboard.vendors import google_places

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

MIN_AUTOCOMPLETE_LENGTH = 2

# ---------- App ----------
_settings = get_settings()
app = Flask(__name__)
app.config.update(
    SECRET_KEY=_settings.secret_key or os.urandom(32),
    PERMANENT_SESSION_LIFETIME=timedelta(hours=24),
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE="Lax",
    SESSION_COOKIE_SECURE=_settings.session_cookie_secure,
)
app.before_request(auth.gate_request)

# ---------- Pages ----------


@app.get("/")
def root() -> Any:
    return redirect(url_for("dashboard"))


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; only reads settings, never calls upstream."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "places_api_configured": bool(settings.google_maps_api_key),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/login")
def login_page() -> Any:
    return render_template("login.html")


@app.get("/dashboard")
def dashboard() -> Any:
    return render_template("dashboard.html", industries=INDUSTRY_LABELS)


# ---------- Auth API ----------


@app.post("/api/auth/login")
def login() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    if auth.check_credentials(payload.get("username"), payload.get("password"), get_settings()):
        auth.login_user()
        logger.info("User %s logged in", payload.get("username"))
        return jsonify({"success": True}), 200
    logger.warning("Rejected login attempt for user=%s", payload.get("username"))
    return jsonify({"error": "Invalid credentials"}), 401


@app.post("/api/auth/logout")
def logout() -> Any:
    auth.logout_user()
    return jsonify({"success": True}), 200


# ---------- Search API ----------


@app.post("/api/autocomplete")
def autocomplete() -> Any:
    api_key = get_settings().google_maps_api_key
    if not api_key:
        return jsonify({"error": "Google Maps API key not configured"}), 500

    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    text = payload.get("input")
    if not isinstance(text, str) or len(text) < MIN_AUTOCOMPLETE_LENGTH:
        return jsonify({"suggestions": []}), 200

    try:
        raw = google_places.autocomplete(text, api_key=api_key)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Autocomplete failed for input=%s: %s", text, exc)
        return jsonify({"suggestions": []}), 200

    return jsonify({"suggestions": to_suggestions(raw)}), 200


def _industry_keys(raw: Any) -> Optional[List[str]]:
    if not isinstance(raw, list):
        return None
    return [str(item) for item in raw if isinstance(item, str)] or None


@app.post("/api/search")
def search() -> Any:
    """
    Run the aggregated lead search.
    Required JSON fields: location
    Optional: industries (list of keys, empty = all), custom_query (str)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    try:
        leads = run_search_job(
            location=payload.get("location"),
            industries=_industry_keys(payload.get("industries")),
            custom_query=payload.get("custom_query"),
        )
    except ConfigError as exc:
        logger.error("Search misconfigured: %s", exc)
        return jsonify({"error": str(exc)}), 500
    except InvalidSearchError as exc:
        return jsonify({"error": str(exc)}), 400
    except Exception as exc:  # noqa: BLE001
        logger.exception("Search error: %s", exc)
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"results": [lead.to_dict() for lead in leads]}), 200


@app.post("/api/export/<fmt>")
def export(fmt: str) -> Any:
    if fmt not in CONTENT_TYPES:
        return jsonify({"error": f"unsupported export format: {fmt}"}), 404

    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    location = payload.get("location") if isinstance(payload.get("location"), str) else ""
    industries = _industry_keys(payload.get("industries")) or []
    results = payload.get("results") if isinstance(payload.get("results"), list) else []
    selected_ids = payload.get("selected_ids") if isinstance(payload.get("selected_ids"), list) else []

    try:
        data = export_results(
            fmt,
            results,
            selected_ids=selected_ids,
            location=location,
            industries=industries,
        )
    except ExportError as exc:
        return jsonify({"error": str(exc)}), 400

    return send_file(
        io.BytesIO(data),
        mimetype=CONTENT_TYPES[fmt],
        as_attachment=True,
        download_name=f"leads.{fmt}",
    )


def main() -> None:
    port = int(os.getenv("PORT") or _settings.port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
