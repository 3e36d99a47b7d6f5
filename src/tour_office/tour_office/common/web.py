"""Helpers shared by the JSON controllers.

Every controller attaches its routes in ``register(app, container)``; the
decorators below read the login state that ``users.controller`` writes into
the Flask session (``user_id``, ``name``, ``role``).
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import Response, current_app, jsonify, make_response, request, send_file, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..exports.printable import render_printable
from ..exports.spreadsheet import XLSX_MIMETYPE, rows_to_csv, rows_to_xlsx

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Lütfen giriş yapın", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Lütfen giriş yapın", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Bu işlem için yetkiniz yok", 403)
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    return Role(session.get("role", Role.STAFF.value))


def handle_errors(view):
    """Map domain errors to JSON responses; anything else becomes a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            for error_cls, status in _STATUS_BY_ERROR:
                if isinstance(e, error_cls):
                    return error_response(str(e), status)
            return error_response(str(e), 400)
        except Exception:
            current_app.logger.exception("Unhandled error in %s", request.path)
            return error_response("Sunucu hatası, lütfen tekrar deneyin", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Geçersiz istek gövdesi")
    return data


def optional_int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Geçersiz {name}: {raw!r}")


def export_rows(rows: list[dict[str, Any]], *, title: str, filename: str, json_payload: Any = None):
    """Render rows according to ``?format=`` (json by default, or xlsx|csv|html)."""

    fmt = (request.args.get("format") or "json").lower()
    if fmt == "xlsx":
        buf = rows_to_xlsx(rows, sheet_name=title[:31])
        return send_file(buf, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=f"{filename}.xlsx")
    if fmt == "csv":
        resp: Response = make_response(rows_to_csv(rows))
        resp.headers["Content-Type"] = "text/csv; charset=utf-8"
        resp.headers["Content-Disposition"] = f"attachment; filename={filename}.csv"
        return resp
    if fmt == "html":
        resp = make_response(render_printable(title, rows))
        resp.headers["Content-Type"] = "text/html; charset=utf-8"
        return resp
    if fmt != "json":
        raise ValidationError(f"Geçersiz format: {fmt!r}")
    return jsonify(json_payload if json_payload is not None else rows)
