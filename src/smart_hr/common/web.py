from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import g, jsonify, request, session

from ..core.outcome import Failure, Outcome
from ..users.repository import IdentityRepository
from ..users.session import SessionContext
from .datetime_utils import parse_iso_date

SESSION_KEY = "employee_id"

_STATUS = {
    Failure.AUTH_NOT_FOUND: 401,
    Failure.AUTH_MISMATCH: 401,
    Failure.FORBIDDEN: 403,
    Failure.NOT_FOUND: 404,
    Failure.DUPLICATE_USERNAME: 409,
    Failure.ALREADY_OPEN: 409,
    Failure.NO_OPEN_SESSION: 409,
    Failure.MISSING_FIELDS: 400,
    Failure.PASSWORD_REQUIRED: 400,
    Failure.INVALID_RATE: 400,
    Failure.ADMIN_PROTECTED: 403,
}


def load_session_context(identities: IdentityRepository) -> SessionContext:
    """Rebuild the caller's SessionContext from the signed cookie, once per request."""
    ctx = getattr(g, "session_ctx", None)
    if ctx is not None:
        return ctx

    ctx = SessionContext()
    employee_id = session.get(SESSION_KEY)
    if employee_id is not None:
        identity = identities.get_by_id(int(employee_id))
        if identity:
            ctx.login(identity)
        else:
            # Identity was deleted while logged in.
            session.pop(SESSION_KEY, None)
    g.session_ctx = ctx
    return ctx


def error_response(message: str, status: int, code: str = "error"):
    return jsonify({"error": code, "message": message}), status


def failure_response(outcome: Outcome):
    failure = outcome.failure
    return error_response(failure.message, _STATUS.get(failure, 400), failure.value)


def login_required(identities: IdentityRepository):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not load_session_context(identities).is_authenticated:
                return error_response("Please log in to continue", 401, "unauthenticated")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(identities: IdentityRepository):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = load_session_context(identities)
            if not ctx.is_authenticated:
                return error_response("Please log in to continue", 401, "unauthenticated")
            if not ctx.is_admin():
                return failure_response(Outcome.fail(Failure.FORBIDDEN))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def date_arg(name: str, default: Optional[date] = None) -> Optional[date]:
    """Read a YYYY-MM-DD query argument; raises ValueError when malformed."""
    raw = request.args.get(name)
    if not raw:
        return default
    return parse_iso_date(raw)
