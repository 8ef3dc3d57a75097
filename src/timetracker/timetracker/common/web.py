from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, jsonify, session

from ..core.exceptions import AuthBackendError, AuthenticationError, AuthorizationError, DomainError

logger = logging.getLogger(__name__)


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def handle_errors(action: str):
    """Turn domain errors into JSON failures; anything else becomes a 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except AuthenticationError as e:
                return fail(str(e), 401)
            except AuthorizationError as e:
                return fail(str(e), 403)
            except AuthBackendError as e:
                return fail(str(e), 502)
            except DomainError as e:
                return fail(str(e), 400)
            except Exception as e:
                logger.exception("Unhandled error while %s", action)
                if current_app.config.get("DEBUG"):
                    return fail(f"System error while {action}: {e}", 500)
                return fail(f"System error while {action}", 500)

        return wrapper

    return decorator
