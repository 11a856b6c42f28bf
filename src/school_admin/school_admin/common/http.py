"""JSON envelope shared by every API controller.

Success: ``{"success": true, "data": ...}``
Failure: ``{"success": false, "message": ...}``
"""

from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger

logger = get_logger(__name__)


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return data


def api_errors(action: str):
    """Map domain errors of a view to the JSON envelope.

    ``action`` names the operation in the log line and in the generic
    message returned for unexpected failures.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return fail(str(e), 400)
            except NotFoundError as e:
                return fail(str(e), 404)
            except Exception:
                logger.exception("Unexpected error while trying to %s", action)
                return fail(f"Erro ao {action}. Tente novamente.", 500)

        return wrapper

    return decorator
