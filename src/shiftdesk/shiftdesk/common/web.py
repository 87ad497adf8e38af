"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    GeofenceError,
    NotFoundError,
    OutOfRange,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu gửi lên không hợp lệ")
    return data


def current_user_id() -> int:
    """Signed-in user id; the session is filled by the external auth layer."""

    user_id = session.get("user_id")
    if user_id is None:
        raise AuthenticationError("Vui lòng đăng nhập để tiếp tục!")
    return int(user_id)


def api_view(view):
    """Translate domain errors into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except OutOfRange as e:
            return json_error(str(e), 400, error="out_of_range", radius_meters=e.radius_meters)
        except GeofenceError as e:
            return json_error(str(e), 400, error="location_unavailable")
        except (ValidationError, DomainError) as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("unhandled error in %s", request.path)
            return json_error("Lỗi hệ thống", 500)

    return wrapper
