from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, jsonify, request, session

from ..core.exceptions import AuthorizationError, ValidationError
from .model import User
from .service import IdentityService


def session_user(identity: IdentityService) -> Optional[User]:
    """The stored session snapshot, only when this client is the one that logged in."""
    user_id = session.get("user_id")
    if not user_id:
        return None
    user = identity.current_user()
    if not user or user.id != user_id:
        return None
    return user


def login_required(identity: IdentityService):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user(identity)
            if not user:
                return jsonify(error="Please log in to continue"), 401
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(identity: IdentityService):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user(identity)
            if not user:
                return jsonify(error="Please log in to continue"), 401
            if not user.is_admin:
                raise AuthorizationError("Admin access required")
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def ensure_self_or_admin(user: User, user_id: str) -> None:
    if not user.is_admin and user.id != user_id:
        raise AuthorizationError("You can only access your own records")


def json_object_body() -> dict:
    """Request JSON body as a dict. A missing body counts as empty."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
