# blogsphere/auth/decorators.py
from functools import wraps

from flask import request, g

from blogsphere.errors import AuthError
from blogsphere.services import auth_service
from blogsphere.utils.logging import get_logger

logger = get_logger("auth")


def bearer_token():
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip()
    return None


def load_user():
    """Carga g.current_user desde el header Authorization, si viene.

    Un token inválido no corta la request acá: deja g.auth_error para que
    login_required responda 401 con el motivo.
    """
    g.current_user = None
    g.auth_error = None

    token = bearer_token()
    if not token:
        return
    try:
        g.current_user = auth_service.authorize(token)
    except AuthError as e:
        logger.warning("Rejected bearer token: %s", e.message)
        g.auth_error = e


def login_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        if not getattr(g, "current_user", None):
            raise getattr(g, "auth_error", None) or AuthError("Authentication required")
        return f(*args, **kwargs)
    return decorated
