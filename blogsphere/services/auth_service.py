"""Registro, login y verificación de tokens bearer (JWT HS256)."""

from datetime import timedelta

import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from blogsphere.errors import AuthError, ValidationError
from blogsphere.extensions import db
from blogsphere.models import User
from blogsphere.models.base import utcnow
from blogsphere.utils.logging import get_logger
from blogsphere.utils.validation import FieldErrors, clean_text, is_valid_email

logger = get_logger("auth")

ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email):
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def get_user_by_email(email):
    return User.query.filter_by(email=normalize_email(email)).first()


def register(name, email, password):
    errors = FieldErrors()
    data = {"name": name, "email": email, "password": password}
    name = clean_text(data, "name", errors, required=True, max_length=50,
                      message="Name is required and must be less than 50 characters")
    email = normalize_email(email)
    if not is_valid_email(email):
        errors.add("email", "Please provide a valid email")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.add("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    errors.raise_if_any()

    if get_user_by_email(email):
        raise ValidationError([{"field": "email", "message": "Email already registered"}])

    user = User(name=name, email=email)
    user.set_password(password)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # otro registro con el mismo email ganó la carrera
        db.session.rollback()
        raise ValidationError([{"field": "email", "message": "Email already registered"}])

    logger.info("Registered user %s", user.id)
    return user


def create_access_token(user):
    now = utcnow()
    payload = {
        "sub": str(user.id),
        "name": user.name,
        "iat": now,
        "exp": now + timedelta(hours=current_app.config["JWT_EXPIRES_HOURS"]),
    }
    return jwt.encode(payload, current_app.config["JWT_SECRET_KEY"], algorithm=ALGORITHM)


def login(email, password):
    # email o password que no son texto valen como credenciales inválidas
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise AuthError(INVALID_CREDENTIALS)

    user = get_user_by_email(email)
    # mismo mensaje para email desconocido y contraseña incorrecta
    if not user or not user.check_password(password):
        logger.warning("Failed login for %s", normalize_email(email))
        raise AuthError(INVALID_CREDENTIALS)

    return create_access_token(user), user


def authorize(token):
    """Verifica firma y expiración del token y devuelve el usuario. Sin efectos secundarios."""
    if not token:
        raise AuthError("Token required")
    try:
        payload = jwt.decode(token, current_app.config["JWT_SECRET_KEY"], algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthError("Invalid token")

    user = db.session.get(User, user_id)
    if not user:
        raise AuthError("Invalid token")
    return user
