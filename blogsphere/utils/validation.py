# blogsphere/utils/validation.py
import re

from blogsphere.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off", ""}


class FieldErrors:
    """Acumula errores por campo y los lanza juntos como ValidationError."""

    def __init__(self):
        self.errors = []

    def add(self, field, message):
        self.errors.append({"field": field, "message": message})

    def raise_if_any(self):
        if self.errors:
            raise ValidationError(self.errors)


def clean_text(data, field, errors, *, required=False, min_length=0, max_length=None, message=None):
    """Valida un campo de texto; devuelve el valor con trim o None si no vino."""
    value = data.get(field)
    if value is None:
        if required:
            errors.add(field, message or f"{field} is required")
        return None
    if not isinstance(value, str):
        errors.add(field, message or f"{field} must be a string")
        return None
    value = value.strip()
    if len(value) < max(min_length, 1 if required else 0):
        errors.add(field, message or f"{field} is required")
        return None
    if max_length is not None and len(value) > max_length:
        errors.add(field, message or f"{field} must be at most {max_length} characters")
        return None
    return value


def parse_bool(data, field, errors, default=None):
    value = data.get(field)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in TRUE_VALUES | FALSE_VALUES:
        return value.strip().lower() in TRUE_VALUES
    errors.add(field, f"{field} must be a boolean")
    return default


def parse_int(value, field, default=None):
    """Convierte parámetros de query a int; lanza ValidationError si no es entero."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError([{"field": field, "message": f"{field} must be an integer"}])
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError([{"field": field, "message": f"{field} must be an integer"}])


def is_valid_email(value):
    return bool(value) and EMAIL_RE.match(value) is not None
