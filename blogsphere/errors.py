# blogsphere/errors.py
from flask import jsonify
from werkzeug.exceptions import HTTPException

from blogsphere.extensions import db


class BlogError(Exception):
    """Error base de la aplicación. Cada subclase define su status HTTP."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"message": self.message}


class ValidationError(BlogError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors=None, message=None):
        # errors: lista de {"field": ..., "message": ...}
        if isinstance(errors, str):
            errors = [{"field": None, "message": errors}]
        self.errors = list(errors or [])
        if message is None and self.errors:
            message = self.errors[0]["message"]
        super().__init__(message)

    def to_dict(self):
        return {"success": False, "message": self.message, "errors": self.errors}


class AuthError(BlogError):
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(BlogError):
    status_code = 403
    default_message = "Not authorized"


class NotFoundError(BlogError):
    status_code = 404
    default_message = "Resource not found"


class ServerError(BlogError):
    status_code = 500


def register_error_handlers(app):
    """Convierte las excepciones en el sobre JSON {message} / {success, errors}."""

    @app.errorhandler(BlogError)
    def handle_blog_error(err):
        if isinstance(err, ServerError):
            db.session.rollback()
            app.logger.error("Server error: %s", err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", err)
        return jsonify({"message": ServerError.default_message}), 500
