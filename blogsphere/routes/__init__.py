# blogsphere/routes/__init__.py
from flask import Flask, request

from blogsphere.errors import ValidationError


def request_data():
    """Cuerpo de la request como dict: JSON o formulario (multipart)."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data
    return request.form.to_dict()


def register_routes(app: Flask):
    """
    Registrar todos los blueprints de la carpeta routes.
    Llamá a register_routes(app) desde blogsphere.create_app().
    """
    # Import local para evitar problemas de import circular al inicializar la app
    from .post_routes import post_bp
    from .category_routes import category_bp
    from .auth import auth_bp
    from .upload_routes import upload_bp
    app.register_blueprint(post_bp, url_prefix="/posts")
    app.register_blueprint(category_bp, url_prefix="/categories")
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(upload_bp, url_prefix="/")
