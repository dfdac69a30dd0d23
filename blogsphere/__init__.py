# blogsphere/__init__.py
import click
from flask import Flask

from blogsphere.auth.decorators import load_user
from blogsphere.config import Config
from blogsphere.errors import register_error_handlers
from blogsphere.extensions import db, migrate, cors
from blogsphere.routes import register_routes  # <- usar el init de routes
from blogsphere.utils.logging import configure_logging


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Crea las tablas que falten (para desarrollo; en producción usar flask db upgrade)."""
        db.create_all()
        click.echo("Database initialized")

    @app.cli.command("seed-categories")
    @click.argument("names", nargs=-1, required=True)
    def seed_categories(names):
        """Crea las categorías indicadas si todavía no existen."""
        from blogsphere.errors import ValidationError
        from blogsphere.services import category_service

        for name in names:
            try:
                category = category_service.create_category({"name": name})
                click.echo(f"Created category {category.name} ({category.slug})")
            except ValidationError as e:
                click.echo(f"Skipped {name}: {e.message}")


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    app.logger.setLevel(app.config["LOG_LEVEL"])
    configure_logging(app.config["LOG_LEVEL"])

    # Inicializar extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(
        app,
        resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"]
    )

    # Registrar blueprints centralizado
    register_routes(app)
    register_error_handlers(app)
    register_commands(app)

    @app.before_request
    def before_request():
        load_user()

    return app
