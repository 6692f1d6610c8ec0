import click
from flask import Flask
from config import config
from catalog.extensions import db, migrate


def create_app(config_name=None):
    if config_name is None:
        import os

        config_name = os.environ.get("FLASK_CONFIG", "default")

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config["LOG_LEVEL"])
    app.json.sort_keys = False

    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can detect them
    from catalog import models  # noqa: F401

    from catalog.routes import register_blueprints

    register_blueprints(app)

    @app.cli.command("seed")
    def seed_command():
        """Seed the default category tree and sample books."""
        from catalog.services.seed_service import seed_all

        result = seed_all()
        click.echo(
            f"Seeded {result['categories']} categories and {result['books']} books."
        )

    return app
