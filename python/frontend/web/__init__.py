"""Flask web frontend: renders one puzzle state and links to the next pour."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Flask

from backend.engine.gamegenerator.generator import DEFAULT_BOTTLE_SIZE, DEFAULT_COLORS


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    """Flask application factory."""
    app = Flask(__name__,
                template_folder="templates",
                static_folder="static")

    app.config.update(
        WATERSORT_COLORS=DEFAULT_COLORS,
        WATERSORT_BOTTLE_SIZE=DEFAULT_BOTTLE_SIZE,
        WATERSORT_SEED=None,
    )
    if config:
        app.config.update(config)
    if app.config["WATERSORT_COLORS"] < 2 or app.config["WATERSORT_BOTTLE_SIZE"] < 2:
        raise ValueError("WATERSORT_COLORS and WATERSORT_BOTTLE_SIZE must be at least 2")

    # Register blueprints
    from frontend.web.routes import main_bp
    app.register_blueprint(main_bp)

    return app
