from flask import Flask
from .config import Config
from .extensions import cors, init_store
from .errors import register_error_handlers
from .cli import register_commands

def create_app(config_class: type[Config] = Config, overrides: dict | None = None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])
    app.json.sort_keys = False

    # Extensions
    cors.init_app(app)

    # Backing document; a LoadFailure here aborts startup
    init_store(app)

    register_error_handlers(app)
    register_commands(app)

    # Blueprints
    from .routes.collections import bp as collections_bp

    app.register_blueprint(collections_bp)

    return app
