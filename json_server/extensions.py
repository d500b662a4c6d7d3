# json_server/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage.json_store import JsonStore

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

STORE_KEY = "json_store"


def init_store(app) -> JsonStore:
    """Load the backing document named by DB_FILE and attach the store to the app."""
    store = JsonStore.load(app.config["DB_FILE"], minified=app.config["DB_MINIFIED"])
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> JsonStore:
    return current_app.extensions[STORE_KEY]
