"""
Shared test fixtures and configuration for json_server tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from json_server import create_app
from json_server.config import Config
from json_server.storage.json_store import JsonStore


PEOPLE = [
    {"id": 1, "name": "Fitz", "age": 21},
    {"id": 2, "name": "Batman", "age": 25},
    {"id": 3, "name": "Joao", "age": 32},
    {"id": 4, "name": "Zé", "age": 21},
    {"id": 5, "name": "Beeh", "age": 23},
    {"id": 6, "name": "Foo", "age": 22},
    {"id": 7, "name": "John", "age": 18},
    {"id": 8, "name": "Zac", "age": 30},
    {"id": 9, "name": "Dee", "age": 45},
    {"id": 10, "name": "Mike", "age": 46},
    {"id": 11, "name": "Nikao", "age": 21},
    {"id": 12, "name": "Nilo", "age": 31},
    {"id": 13, "name": "Jade", "age": 37},
    {"id": 14, "name": "Jack", "age": 15},
    {"id": 15, "name": "Eminem", "age": 35},
    {"id": 16, "name": "Snoop", "age": 50},
    {"id": 17, "name": "Dre", "age": 35},
    {"id": 18, "name": "Lewa", "age": 33},
]


def sample_document() -> dict:
    return {
        "person": [dict(p) for p in PEOPLE],
        "profile": {"id": 1, "name": "typicode"},
        "motd": "Welcome",
    }


def write_document(path: Path, document) -> Path:
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def read_document(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    """A backing document with a record list, a singleton record and a scalar."""
    return write_document(tmp_path / "db.json", sample_document())


@pytest.fixture
def app(db_file: Path) -> Flask:
    """Create a test Flask application backed by a temporary document."""
    app = create_app(Config, overrides={
        "TESTING": True,
        "DB_FILE": str(db_file),
        "PORT": 8080,
    })
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a Flask CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture
def json_store(db_file: Path) -> JsonStore:
    """Create a JsonStore loaded from the temporary document."""
    return JsonStore.load(db_file)


@pytest.fixture
def people() -> list:
    """The records stored under "person" in the sample document."""
    return [dict(p) for p in PEOPLE]
