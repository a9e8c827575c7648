import os

# the module-level app in app.py must not pick up a developer database
os.environ.pop("DATABASE_URI", None)

import pytest

from app import create_app
from config import Settings


SAMPLE = {
    "power": 1000,
    "hoursPerDay": 5,
    "daysPerMonth": 30,
    "monthsPerYear": 12,
    "costPerKwh": 0.2,
}


def make_settings(database_uri=None):
    s = Settings()
    s.DATABASE_URI = database_uri
    s.LOG_LEVEL = "DEBUG"
    return s


@pytest.fixture
def sample():
    return dict(SAMPLE)


@pytest.fixture
def db_app(tmp_path):
    app = create_app(make_settings(f"sqlite:///{tmp_path / 'simulations.db'}"))
    app.testing = True
    return app


@pytest.fixture
def bare_app():
    app = create_app(make_settings(None))
    app.testing = True
    return app


@pytest.fixture
def db_client(db_app):
    return db_app.test_client()


@pytest.fixture
def bare_client(bare_app):
    return bare_app.test_client()
