import asyncio
import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio
from folio.core.logging_service import LoggingService
from folio.modules.auth import create_user

ADMIN_EMAIL = "owner@example.com"
PASSWORD = "correct-horse"


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with every Folio module registered."""
    app = Flask(__name__, static_folder=os.path.join(tmp_db_dir, "static"))
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["FOLIO_DB"] = os.path.join(tmp_db_dir, "folio.db")
    app.config["LOGS_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["STORAGE_TYPE"] = "local"
    app.config["ADMIN_ROLE"] = "admin"
    app.config["CORS_ORIGINS"] = ["http://localhost:3000"]
    Folio(app)
    yield app
    LoggingService.db_path = None


@pytest.fixture
def folio(app):
    return app.extensions["folio"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(folio):
    """Insert a user holding *roles*."""
    def _make(email, roles=("admin",)):
        return asyncio.run(create_user(folio.data, email, PASSWORD, roles=roles))
    return _make


def log_in(client, email):
    return client.post("/admin/login", json={"email": email, "password": PASSWORD})


@pytest.fixture
def admin_client(make_user, client):
    """Test client signed in as a user holding the admin role."""
    make_user(ADMIN_EMAIL)
    assert log_in(client, ADMIN_EMAIL).status_code == 200
    return client


@pytest.fixture
def visitor_client(make_user, client):
    """Test client signed in as a user without any role."""
    make_user("visitor@example.com", roles=())
    assert log_in(client, "visitor@example.com").status_code == 200
    return client
