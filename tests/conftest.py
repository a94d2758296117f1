"""Shared fixtures: an app on in-memory SQLite and helpers to create accounts."""
import pytest

from api import create_app
from models import storage
from models.account_store import AccountStore
from utils.security import hash_password

PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Welcome to Chirpy</h1>")
    app = create_app("test")
    app.config["STATIC_ROOT"] = str(tmp_path)
    yield app
    storage.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def issuer(app):
    return app.extensions["session_issuer"]


@pytest.fixture
def db():
    """Storage on a fresh in-memory database, without the Flask app."""
    storage.configure("sqlite://")
    storage.reload()
    yield storage
    storage.close()


@pytest.fixture
def accounts(db):
    return AccountStore(db)


@pytest.fixture
def user(accounts):
    return accounts.create("walt@example.com", hash_password(PASSWORD))


@pytest.fixture
def register(client):
    def _register(email="walt@example.com", password=PASSWORD):
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _register


@pytest.fixture
def login(client):
    def _login(email="walt@example.com", password=PASSWORD):
        return client.post("/api/login", json={"email": email, "password": password})

    return _login
