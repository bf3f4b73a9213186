import pytest

from api import create_app, get_storage

TEST_PASSWORD = "pw123456"


@pytest.fixture
def make_app(tmp_path):
    """Build an isolated app (own in-memory database and hit counter)."""
    apps = []

    def _make_app(**overrides):
        overrides.setdefault("FILESERVER_ROOT", str(tmp_path))
        app = create_app("testing", overrides=overrides)
        apps.append(app)
        return app

    yield _make_app

    for app in apps:
        with app.app_context():
            get_storage().dispose()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    with app.app_context():
        yield get_storage()


@pytest.fixture
def register(client):
    def _register(email="a@b.com", password=TEST_PASSWORD):
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _register


@pytest.fixture
def login(client):
    def _login(email="a@b.com", password=TEST_PASSWORD):
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login
