import os

import pytest

from blogsphere import create_app
from blogsphere.config import TestConfig
from blogsphere.extensions import db

BASE_URL = "http://blog.test"


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, name="Alice", email="alice@example.com", password="secret123"):
    resp = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    body = resp.get_json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


@pytest.fixture
def alice(client):
    return register_and_login(client)


@pytest.fixture
def bob(client):
    return register_and_login(client, name="Bob", email="bob@example.com")


@pytest.fixture
def make_category(client, alice):
    headers, _ = alice

    def _make(name):
        resp = client.post("/categories", json={"name": name}, headers=headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _make


@pytest.fixture
def make_post(client, alice):
    default_headers, _ = alice

    def _make(headers=None, **fields):
        payload = {"title": "A post", "content": "<p>Body</p>", "isPublished": True}
        payload.update(fields)
        resp = client.post("/posts", json=payload, headers=headers or default_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _make


class TransportResponse:
    """Lo mínimo de requests.Response que usa BlogApiClient."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response body is not JSON")
        return data


class FlaskTransport:
    """Adaptador con la forma de requests.Session que manda todo al test client de Flask."""

    def __init__(self, test_client, base_url=BASE_URL):
        self.test_client = test_client
        self.base_url = base_url
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, params=None, json=None, data=None, files=None):
        path = url[len(self.base_url):]
        self.calls.append((method, path))
        kwargs = {"headers": dict(headers or {}), "query_string": params}
        if files:
            form = dict(data or {})
            for field, fh in files.items():
                form[field] = (fh, os.path.basename(fh.name))
            kwargs["data"] = form
            kwargs["content_type"] = "multipart/form-data"
        elif json is not None:
            kwargs["json"] = json
        elif data is not None:
            kwargs["data"] = data
        return TransportResponse(self.test_client.open(path, method=method, **kwargs))


@pytest.fixture
def transport(client):
    return FlaskTransport(client)
