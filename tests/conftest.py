import pytest

from tracker import create_app


@pytest.fixture
def app(tmp_path):
    application = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "DATABASE": str(tmp_path / "tracker.db"),
            "TODAY": "2024-01-20",
        }
    )
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email="intern@example.com", password="secret", full_name="Ada Intern"):
    return client.post(
        "/register",
        data={
            "email": email,
            "full_name": full_name,
            "password": password,
            "confirm_password": password,
        },
    )


def login(client, email="intern@example.com", password="secret"):
    return client.post("/login", data={"email": email, "password": password})


@pytest.fixture
def auth_client(client):
    register(client)
    login(client)
    return client
