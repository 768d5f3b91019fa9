import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the Protean config overlay before any domain is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


def _domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return {"identity": identity, "catalogue": catalogue, "ordering": ordering}


@pytest.fixture(scope="session")
def domain_beds():
    """One initialized ``DomainFixture`` per bounded context, shared by the session."""
    beds = {name: DomainFixture(domain) for name, domain in _domains().items()}
    for bed in beds.values():
        bed.setup()

    yield beds

    for bed in beds.values():
        bed.teardown()


@pytest.fixture(autouse=True)
def run_around_tests(domain_beds):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    for domain in _domains().values():
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()

            domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# HTTP application fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def email_channel():
    from notifications.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


@pytest.fixture()
def dispatcher(email_channel):
    from notifications.dispatcher import NotificationDispatcher
    from shared.config import Settings

    dispatcher = NotificationDispatcher(email_channel, Settings(environment="test"))
    yield dispatcher

    email_channel.release()
    dispatcher.shutdown(wait_for_pending=True)


@pytest.fixture()
def client(dispatcher):
    from app import create_app
    from fastapi.testclient import TestClient

    return TestClient(create_app(dispatcher=dispatcher, initialize=False))


@pytest.fixture()
def register_customer(domain_beds):
    """Store a verified customer with a password and return it."""
    from identity.domain import identity
    from identity.user.user import User

    def _register(email="ayesha@example.com", password="secret123", name="Ayesha Khan"):
        with identity.domain_context():
            user = User.register(name=name, email=email)
            user.set_password(password)
            identity.repository_for(User).add(user)
        return user

    return _register


@pytest.fixture()
def customer_headers(client, register_customer):
    register_customer()
    response = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def admin_headers(client):
    response = client.post(
        "/api/admin/register",
        json={"name": "Store Admin", "email": "admin@theordnery.com", "password": "admin-pass"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
