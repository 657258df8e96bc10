from __future__ import annotations

import mongomock
import pytest
from fastapi.testclient import TestClient

from restaurant_directory.app import create_app
from restaurant_directory.config import AppConfig
from restaurant_directory.recaptcha import RecaptchaConfig, RecaptchaVerifier
from restaurant_directory.store import DirectoryRepository, MongoStore
from restaurant_directory.store.config import StoreConfig

TEST_STORE_CONFIG = StoreConfig(url="mongodb://localhost:27017/hotel", database="hotel_test")
TEST_RECAPTCHA_CONFIG = RecaptchaConfig(
    secret_key="test-secret",
    site_key="test-site-key",
    verify_url="https://recaptcha.test/siteverify",
    timeout=1.0,
)


def _make_client(store: MongoStore, config: AppConfig | None = None) -> TestClient:
    app = create_app(
        config=config or AppConfig(),
        store=store,
        verifier=RecaptchaVerifier(TEST_RECAPTCHA_CONFIG),
    )
    return TestClient(app)


@pytest.fixture
def store():
    """A store backed by an in-memory mongomock client; not yet opened."""
    return MongoStore(TEST_STORE_CONFIG, client_factory=mongomock.MongoClient)


@pytest.fixture
def client(store):
    with _make_client(store) as c:
        yield c


@pytest.fixture
def client_with(store):
    """Build a started client for a custom AppConfig."""
    clients = []

    def _build(config: AppConfig) -> TestClient:
        c = _make_client(store, config)
        c.__enter__()
        clients.append(c)
        return c

    yield _build
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def repository(client, store):
    return DirectoryRepository(store.database, store.config)
