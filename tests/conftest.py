import os

# Environnement de test AVANT l'import de l'application (config lue à l'import)
os.environ["APP_ENV"] = "test"
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"
os.environ["PIXUP_CLIENT_ID"] = ""
os.environ["PIXUP_CLIENT_SECRET"] = ""
os.environ["PIXUP_WEBHOOK_SECRET"] = ""
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost")

from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.app import app as fastapi_app
from storefront.checkout.dependencies import get_pixup_client, get_pixup_settings
from storefront.checkout.settings import PixupSettings
from tests.fakes import CART_REPOSITORY_FUNCTIONS, CHECKOUT_REPOSITORY_FUNCTIONS, WEBHOOK_SECRET, FakeStore

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture
def store(monkeypatch) -> FakeStore:
    """Remplace les accès Supabase des repositories par un stockage en mémoire."""
    fake = FakeStore()
    for name in CART_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(f"storefront.cart.repository.{name}", getattr(fake, name))
    for name in CHECKOUT_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(f"storefront.checkout.repository.{name}", getattr(fake, name))
    return fake

@pytest.fixture(autouse=True)
def _no_real_supabase(monkeypatch):
    # Aucun test ne doit joindre un vrai Supabase
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: MagicMock())

@pytest.fixture
def pixup_settings() -> PixupSettings:
    return PixupSettings(base_url="https://pixup.test", webhook_secret=WEBHOOK_SECRET)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture
def pixup_client_override(app):
    """Permet à un test d'injecter un client PixUp factice dans les routes."""
    def _set(fake):
        app.dependency_overrides[get_pixup_client] = lambda: fake
        return fake
    return _set

@pytest.fixture
def client(app, pixup_settings) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_pixup_settings] = lambda: pixup_settings
    app.dependency_overrides[get_pixup_client] = lambda: None
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
