import pytest
from fastapi.testclient import TestClient

from label_registry.config import Settings
from label_registry.main import create_app
from label_registry.repositories.label_store import JsonLabelStore
from label_registry.services.sequencer import build_sequencer


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides):
        values = {
            "DATA_DIR": str(tmp_path / "data"),
            "PUBLIC_DIR": str(tmp_path / "public"),
            "BARCODE_PREFIX": "KIOSCO-922-",
            "BARCODE_DIGITS": 5,
            "STATE_MODE": "derived",
            "API_KEY": None,
            "LOG_DIR": None,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def derived_settings(make_settings):
    return make_settings()


@pytest.fixture
def stored_settings(make_settings):
    return make_settings(STATE_MODE="stored", BARCODE_PREFIX="A-", BARCODE_DIGITS=3)


@pytest.fixture
def derived_store(derived_settings):
    return JsonLabelStore.from_settings(derived_settings)


@pytest.fixture
def stored_store(stored_settings):
    return JsonLabelStore.from_settings(stored_settings)


@pytest.fixture
def derived_sequencer(derived_settings):
    return build_sequencer(False, derived_settings.BARCODE_PREFIX, derived_settings.BARCODE_DIGITS)


@pytest.fixture
def stored_sequencer():
    return build_sequencer(True, "", 0)


@pytest.fixture
def client(derived_settings):
    with TestClient(create_app(derived_settings)) as test_client:
        yield test_client


@pytest.fixture
def stored_client(stored_settings):
    with TestClient(create_app(stored_settings)) as test_client:
        yield test_client
