import pytest
from fastapi.testclient import TestClient
from api import app
from managers.config_manager import Settings, get_settings


def make_settings(**overrides) -> Settings:
    values = {
        "payment_api_key": "rk_test_123",
        "email_api_key": "xkeysib-test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture(autouse=True)
def override_settings(settings):
    # 実際の環境変数ではなくテスト用の設定を各ハンドラに渡す
    app.dependency_overrides[get_settings] = lambda: settings
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)
