"""
Name: Settings Tests

Responsibilities:
  - Validate backend selection and per-backend requirements
  - Validate production-only security checks
"""

import pytest
from pydantic import ValidationError

from albaranes.crosscutting.config import Settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "s" * 40


def _production(**overrides) -> Settings:
    values = {
        "app_env": "production",
        "jwt_secret": STRONG_SECRET,
        "jwt_cookie_secure": True,
        "storage_backend": "s3",
        "s3_bucket": "albaranes",
    }
    values.update(overrides)
    return Settings(**values)


def test_backends_are_normalized():
    settings = Settings(storage_backend=" MEMORY ", notifier_backend="Log")

    assert settings.storage_backend == "memory"
    assert settings.notifier_backend == "log"


@pytest.mark.parametrize(
    "overrides",
    [
        {"storage_backend": "ftp"},
        {"storage_backend": "pinata", "pinata_jwt": ""},
        {"storage_backend": "s3", "s3_bucket": ""},
        {"notifier_backend": "smtp", "smtp_host": ""},
        {"verification_attempts": 0},
        {"db_pool_min_size": 5, "db_pool_max_size": 2},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_production_accepts_hardened_settings():
    assert _production().is_production()


@pytest.mark.parametrize(
    "overrides",
    [
        {"jwt_secret": "dev-secret"},
        {"jwt_secret": "short"},
        {"jwt_cookie_secure": False},
        {"storage_backend": "memory"},
    ],
)
def test_production_rejects_insecure_settings(overrides):
    with pytest.raises(ValidationError):
        _production(**overrides)


def test_allowed_origins_list():
    settings = Settings(allowed_origins="https://a.example, ,https://b.example")

    assert settings.get_allowed_origins_list() == ["https://a.example", "https://b.example"]
