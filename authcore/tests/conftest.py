from __future__ import annotations

from pathlib import Path

import pytest

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.shared.config.settings import AppConfig, DatabaseConfig, HashingConfig

# Cheap work factor so the suite stays fast; production default is scrypt.
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture()
def fast_hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'authcore.db'}"


@pytest.fixture()
def app_config(database_url: str) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url=database_url, pool_timeout=5.0),
        hashing=HashingConfig(method=FAST_HASH_METHOD),
    )
