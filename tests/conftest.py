from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure lease_api is importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lease_api.core import config as core_config  # noqa: E402
from lease_api.db import models  # noqa: E402
from lease_api.db import session as db_session  # noqa: E402
from lease_api.domain.enums import UserRole  # noqa: E402
from lease_api.repositories.sql_repository import SQLRepository  # noqa: E402


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset the settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("MAX_ACTIVE_LEASES", raising=False)
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def repo(db_env):
    return SQLRepository()


@pytest.fixture()
def owner(repo):
    return repo.create_user("Carlos", "carlos@x.com", UserRole.OWNER)


@pytest.fixture()
def customer(repo):
    return repo.create_user("Raj", "raj@x.com", UserRole.CUSTOMER)
