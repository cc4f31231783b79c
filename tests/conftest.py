"""Shared fixtures for the EMMARK test suite."""

import pytest

from adapters.local_storage import MemoryStorage
from core.domain.models import Activity, ActivityStatus, ActivityType, Client


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep AppSettings away from the developer's .env and config dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("EMMARK_DATA_DIR", str(tmp_path / "data"))
    for var in (
        "EMMARK_STORAGE_FILE",
        "EMMARK_DEFAULT_LANGUAGE",
        "EMMARK_EVENT_TITLE",
        "EMMARK_MAX_ATTACHMENT_BYTES",
        "EMMARK_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clients():
    return [
        Client(id="c1", name="Ana Pérez", branch="Norte", phone="555-0101", is_confirmed=True),
        Client(id="c2", name="Luis Gómez", branch="", phone="", is_confirmed=False),
    ]


@pytest.fixture
def activities():
    return [
        Activity(
            id="a1",
            name="Banquete",
            date="2024-05-10",
            cost=100,
            in_charge="Marta",
            activity_type=ActivityType.CATERING,
            status=ActivityStatus.FINALIZADA,
        ),
        Activity(
            id="a2",
            name="Postres",
            cost=50,
            activity_type=ActivityType.CATERING,
            status=ActivityStatus.EN_PROCESO,
        ),
        Activity(
            id="a3",
            name="Flyers",
            cost=25,
            activity_type=ActivityType.MARKETING,
        ),
    ]
