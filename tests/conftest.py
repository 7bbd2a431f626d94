import pytest

from orm_practice.base.session import PersistenceUnit
from orm_practice.config import PersistenceProfile, CONFIG_ENV, URL_ENV


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(URL_ENV, raising=False)
    # Keep a stray persistence.yaml or database file out of the tests
    monkeypatch.chdir(tmp_path)

@pytest.fixture
def persistence():
    unit = PersistenceUnit(PersistenceProfile(name="test", url="sqlite://"))
    yield unit
    unit.close()

@pytest.fixture
def SessionFactory(persistence):
    yield persistence.SessionFactory
