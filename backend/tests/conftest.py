import random

import pytest
from fastapi.testclient import TestClient

from talentflow.config import Settings
from talentflow.main import create_app
from talentflow.services.seed_service import seed_database
from talentflow.services.simulator import ScriptedFaultPolicy
from talentflow.services.store import Store


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "TestTalentFlow"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_settings(tmp_data):
    return Settings(
        data_path=tmp_data,
        seed_on_startup=False,
        simulate_faults=False,
        log_level="DEBUG",
    )


@pytest.fixture
def store(test_settings):
    s = Store(test_settings.db_path)
    s.init()
    yield s
    s.close()


@pytest.fixture
def seeded_store(store):
    """Store seeded with the fixed jobs/assessments and 50 candidates."""
    seed_database(store, candidate_count=50, rng=random.Random(1234))
    return store


@pytest.fixture
def faults():
    return ScriptedFaultPolicy()


@pytest.fixture
def client(test_settings, store, faults):
    app = create_app(test_settings, store=store, fault_policy=faults)
    return TestClient(app)


@pytest.fixture
def seeded_client(test_settings, seeded_store, faults):
    app = create_app(test_settings, store=seeded_store, fault_policy=faults)
    return TestClient(app)
