from fastapi.testclient import TestClient

from talentflow.config import Settings
from talentflow.main import create_app
from talentflow.services.store import CANDIDATES, JOBS, Store


class TestApp:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_startup_seeds_once(self, tmp_data):
        settings = Settings(
            data_path=tmp_data,
            simulate_faults=False,
            seed_candidate_count=30,
            seed_random_seed=5,
        )
        with TestClient(create_app(settings)) as c:
            assert c.get("/api/candidates").json()["total"] == 30
            c.patch("/api/candidates/1", json={"stage": "hired"})

        # restart against the same file: nothing is re-seeded or lost
        with TestClient(create_app(settings)) as c:
            assert c.get("/api/candidates").json()["total"] == 30
            assert c.get("/api/candidates/1").json()["stage"] == "hired"

        store = Store(settings.db_path)
        assert store.count(JOBS) == 5
        assert store.count(CANDIDATES) == 30
        store.close()

    def test_request_validation_shape(self, client):
        r = client.post("/api/jobs", json={})
        assert r.status_code == 422
        data = r.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["details"][0]["loc"] == ["body", "title"]

    def test_injected_read_failure(self, seeded_client, faults):
        faults.fail_next("read")
        r = seeded_client.get("/api/jobs")
        assert r.status_code == 500
        assert r.json()["code"] == "SERVER_ERROR"
        assert seeded_client.get("/api/jobs").status_code == 200
