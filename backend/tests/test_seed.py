import random

from talentflow.services.seed_service import PROGRESSION, generate_candidates, generate_timelines, seed_database
from talentflow.services.store import ASSESSMENTS, CANDIDATES, JOBS, TIMELINE
from talentflow.services.timeline_service import STAGES


class TestSeed:
    def test_seeds_empty_store(self, store):
        assert seed_database(store, candidate_count=100, rng=random.Random(3)) is True
        assert store.count(JOBS) == 5
        assert store.count(CANDIDATES) == 100
        assert store.count(ASSESSMENTS) == 2
        assert store.check_order_integrity()

    def test_second_run_is_noop(self, store):
        seed_database(store, candidate_count=20, rng=random.Random(3))
        counts = {c: store.count(c) for c in (JOBS, CANDIDATES, TIMELINE, ASSESSMENTS)}
        assert seed_database(store, candidate_count=20, rng=random.Random(4)) is False
        assert {c: store.count(c) for c in counts} == counts

    def test_default_candidate_count(self, store):
        seed_database(store, rng=random.Random(0))
        assert store.count(CANDIDATES) == 1000

    def test_candidate_shape(self):
        candidates = generate_candidates(random.Random(11), 200)
        for c in candidates:
            assert c["stage"] in STAGES
            assert 1 <= c["jobId"] <= 5
            assert c["createdAt"].startswith("2024-")
            assert c["email"].endswith(f"{c['id']}@email.com")

    def test_timeline_walks_fixed_progression(self):
        candidates = [
            {"id": 1, "stage": "applied", "createdAt": "2024-03-01T00:00:00Z"},
            {"id": 2, "stage": "tech", "createdAt": "2024-03-01T00:00:00Z"},
            {"id": 3, "stage": "rejected", "createdAt": "2024-03-01T00:00:00Z"},
        ]
        entries = generate_timelines(candidates)
        by_candidate = {cid: [e for e in entries if e["candidateId"] == cid] for cid in (1, 2, 3)}

        assert [e["stage"] for e in by_candidate[1]] == ["applied"]
        assert [e["stage"] for e in by_candidate[2]] == ["applied", "screen", "tech"]
        assert [e["stage"] for e in by_candidate[3]] == ["applied"] + PROGRESSION
        assert [e["timestamp"] for e in by_candidate[2]] == [
            "2024-03-01T00:00:00Z", "2024-03-08T00:00:00Z", "2024-03-15T00:00:00Z",
        ]
        assert by_candidate[2][1]["notes"] == "Moved to screen stage"
