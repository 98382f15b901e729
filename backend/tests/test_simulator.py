import asyncio
import random

import pytest

from talentflow.config import Settings
from talentflow.errors import SimulatedServerError
from talentflow.services.simulator import (
    NoFaultPolicy,
    RandomFaultPolicy,
    RequestSimulator,
    ScriptedFaultPolicy,
    build_fault_policy,
)
from talentflow.services.store import CANDIDATES


class TestRandomFaultPolicy:
    def test_delay_range(self):
        policy = RandomFaultPolicy(Settings(), rng=random.Random(1))
        delays = [policy.delay() for _ in range(2000)]
        assert min(delays) >= 0.2
        assert max(delays) < 1.2

    def test_error_rates(self):
        policy = RandomFaultPolicy(Settings(), rng=random.Random(2))
        reads = sum(policy.maybe_fail("read") for _ in range(20000)) / 20000
        writes = sum(policy.maybe_fail("write") for _ in range(20000)) / 20000
        assert 0.04 < reads < 0.06
        assert 0.09 < writes < 0.11

    def test_disabled_by_settings(self):
        assert isinstance(build_fault_policy(Settings(simulate_faults=False)), NoFaultPolicy)
        assert isinstance(build_fault_policy(Settings()), RandomFaultPolicy)


class TestRequestSimulator:
    @pytest.mark.asyncio
    async def test_success_runs_operation(self):
        simulator = RequestSimulator(NoFaultPolicy())
        assert await simulator.read("add", lambda a, b: a + b, 2, 3) == 5

    @pytest.mark.asyncio
    async def test_failure_skips_operation(self):
        policy = ScriptedFaultPolicy()
        policy.fail_next("write")
        calls = []
        simulator = RequestSimulator(policy)

        with pytest.raises(SimulatedServerError) as exc_info:
            await simulator.write("update job", calls.append, "ran")
        assert calls == []
        assert exc_info.value.message == "Failed to update job"

        await simulator.write("update job", calls.append, "ran")
        assert calls == ["ran"]

    @pytest.mark.asyncio
    async def test_failure_only_for_scripted_kind(self):
        policy = ScriptedFaultPolicy()
        policy.fail_next("write")
        simulator = RequestSimulator(policy)
        assert await simulator.read("read", lambda: "ok") == "ok"
        assert policy.calls == ["read"]

    @pytest.mark.asyncio
    async def test_failed_update_leaves_record(self, store):
        created = store.create(CANDIDATES, {
            "name": "Jane Doe", "email": "jane@example.com", "stage": "applied",
            "jobId": 1, "createdAt": "2024-05-01T00:00:00Z",
        })
        policy = ScriptedFaultPolicy()
        policy.fail_next("write")
        simulator = RequestSimulator(policy)

        with pytest.raises(SimulatedServerError):
            await simulator.write("update candidate", store.update, CANDIDATES, created["id"], {"stage": "hired"})
        assert store.get(CANDIDATES, created["id"]) == created

    @pytest.mark.asyncio
    async def test_cancelled_request_applies_nothing(self, store):
        created = store.create(CANDIDATES, {
            "name": "Jane Doe", "email": "jane@example.com", "stage": "applied",
            "jobId": 1, "createdAt": "2024-05-01T00:00:00Z",
        })
        simulator = RequestSimulator(ScriptedFaultPolicy(delay=0.5))
        task = asyncio.create_task(
            simulator.write("update candidate", store.update, CANDIDATES, created["id"], {"stage": "hired"})
        )
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert store.get(CANDIDATES, created["id"])["stage"] == "applied"

    @pytest.mark.asyncio
    async def test_overlapping_requests(self, seeded_store):
        from talentflow.services.reorder_service import reorder_job

        simulator = RequestSimulator(ScriptedFaultPolicy(delay=0.01))
        results = await asyncio.gather(
            simulator.write("reorder job", reorder_job, seeded_store, 5, 5, 1),
            simulator.write("reorder job", reorder_job, seeded_store, 4, 5, 1),
            return_exceptions=True,
        )
        # the second move is only valid once the first has landed
        assert results[0] == {"success": True}
        assert seeded_store.check_order_integrity()
