import pytest

from talentflow.errors import SimulatedServerError
from talentflow.services.optimistic import OptimisticView, move_candidate, move_job

AUTHORITATIVE = [
    {"id": 1, "title": "A", "order": 1},
    {"id": 2, "title": "B", "order": 2},
    {"id": 3, "title": "C", "order": 3},
]


def _view():
    async def fetch():
        return [dict(j) for j in AUTHORITATIVE]

    return OptimisticView(fetch, [dict(j) for j in AUTHORITATIVE])


class TestMoveJob:
    @pytest.mark.asyncio
    async def test_success_keeps_provisional_order(self):
        view = _view()
        sent = []

        async def reorder(job_id, from_order, to_order):
            sent.append((job_id, from_order, to_order))
            return {"success": True}

        assert await move_job(view, 3, 2, 0, reorder) is True
        assert sent == [(3, 3, 1)]
        assert [j["id"] for j in view.items] == [3, 1, 2]
        assert view.error is None

    @pytest.mark.asyncio
    async def test_failure_refetches(self):
        view = _view()

        async def reorder(job_id, from_order, to_order):
            raise SimulatedServerError("Failed to reorder job")

        with pytest.raises(SimulatedServerError):
            await move_job(view, 1, 0, 2, reorder)
        assert [j["id"] for j in view.items] == [1, 2, 3]
        assert view.error == "Failed to reorder job"

    @pytest.mark.asyncio
    async def test_drop_in_place_is_noop(self):
        view = _view()

        async def reorder(*args):
            raise AssertionError("should not be called")

        assert await move_job(view, 1, 0, 0, reorder) is False
        assert await move_job(view, 1, 0, None, reorder) is False


class TestMoveCandidate:
    @pytest.mark.asyncio
    async def test_failure_discards_provisional_stage(self):
        candidates = [{"id": 1, "stage": "applied"}, {"id": 2, "stage": "tech"}]

        async def fetch():
            return [dict(c) for c in candidates]

        view = OptimisticView(fetch, [dict(c) for c in candidates])
        seen = []

        async def update(candidate_id, changes):
            seen.append([dict(c) for c in view.items])
            raise SimulatedServerError("Failed to update candidate")

        with pytest.raises(SimulatedServerError):
            await move_candidate(view, 1, "screen", update)
        # provisional state was visible while the request was in flight
        assert seen[0][0]["stage"] == "screen"
        assert view.items == candidates

    @pytest.mark.asyncio
    async def test_success_sends_kanban_note(self):
        view = OptimisticView(lambda: None, [{"id": 1, "stage": "applied"}])
        sent = []

        async def update(candidate_id, changes):
            sent.append((candidate_id, changes))

        assert await move_candidate(view, 1, "offer", update) is True
        assert sent == [(1, {"stage": "offer", "notes": "Moved to offer stage via Kanban board"})]
        assert view.items == [{"id": 1, "stage": "offer"}]
