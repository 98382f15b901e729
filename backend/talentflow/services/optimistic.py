"""Caller-side optimistic updates.

A view applies a provisional change to its local list, issues the request,
and on failure throws the provisional state away and re-fetches. It never
tries to undo individual fields: after several rapid edits the prior state
may not be reconstructable locally.
"""
import logging
from typing import Any, Awaitable, Callable

from talentflow.errors import TalentFlowError

logger = logging.getLogger("talentflow.optimistic")

Fetch = Callable[[], Awaitable[list[dict[str, Any]]]]


class OptimisticView:
    def __init__(self, fetch: Fetch, items: list[dict[str, Any]] | None = None):
        self._fetch = fetch
        self.items: list[dict[str, Any]] = list(items or [])
        self.error: str | None = None

    async def refetch(self) -> list[dict[str, Any]]:
        self.items = list(await self._fetch())
        return self.items

    def apply(self, provisional: list[dict[str, Any]]):
        self.items = provisional

    async def commit(self, request: Awaitable[Any]) -> Any:
        try:
            result = await request
        except TalentFlowError as exc:
            logger.info("Request failed (%s), restoring authoritative state", exc)
            self.error = exc.message
            await self.refetch()
            raise
        self.error = None
        return result


async def move_job(view: OptimisticView, job_id: int, source_index: int, dest_index: int | None,
                   reorder: Callable[[int, int, int], Awaitable[Any]]) -> bool:
    """Drag a job card from ``source_index`` to ``dest_index`` on the board.

    ``reorder(job_id, from_order, to_order)`` issues the request. Returns
    False for drops that change nothing.
    """
    if dest_index is None or source_index == dest_index:
        return False
    provisional = list(view.items)
    moved = provisional.pop(source_index)
    provisional.insert(dest_index, moved)
    view.apply(provisional)
    await view.commit(reorder(job_id, moved["order"], dest_index + 1))
    return True


async def move_candidate(view: OptimisticView, candidate_id: int, stage: str,
                         update: Callable[[int, dict], Awaitable[Any]]) -> bool:
    """Drop a candidate card into the ``stage`` column."""
    current = next((c for c in view.items if c["id"] == candidate_id), None)
    if current is None or current["stage"] == stage:
        return False
    view.apply([{**c, "stage": stage} if c["id"] == candidate_id else c for c in view.items])
    await view.commit(update(candidate_id, {
        "stage": stage,
        "notes": f"Moved to {stage} stage via Kanban board",
    }))
    return True
