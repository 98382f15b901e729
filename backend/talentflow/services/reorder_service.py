import logging

from sqlalchemy import update

from talentflow.errors import NotFoundError, ValidationError
from talentflow.models.job import Job
from talentflow.services.store import JOBS, Store

logger = logging.getLogger("talentflow.reorder")


def reorder_job(store: Store, job_id: int, from_order: int, to_order: int) -> dict:
    """Move a job to ``to_order`` and shift the jobs in between by one.

    The shift and the move commit together or not at all, so the orders
    always stay a dense 1..N permutation.
    """
    with store.transaction(JOBS) as tx:
        total = tx.count(JOBS)
        job = tx.session.get(Job, job_id)
        if job is None or job.order != from_order:
            raise NotFoundError(
                "Job not found",
                context={"id": job_id, "fromOrder": from_order},
            )
        if not 1 <= to_order <= total:
            raise ValidationError(f"toOrder must be between 1 and {total}")

        if from_order == to_order:
            return {"success": True}

        if from_order < to_order:
            tx.session.execute(
                update(Job)
                .where(Job.order > from_order, Job.order <= to_order)
                .values(order=Job.order - 1)
            )
        else:
            tx.session.execute(
                update(Job)
                .where(Job.order >= to_order, Job.order < from_order)
                .values(order=Job.order + 1)
            )
        tx.session.execute(update(Job).where(Job.id == job_id).values(order=to_order))

    logger.info("Moved job %s from order %s to %s", job_id, from_order, to_order)
    return {"success": True}
