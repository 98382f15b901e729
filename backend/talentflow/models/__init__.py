from talentflow.models.job import Job
from talentflow.models.candidate import Candidate
from talentflow.models.timeline import TimelineEntry
from talentflow.models.assessment import Assessment, Submission

__all__ = ["Job", "Candidate", "TimelineEntry", "Assessment", "Submission"]
