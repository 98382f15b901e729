"""Domain exceptions shared by the store, services and routers."""

from typing import Any


class TalentFlowError(Exception):
    """Base exception for all domain errors."""

    code: str = "ERROR"
    status_code: int = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(TalentFlowError):
    """Malformed or missing input. Not retried."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(TalentFlowError):
    """No record matches the requested id."""

    code = "NOT_FOUND"
    status_code = 404


class SimulatedServerError(TalentFlowError):
    """Randomly injected failure. The wrapped operation was never run."""

    code = "SERVER_ERROR"
    status_code = 500
