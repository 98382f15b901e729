"""Latency and failure injection in front of every store operation.

Failures are decided *before* the wrapped operation runs, so a simulated
server error guarantees that nothing was mutated.
"""
import asyncio
import logging
import random
from collections import deque
from typing import Any, Callable, Literal, Protocol, TypeVar

from talentflow.config import Settings
from talentflow.errors import SimulatedServerError

logger = logging.getLogger("talentflow.simulator")

Kind = Literal["read", "write"]
T = TypeVar("T")


class FaultPolicy(Protocol):
    def delay(self) -> float:
        """Seconds to wait before dispatching."""

    def maybe_fail(self, kind: Kind) -> bool:
        """True to short-circuit the request with a server error."""


class RandomFaultPolicy:
    def __init__(self, settings: Settings, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.latency_min = settings.latency_min_ms / 1000
        self.latency_max = settings.latency_max_ms / 1000
        self.error_rates = {"read": settings.read_error_rate, "write": settings.write_error_rate}

    def delay(self) -> float:
        return self.latency_min + self.rng.random() * (self.latency_max - self.latency_min)

    def maybe_fail(self, kind: Kind) -> bool:
        return self.rng.random() < self.error_rates[kind]


class NoFaultPolicy:
    def delay(self) -> float:
        return 0.0

    def maybe_fail(self, kind: Kind) -> bool:
        return False


class ScriptedFaultPolicy:
    """Fails the next N requests of a kind; used to drive failure paths in tests."""

    def __init__(self, delay: float = 0.0):
        self._delay = delay
        self._pending: dict[str, deque] = {"read": deque(), "write": deque()}
        self.calls: list[str] = []

    def fail_next(self, kind: Kind, times: int = 1):
        self._pending[kind].extend([True] * times)

    def delay(self) -> float:
        return self._delay

    def maybe_fail(self, kind: Kind) -> bool:
        self.calls.append(kind)
        pending = self._pending[kind]
        return pending.popleft() if pending else False


def build_fault_policy(settings: Settings) -> FaultPolicy:
    if not settings.simulate_faults:
        return NoFaultPolicy()
    return RandomFaultPolicy(settings)


class RequestSimulator:
    def __init__(self, policy: FaultPolicy):
        self.policy = policy

    async def run(self, kind: Kind, name: str, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        # The sleep is the only suspension point. Cancelling here leaves the
        # store untouched; once dispatched, the operation runs to completion.
        await asyncio.sleep(self.policy.delay())
        if self.policy.maybe_fail(kind):
            logger.warning("Injected %s failure for %s", kind, name)
            raise SimulatedServerError(f"Failed to {name}", context={"operation": name, "kind": kind})
        return operation(*args, **kwargs)

    async def read(self, name: str, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await self.run("read", name, operation, *args, **kwargs)

    async def write(self, name: str, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await self.run("write", name, operation, *args, **kwargs)
