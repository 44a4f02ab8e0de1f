"""
Bounded polling waits.

`Waiter.until(policy, fn)` re-invokes `fn` until it returns something that is
neither None nor False, the policy's timeout elapses (-> TimeoutError), or
`fn` raises an error outside the policy's ignore-set (propagated at once).

Page state is mutated asynchronously by the browser, so interactions poll
instead of checking once. Errors listed in `WaitPolicy.ignored` (by default
NoSuchElement) count as "not ready yet" instead of failures, which lets `fn`
call element lookups before the target exists.

Waits compose: a wait started inside another wait's `fn` never outlives the
enclosing wait's deadline.
"""
# @file purpose: Provide wait policies and the condition-polling engine.

from __future__ import annotations

import logging
import time
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from .errors import NoSuchElement, TimeoutError

if TYPE_CHECKING:
    from ..io.driver import BrowserDriver
    from .settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Deadline (in waiter clock time) of the innermost running wait, if any.
_DEADLINE: ContextVar[Optional[float]] = ContextVar("fluentium_wait_deadline", default=None)

_NOT_READY = object()


@dataclass(frozen=True)
class WaitPolicy:
    """Timeout, poll interval and the errors treated as "not ready yet"."""

    timeout: float = 10.0
    poll_interval: float = 0.25
    ignored: tuple[type[BaseException], ...] = (NoSuchElement,)

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

    @classmethod
    def from_settings(cls, s: "Settings") -> "WaitPolicy":
        return cls(timeout=s.default_timeout_seconds, poll_interval=s.poll_interval_seconds)

    def with_timeout(self, timeout: float) -> "WaitPolicy":
        return replace(self, timeout=timeout)

    def ignoring(self, *errors: type[BaseException]) -> "WaitPolicy":
        extra = tuple(e for e in errors if e not in self.ignored)
        return replace(self, ignored=self.ignored + extra)

    def strict(self) -> "WaitPolicy":
        """Same timing, nothing ignored: every error ends the wait."""
        return replace(self, ignored=())

    def nested(self) -> "WaitPolicy":
        """Policy for waits whose condition runs other bounded waits."""
        return self.ignoring(TimeoutError)

    def override(self, *, wait: "WaitPolicy | None" = None, timeout: float | None = None) -> "WaitPolicy":
        """Per-call override: an explicit policy wins, then an explicit timeout, then self."""
        if wait is not None:
            return wait
        if timeout is not None:
            return self.with_timeout(timeout)
        return self


class Waiter:
    """
    Spin-with-sleep poll loop. Blocks the calling thread for the duration of
    the wait; `clock` and `sleep` are injectable for deterministic tests.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.clock = clock
        self.sleep = sleep

    def until(self, policy: WaitPolicy, fn: Callable[[], Optional[T]], *, message: str | None = None) -> T:
        now = self.clock()
        deadline = now + max(policy.timeout, 0.0)
        outer = _DEADLINE.get()
        if outer is not None:
            deadline = min(deadline, outer)

        token = _DEADLINE.set(deadline)
        polls = 0
        last_error: BaseException | None = None
        try:
            while True:
                polls += 1
                result, error = self._poll(fn, policy.ignored)
                if result is not _NOT_READY:
                    logger.debug("condition met after %d poll(s)", polls)
                    return result  # type: ignore[return-value]
                if error is not None:
                    last_error = error

                remaining = deadline - self.clock()
                if remaining <= 0:
                    what = message or "condition"
                    budget = deadline - now
                    logger.debug("%s not met after %d poll(s) / %.2fs", what, polls, budget)
                    raise TimeoutError(
                        f"{what} not met within {budget:g}s ({polls} polls)",
                        timeout=budget,
                        polls=polls,
                    ) from last_error
                self.sleep(min(policy.poll_interval, remaining))
        finally:
            _DEADLINE.reset(token)

    def until_native(
        self,
        driver: "BrowserDriver",
        policy: WaitPolicy,
        condition: Callable[["BrowserDriver"], Optional[T]],
        *,
        message: str | None = None,
    ) -> T:
        """Wait on a driver-level condition (see `fluentium.core.conditions`)."""
        return self.until(policy, lambda: condition(driver), message=message or _describe(condition))

    def wait_for(self, seconds: float) -> None:
        """Unconditional pause. Prefer `until()` whenever there is something to observe."""
        if seconds > 0:
            self.sleep(seconds)

    @staticmethod
    def _poll(fn: Callable[[], Any], ignored: tuple[type[BaseException], ...]) -> tuple[Any, BaseException | None]:
        try:
            value = fn()
        except ignored as e:
            return _NOT_READY, e
        if value is None or value is False:
            return _NOT_READY, None
        return value, None


def _describe(condition: Any) -> str:
    return getattr(condition, "description", None) or getattr(condition, "__name__", None) or repr(condition)


default_waiter = Waiter()


def wait_until(policy: WaitPolicy, fn: Callable[[], Optional[T]], *, message: str | None = None) -> T:
    return default_waiter.until(policy, fn, message=message)


def wait_for(seconds: float) -> None:
    default_waiter.wait_for(seconds)
