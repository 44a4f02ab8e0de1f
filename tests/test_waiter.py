"""Polling semantics of Waiter.until, driven by a fake clock."""
# @file purpose: Tests for wait policies and the condition-polling engine.

import pytest

from fakes import FakeClock
from fluentium.core.errors import NoSuchElement, TimeoutError
from fluentium.core.waiter import WaitPolicy, Waiter

POLICY = WaitPolicy(timeout=5.0, poll_interval=0.25)


def counting(results):
    """fn returning successive `results` (exceptions are raised), counting calls."""
    calls = []

    def fn():
        calls.append(1)
        r = results[min(len(calls), len(results)) - 1]
        if isinstance(r, BaseException):
            raise r
        return r

    return fn, calls


def test_returns_on_first_success_without_sleeping(clock: FakeClock, waiter: Waiter) -> None:
    fn, calls = counting([42])
    assert waiter.until(POLICY, fn) == 42
    assert len(calls) == 1
    assert clock.sleeps == []


def test_returns_one_poll_after_condition_holds(clock: FakeClock, waiter: Waiter) -> None:
    fn, calls = counting([None, False, "ready"])
    assert waiter.until(POLICY, fn) == "ready"
    assert len(calls) == 3
    assert clock.sleeps == [0.25, 0.25]


def test_falsy_values_other_than_none_and_false_count_as_success(waiter: Waiter) -> None:
    fn, _ = counting([0])
    assert waiter.until(POLICY, fn) == 0
    fn, _ = counting([""])
    assert waiter.until(POLICY, fn) == ""


@pytest.mark.parametrize("timeout", [0.0, -1.0])
def test_non_positive_timeout_still_polls_once(waiter: Waiter, timeout: float) -> None:
    fn, calls = counting([None])
    with pytest.raises(TimeoutError):
        waiter.until(WaitPolicy(timeout=timeout), fn)
    assert len(calls) == 1


def test_ignored_errors_end_in_timeout_not_the_error(clock: FakeClock, waiter: Waiter) -> None:
    missing = NoSuchElement("find", "not yet")
    fn, calls = counting([missing])
    with pytest.raises(TimeoutError) as info:
        waiter.until(POLICY, fn, message="presence of #late")
    assert not isinstance(info.value, NoSuchElement)
    assert info.value.__cause__ is missing
    assert info.value.polls == len(calls) == 21
    assert "presence of #late not met within 5s" in str(info.value)
    assert clock.now == pytest.approx(5.0)


def test_other_errors_propagate_immediately(clock: FakeClock, waiter: Waiter) -> None:
    fn, calls = counting([ValueError("boom")])
    with pytest.raises(ValueError):
        waiter.until(POLICY, fn)
    assert len(calls) == 1
    assert clock.now == 0.0


def test_strict_policy_does_not_ignore_missing_elements(waiter: Waiter) -> None:
    fn, calls = counting([NoSuchElement("find", "gone")])
    with pytest.raises(NoSuchElement):
        waiter.until(POLICY.strict(), fn)
    assert len(calls) == 1


def test_last_sleep_is_cut_to_the_deadline(clock: FakeClock, waiter: Waiter) -> None:
    fn, _ = counting([None])
    with pytest.raises(TimeoutError):
        waiter.until(WaitPolicy(timeout=0.6, poll_interval=0.25), fn)
    assert clock.sleeps == pytest.approx([0.25, 0.25, 0.1])


def test_nested_wait_never_outlives_outer_deadline(clock: FakeClock, waiter: Waiter) -> None:
    inner_policy = WaitPolicy(timeout=10.0, poll_interval=0.25)

    def outer():
        return waiter.until(inner_policy, lambda: None)

    with pytest.raises(TimeoutError):
        waiter.until(WaitPolicy(timeout=1.0, poll_interval=0.25).nested(), outer)
    assert clock.now == pytest.approx(1.0)


def test_capped_inner_wait_reports_the_time_it_actually_had(clock: FakeClock, waiter: Waiter) -> None:
    errors = []

    def outer():
        try:
            return waiter.until(WaitPolicy(timeout=10.0, poll_interval=0.25), lambda: None)
        except TimeoutError as e:
            errors.append(e)
            raise

    with pytest.raises(TimeoutError):
        waiter.until(WaitPolicy(timeout=1.0, poll_interval=0.25), outer)
    assert errors[0].timeout == pytest.approx(1.0)
    assert "within 1s" in str(errors[0])


def test_nested_policy_retries_inner_timeouts(clock: FakeClock, waiter: Waiter) -> None:
    attempts = []

    def outer():
        attempts.append(clock.now)
        if len(attempts) < 3:
            raise TimeoutError("inner wait gave up")
        return "done"

    assert waiter.until(POLICY.nested(), outer) == "done"
    assert len(attempts) == 3


def test_wait_for_sleeps_unconditionally(clock: FakeClock, waiter: Waiter) -> None:
    waiter.wait_for(0)
    waiter.wait_for(2.0)
    assert clock.sleeps == [2.0]


def test_policy_helpers() -> None:
    assert POLICY.with_timeout(1.0).timeout == 1.0
    assert POLICY.strict().ignored == ()
    assert TimeoutError in POLICY.nested().ignored
    assert POLICY.ignoring(NoSuchElement).ignored == (NoSuchElement,)
    explicit = WaitPolicy(timeout=2.0)
    assert POLICY.override(wait=explicit, timeout=9.0) is explicit
    assert POLICY.override(timeout=9.0).timeout == 9.0
    assert POLICY.override() is POLICY
    with pytest.raises(ValueError):
        WaitPolicy(poll_interval=0)


def test_module_level_wait_until_uses_default_waiter() -> None:
    from fluentium.core.waiter import wait_until

    assert wait_until(POLICY, lambda: "now") == "now"
