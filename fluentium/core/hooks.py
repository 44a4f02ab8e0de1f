"""
Event-notification hooks fired around browser interactions.

Hooks are a side channel: they observe navigation, clicks, value changes,
window closing and failures, but never alter control flow. `on_exception`
is called right before the DSL re-raises the original exception.

    browser = Browser(driver, hooks=CompositeHooks(Verbose(), SlowDown(0.25)))
"""
# @file purpose: Define interaction hooks plus the verbose and slow-down presets.

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator

logger = logging.getLogger(__name__)


class BrowserHooks:
    """Hooks that do nothing. Subclass and override what you need."""

    def before_navigate(self, url: str) -> None:
        pass

    def after_navigate(self, url: str) -> None:
        pass

    def before_click(self, target: Any) -> None:
        pass

    def after_click(self, target: Any) -> None:
        pass

    def before_change_value(self, target: Any, text: str) -> None:
        pass

    def after_change_value(self, target: Any, text: str) -> None:
        pass

    def before_close(self) -> None:
        pass

    def on_exception(self, error: BaseException) -> None:
        pass


class Verbose(BrowserHooks):
    """Report every interaction through `printer` (defaults to the module logger at INFO)."""

    def __init__(self, printer: Callable[[str], Any] | None = None) -> None:
        self.printer = printer or logger.info

    def before_navigate(self, url: str) -> None:
        self.printer(f"will navigate to {url}.")

    def after_navigate(self, url: str) -> None:
        self.printer(f"navigated to {url}.")

    def before_click(self, target: Any) -> None:
        self.printer(f"will click on {target}")

    def before_change_value(self, target: Any, text: str) -> None:
        self.printer(f"will enter '{text}' into {target}")

    def before_close(self) -> None:
        self.printer("will close window.")

    def on_exception(self, error: BaseException) -> None:
        self.printer(f"action failed with error {error}")


class SlowDown(BrowserHooks):
    """Pause before clicks and text entry so a human observer can follow along."""

    def __init__(self, delay: float = 0.25, *, sleep: Callable[[float], Any] = time.sleep) -> None:
        self.delay = delay
        self.sleep = sleep

    def before_click(self, target: Any) -> None:
        self.sleep(self.delay)

    def before_change_value(self, target: Any, text: str) -> None:
        self.sleep(self.delay)


class CompositeHooks(BrowserHooks):
    """Fan every event out to several hooks, in order."""

    def __init__(self, *hooks: BrowserHooks) -> None:
        self.hooks: tuple[BrowserHooks, ...] = tuple(hooks)

    def before_navigate(self, url: str) -> None:
        for h in self.hooks:
            h.before_navigate(url)

    def after_navigate(self, url: str) -> None:
        for h in self.hooks:
            h.after_navigate(url)

    def before_click(self, target: Any) -> None:
        for h in self.hooks:
            h.before_click(target)

    def after_click(self, target: Any) -> None:
        for h in self.hooks:
            h.after_click(target)

    def before_change_value(self, target: Any, text: str) -> None:
        for h in self.hooks:
            h.before_change_value(target, text)

    def after_change_value(self, target: Any, text: str) -> None:
        for h in self.hooks:
            h.after_change_value(target, text)

    def before_close(self) -> None:
        for h in self.hooks:
            h.before_close()

    def on_exception(self, error: BaseException) -> None:
        for h in self.hooks:
            h.on_exception(error)


@contextmanager
def notify_failures(hooks: BrowserHooks) -> Iterator[None]:
    """Report an escaping exception to `hooks.on_exception`, then re-raise it unchanged."""
    try:
        yield
    except Exception as e:
        hooks.on_exception(e)
        raise
