"""
Browser windows (and tabs).

The driver's current window is global mutable state that other scopes may
change at any time, so a Window remembers the handle it was created for and
switches back to it before acting on it.

Only the viewport size can be read and set. Playwright has no control over
the OS window, so there is no position, maximize or fullscreen.
"""
# @file purpose: Implement window handles and temporary-window scoping.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from ..core.conditions import new_window_opened
from ..core.hooks import notify_failures
from ..core.keys import modifier_key
from ..core.locator import Locator
from ..core.waiter import WaitPolicy
from ..io.driver import WindowSize
from .element import ElementActions, ElementHandle, SearchContext
from .page import Page

if TYPE_CHECKING:
    from ..io.driver import BrowserDriver

logger = logging.getLogger(__name__)


class Window(SearchContext):
    """A single open window, bound to the handle current when it was created."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self.handle: str = page.driver.current_window_handle

    @property
    def driver(self) -> "BrowserDriver":
        return self.page.driver

    @property
    def is_current(self) -> bool:
        return self.driver.current_window_handle == self.handle

    def switch_to(self) -> Page:
        """Make this the driver's current window and return its page."""
        if not self.is_current:
            logger.debug("switching to window %s", self.handle)
            self.driver.switch_to_window(self.handle)
        return self.page

    def close(self) -> None:
        """Close this window (never another one). The Window is unusable afterwards."""
        with notify_failures(self.page.browser.hooks):
            self.switch_to()
            self.page.browser.hooks.before_close()
            self.driver.close_current_window()

    @property
    def size(self) -> WindowSize:
        self.switch_to()
        return self.driver.get_window_size()

    @size.setter
    def size(self, value: WindowSize | tuple[int, int]) -> None:
        self.switch_to()
        self.driver.set_window_size(WindowSize(*value))

    # ---------------- search context ----------------

    def element(self, locator: Locator, actions: ElementActions = None) -> ElementHandle:
        return self.page.element(locator, actions)

    def elements(
        self, locator: Locator, *, wait: WaitPolicy | None = None, timeout: float | None = None
    ) -> list[ElementHandle]:
        return self.page.elements(locator, wait=wait, timeout=timeout)

    def __repr__(self) -> str:
        return f"Window({self.handle!r})"


@contextmanager
def temp_window(page: Page, link: Locator, *, timeout: float | None = None) -> Iterator[Page]:
    """
    Modifier-click `link` so it opens in a new window, wait for that window
    (the last handle the driver reports), address it for the block, then close
    it and switch back to the original window.
    """
    browser = page.browser
    driver = page.driver
    original = driver.current_window_handle
    known = set(driver.all_window_handles)

    page.element(link).click(modifiers=(modifier_key(),))
    policy = page.wait.override(timeout=timeout).strict()
    newest = browser.waiter.until_native(driver, policy, new_window_opened(known))

    logger.debug("temporary window %s opened from %s", newest, original)
    driver.switch_to_window(newest)
    window = Window(Page(browser, wait=page.wait, autoscroll=page.autoscroll))
    try:
        yield window.page
    finally:
        try:
            window.close()
        finally:
            driver.switch_to_window(original)
            browser.frames.restore(page)
