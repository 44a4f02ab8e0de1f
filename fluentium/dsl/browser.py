"""
Browser session: the entry point of the DSL.

    with launch() as browser:
        page = browser.open("https://en.wikipedia.org/wiki")
        with page.expect_page_load():
            page.element(Id("searchInput")).enter("cheese", Key.ENTER)
        assert page.element(Id("firstHeading")).text == "Cheese"

The Browser owns the driver connection; pages, windows and element handles
only borrow it. One Browser must only be used from one thread at a time.
"""
# @file purpose: Implement the browser session object and the Playwright launcher.

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from ..core.hooks import BrowserHooks, notify_failures
from ..core.settings import Settings, settings as default_settings
from ..core.waiter import WaitPolicy, Waiter, default_waiter
from ..io.driver import BrowserDriver
from .frame import FrameScope
from .page import Navigation, Page, UrlPage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Browser:
    """
    A running browser instance.

    - default_wait: policy element lookups and waits use unless overridden
    - hooks: notified on navigation, clicks, value changes, close and failures
    - waiter: the polling engine (inject one with a fake clock in tests)
    """

    def __init__(
        self,
        driver: BrowserDriver,
        *,
        settings: Settings | None = None,
        hooks: BrowserHooks | None = None,
        waiter: Waiter | None = None,
        default_wait: WaitPolicy | None = None,
    ) -> None:
        cfg = settings or default_settings
        self.driver = driver
        self.settings = cfg
        self.hooks: BrowserHooks = hooks or BrowserHooks()
        self.waiter: Waiter = waiter or default_waiter
        self.default_wait: WaitPolicy = default_wait or WaitPolicy.from_settings(cfg)
        self.alert_timeout: float = cfg.alert_timeout_seconds
        self.autoscroll: bool = cfg.autoscroll
        self.frames = FrameScope(self)
        self.navigation = Navigation(self)

    # ---------------- navigation ----------------

    def navigate(self, url: str) -> None:
        with notify_failures(self.hooks):
            self.hooks.before_navigate(url)
            logger.debug("navigating to %s", url)
            self.driver.open_url(url)
            self.hooks.after_navigate(url)

    def open(self, url: str, actions: Optional[Callable[[UrlPage], Any]] = None) -> UrlPage:
        """Navigate the current window to `url` and return the page opened there."""
        page = UrlPage(self, url)
        if actions is not None:
            actions(page)
        return page

    def browse(self, url: str, actions: Callable[[UrlPage], T]) -> T:
        """Open `url`, run `actions` on the page, then close the window."""
        page = self.open(url)
        try:
            return actions(page)
        finally:
            self.close_window()

    @property
    def page(self) -> Page:
        """The document the driver currently addresses."""
        return Page(self)

    # ---------------- waits ----------------

    def wait_until(self, fn: Callable[[], Optional[T]], *, timeout: float | None = None) -> T:
        return self.waiter.until(self.default_wait.override(timeout=timeout).nested(), fn)

    def wait_for(self, seconds: float) -> None:
        self.waiter.wait_for(seconds)

    # ---------------- lifecycle ----------------

    def close_window(self) -> None:
        with notify_failures(self.hooks):
            self.hooks.before_close()
            self.driver.close_current_window()

    def quit(self) -> None:
        self.driver.quit()

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, *exc: object) -> None:
        self.quit()


def launch(
    settings: Settings | None = None,
    *,
    hooks: BrowserHooks | None = None,
    waiter: Waiter | None = None,
) -> Browser:
    """Start a Playwright-driven browser configured from `settings`."""
    from ..io.playwright_driver import PlaywrightDriver

    cfg = settings or default_settings
    driver = PlaywrightDriver(
        browser_name=cfg.browser,
        headless=cfg.headless,
        slow_mo_ms=cfg.slow_mo_ms,
    )
    driver.start()
    return Browser(driver, settings=cfg, hooks=hooks, waiter=waiter)
