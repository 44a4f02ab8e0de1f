"""
Pages: the scope of one logical document in a browser session.

A Page is not a DOM snapshot; every read goes through the driver when it is
made. `UrlPage` navigates when it is constructed and resolves relative URLs
against its base URL; plain `Page` objects wrap whatever document the driver
currently addresses (after history navigation or a window switch).

Extend `UrlPage` (or `Page`) with your own classes to build page objects.
"""
# @file purpose: Implement page contexts, navigation and alert handling.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, TypeVar, Union

from ..core.conditions import PageLoad, alert_is_present
from ..core.errors import NoAlertPresent, TimeoutError
from ..core.hooks import notify_failures
from ..core.locator import Locator, XPath, xpath_literal
from ..core.waiter import WaitPolicy
from .element import ElementActions, ElementHandle, RootResolution, SearchContext, collect
from .frame import FrameTarget
from .select import SelectOptions

if TYPE_CHECKING:
    from ..io.driver import AlertRef, BrowserDriver
    from .browser import Browser
    from .window import Window

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound="Page")


class Alert:
    """An alert/confirm/prompt dialog raised by the page."""

    def __init__(self, ref: "AlertRef") -> None:
        self._ref = ref

    def accept(self) -> None:
        self._ref.accept()

    def dismiss(self) -> None:
        self._ref.dismiss()

    @property
    def text(self) -> str:
        return self._ref.text


class Page(SearchContext):
    """
    The document the driver currently addresses.

    Owns a default wait policy (the browser's unless given) and a mutable
    `autoscroll` flag picked up by every element interaction.
    """

    def __init__(self, browser: "Browser", *, wait: WaitPolicy | None = None,
                 autoscroll: bool | None = None) -> None:
        self.browser = browser
        self.wait: WaitPolicy = wait or browser.default_wait
        self.autoscroll: bool = browser.autoscroll if autoscroll is None else autoscroll

    @property
    def driver(self) -> "BrowserDriver":
        return self.browser.driver

    # ---------------- lookup ----------------

    def element(self, locator: Locator, actions: ElementActions = None) -> ElementHandle:
        e = ElementHandle(self, RootResolution(self.driver), locator, self.wait)
        if actions is not None:
            actions(e)
        return e

    def elements(
        self, locator: Locator, *, wait: WaitPolicy | None = None, timeout: float | None = None
    ) -> list[ElementHandle]:
        return collect(self, RootResolution(self.driver), locator, self.wait, wait=wait, timeout=timeout)

    def click(self, target: Union[Locator, str]) -> None:
        """Click the element `target` locates; a string clicks the input whose value it is."""
        if isinstance(target, str):
            target = XPath(f"//input[@value={xpath_literal(target)}]")
        self.element(target).click()

    def option(self, locator: Locator, actions: Optional[Callable[[SelectOptions], Any]] = None) -> SelectOptions:
        """The <select> found by `locator`, checked eagerly to be a select element."""
        options = SelectOptions(self.element(locator))
        if actions is not None:
            actions(options)
        return options

    # ---------------- waits ----------------

    def wait_until(self, fn: Callable[[], Optional[T]], *, timeout: float | None = None,
                   wait: WaitPolicy | None = None) -> T:
        """
        Poll `fn` until it returns neither None nor False.

        Missing elements and timeouts of waits inside `fn` are retried, so
        `page.wait_until(lambda: page.element(Id("status")).text == "done")`
        works before #status exists.
        """
        policy = self.wait.override(wait=wait, timeout=timeout).nested()
        return self.browser.waiter.until(policy, fn)

    def wait_for(self, seconds: float) -> "Page":
        """Unconditional pause; only for cases with nothing observable to wait on."""
        self.browser.waiter.wait_for(seconds)
        return self

    def wait_for_alert(self, timeout: float | None = None) -> Alert:
        """Wait for an alert dialog; NoAlertPresent if none appears in time."""
        limit = self.browser.alert_timeout if timeout is None else timeout
        policy = self.wait.with_timeout(limit).strict()
        with notify_failures(self.browser.hooks):
            try:
                ref = self.browser.waiter.until_native(self.driver, policy, alert_is_present)
            except TimeoutError as e:
                waited = limit if e.timeout is None else e.timeout
                raise NoAlertPresent(f"no alert appeared within {waited:g}s") from e
        return Alert(ref)

    def page_load(self) -> PageLoad:
        """Capture the current document root; the condition holds once it is replaced."""
        return PageLoad(self.driver)

    def wait_for_page_load(self, condition: PageLoad, *, timeout: float | None = None) -> "Page":
        policy = self.wait.override(timeout=timeout).strict()
        logger.debug("waiting up to %gs for the document to be replaced", policy.timeout)
        self.browser.waiter.until_native(self.driver, policy, condition)
        return self

    @contextmanager
    def expect_page_load(self, *, timeout: float | None = None) -> Iterator["Page"]:
        """
        Wait for the full-page navigation triggered inside the block:

            with page.expect_page_load():
                page.element(Id("submit")).click()

        In-page transitions that keep the <html> element are not detected.
        """
        condition = self.page_load()
        yield self
        self.wait_for_page_load(condition, timeout=timeout)

    # ---------------- document ----------------

    @property
    def source(self) -> str:
        """Page source; may not reflect later modifications by scripts."""
        return self.driver.page_source

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def refresh(self) -> "Page":
        url = self.current_url
        with notify_failures(self.browser.hooks):
            self.browser.hooks.before_navigate(url)
            self.driver.refresh()
            self.browser.hooks.after_navigate(url)
        return self

    def visit(self: P, actions: Callable[[P], Any]) -> P:
        actions(self)
        return self

    # ---------------- frames ----------------

    @contextmanager
    def frame(self, target: FrameTarget) -> Iterator["Page"]:
        """
        Address the frame `target` (index among the current document's frames,
        or a locator of the frame element) for the duration of the block.
        """
        with self.browser.frames.entered(self, target):
            yield self

    def in_frame(self, target: FrameTarget, action: Callable[["Page"], T]) -> T:
        with self.frame(target) as page:
            return action(page)

    # ---------------- windows ----------------

    @property
    def window(self) -> "Window":
        from .window import Window

        return Window(self)

    def open_link(self, link: Locator) -> "Window":
        """
        Click `link` and return the window of the page it opened. This is the
        current window unless the link targets a new one, which then has to be
        closed by the caller.
        """
        from .window import Window

        self.element(link).click()
        return Window(self)

    @contextmanager
    def temp_window(self, link: Locator, *, timeout: float | None = None) -> Iterator["Page"]:
        from .window import temp_window

        with temp_window(self, link, timeout=timeout) as page:
            yield page

    def in_temp_window(self, link: Locator, action: Callable[["Page"], T], *,
                       timeout: float | None = None) -> T:
        """Open `link` in a new window, run `action` there, close it and come back."""
        with self.temp_window(link, timeout=timeout) as page:
            return action(page)


class UrlPage(Page):
    """
    A page opened at a URL. Construction navigates.

    Relative URLs passed to `open()` are resolved against `base_url`.
    """

    def __init__(self, browser: "Browser", url: str, *, base_url: str | None = None,
                 wait: WaitPolicy | None = None, autoscroll: bool | None = None) -> None:
        super().__init__(browser, wait=wait, autoscroll=autoscroll)
        self.base_url = base_url or url
        browser.navigate(url)

    def url_for(self, relative_url: str) -> str:
        return f"{self.base_url.rstrip('/')}/{relative_url.lstrip('/')}"

    def open(self, relative_url: str, actions: Optional[Callable[["UrlPage"], Any]] = None) -> "UrlPage":
        page = UrlPage(self.browser, self.url_for(relative_url), base_url=self.base_url,
                       wait=self.wait, autoscroll=self.autoscroll)
        if actions is not None:
            actions(page)
        return page


class Navigation:
    """
    Browser history. Each move yields a Page for the document reached and is
    reported to the navigate hooks: `before_navigate` with the URL being left,
    `after_navigate` with the URL arrived at.
    """

    def __init__(self, browser: "Browser") -> None:
        self.browser = browser

    def _move(self, step: Callable[[], Any]) -> Page:
        hooks = self.browser.hooks
        with notify_failures(hooks):
            hooks.before_navigate(self.browser.driver.current_url)
            step()
            hooks.after_navigate(self.browser.driver.current_url)
        return Page(self.browser)

    def back(self) -> Page:
        return self._move(self.browser.driver.back)

    def forward(self) -> Page:
        return self._move(self.browser.driver.forward)
