"""
Playwright-based BrowserDriver implementation (sync API).

Conforms to io/driver.py's BrowserDriver Protocol. Playwright has no global
"current window" or "current frame", so this driver keeps that addressing
state itself:
- every page of the browser context is a window, with handles assigned in
  creation order ("window-1", "window-2", ...);
- the current frame is a Playwright `Frame`, reset to the page's main frame
  on navigation and window switches;
- dialogs are queued per page as they open and handed out as alerts.

Playwright errors are translated into fluentium errors at this boundary.
"""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Union

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Dialog,
    ElementHandle,
    Error as PlaywrightError,
    Frame,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from ..core.errors import (
    DriverError,
    ElementNotInteractable,
    FluentiumError,
    InvalidElementState,
    NoAlertPresent,
    NoSuchElement,
    NoSuchFrame,
    NoSuchWindow,
    StaleElement,
    UnsupportedOperation,
)
from ..core.locator import (
    ANY,
    CHAINED,
    CLASS_NAME,
    CSS,
    ID,
    LINK_TEXT,
    NAME,
    PARTIAL_LINK_TEXT,
    TAG_NAME,
    XPATH,
    Selector,
    css_string,
    xpath_literal,
)
from .driver import WindowSize

logger = logging.getLogger(__name__)

_STALE_MARKERS = (
    "not attached to the DOM",
    "Execution context was destroyed",
    "is disposed",
    "Cannot find context with specified id",
)
_NOT_EDITABLE_MARKERS = ("not an <input>", "not editable")
# actions whose Playwright timeout means the element refused the input
_INTERACTIONS = frozenset({"click", "send_keys", "press", "clear"})

_SUBMIT_JS = """e => {
    const form = e.tagName === 'FORM' ? e : (e.form || e.closest('form'));
    if (!form) return false;
    if (form.requestSubmit) form.requestSubmit(); else form.submit();
    return true;
}"""

_SET_SELECTED_JS = """(o, selected) => {
    o.selected = selected;
    const select = o.closest('select');
    if (select) {
        select.dispatchEvent(new Event('input', {bubbles: true}));
        select.dispatchEvent(new Event('change', {bubbles: true}));
    }
}"""

# property first (current value of inputs), attribute otherwise; booleans as "true"/null
_GET_ATTRIBUTE_JS = """(e, name) => {
    const prop = e[name];
    if (typeof prop === 'boolean') return prop ? 'true' : null;
    if (prop !== undefined && prop !== null && typeof prop !== 'object' && typeof prop !== 'function')
        return String(prop);
    return e.getAttribute(name);
}"""


@contextmanager
def _translated(action: str, selector: Optional[Selector] = None) -> Iterator[None]:
    try:
        yield
    except FluentiumError:
        raise
    except PlaywrightTimeoutError as e:
        if action not in _INTERACTIONS:
            raise DriverError(f"[{action}] {e}") from e
        raise ElementNotInteractable(
            action, "element did not accept the interaction in time", locator=selector, cause=e
        ) from e
    except PlaywrightError as e:
        msg = str(e)
        if any(m in msg for m in _STALE_MARKERS):
            raise StaleElement(
                action, "element is no longer attached to the document", locator=selector, cause=e
            ) from e
        if any(m in msg for m in _NOT_EDITABLE_MARKERS):
            raise InvalidElementState(action, "element is not editable", locator=selector, cause=e) from e
        raise DriverError(f"[{action}] {msg}") from e


def native_selector(selector: Selector) -> str:
    """Render a simple (non-composite) Selector as a Playwright selector string."""
    value = selector.value
    if not isinstance(value, str):
        raise UnsupportedOperation(f"composite selector has no single native form: {selector}")
    if selector.using == ID:
        return f"css=[id={css_string(value)}]"
    if selector.using == NAME:
        return f"css=[name={css_string(value)}]"
    if selector.using == CLASS_NAME:
        return f"css=[class~={css_string(value)}]"
    if selector.using in (CSS, TAG_NAME):
        return f"css={value}"
    if selector.using == XPATH:
        return f"xpath={value}"
    if selector.using == LINK_TEXT:
        return f"xpath=.//a[normalize-space(.)={xpath_literal(value.strip())}]"
    if selector.using == PARTIAL_LINK_TEXT:
        return f"xpath=.//a[contains(., {xpath_literal(value)})]"
    raise UnsupportedOperation(f"unknown locating strategy: {selector.using!r}")


def _query_all(root: Union[Frame, ElementHandle], selector: Selector) -> list[ElementHandle]:
    if selector.using == CHAINED:
        scopes: list[Any] = [root]
        for part in selector.members:
            scopes = [match for scope in scopes for match in _query_all(scope, part)]
        return scopes
    if selector.using == ANY:
        return [match for part in selector.members for match in _query_all(root, part)]
    return root.query_selector_all(native_selector(selector))


class PlaywrightAlert:
    def __init__(self, dialog: Dialog, pending: list[Dialog]) -> None:
        self._dialog = dialog
        self._pending = pending

    @property
    def text(self) -> str:
        return self._dialog.message

    def _done(self) -> None:
        if self._dialog in self._pending:
            self._pending.remove(self._dialog)

    def accept(self) -> None:
        with _translated("accept alert"):
            self._dialog.accept()
        self._done()

    def dismiss(self) -> None:
        with _translated("dismiss alert"):
            self._dialog.dismiss()
        self._done()


class PlaywrightElement:
    """ElementRef over a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle, driver: "PlaywrightDriver") -> None:
        self._handle = handle
        self._driver = driver

    @property
    def handle(self) -> ElementHandle:
        return self._handle

    # -------- lookup --------

    def find_elements(self, selector: Selector) -> list["PlaywrightElement"]:
        with _translated("find_elements", selector):
            return [PlaywrightElement(h, self._driver) for h in _query_all(self._handle, selector)]

    def find_element(self, selector: Selector) -> "PlaywrightElement":
        matches = self.find_elements(selector)
        if not matches:
            raise NoSuchElement("find_element", "no element matched", locator=selector)
        return matches[0]

    # -------- interactions --------

    def click(self, *, modifiers: Sequence[str] = ()) -> None:
        with _translated("click"):
            self._handle.click(
                modifiers=list(modifiers) or None,  # type: ignore[arg-type]
                timeout=self._driver.action_timeout_ms,
            )

    def send_keys(self, text: str) -> None:
        with _translated("send_keys"):
            self._handle.type(text, timeout=self._driver.action_timeout_ms)

    def press(self, keys: str) -> None:
        with _translated("press"):
            self._handle.press(keys, timeout=self._driver.action_timeout_ms)

    def clear(self) -> None:
        with _translated("clear"):
            self._handle.fill("", timeout=self._driver.action_timeout_ms)

    def submit(self) -> None:
        with _translated("submit"):
            submitted = self._handle.evaluate(_SUBMIT_JS)
        if not submitted:
            raise NoSuchElement("submit", "element is not part of a form")

    def scroll_into_view(self) -> None:
        with _translated("scroll_into_view"):
            self._handle.scroll_into_view_if_needed(timeout=self._driver.action_timeout_ms)

    def set_selected(self, selected: bool) -> None:
        with _translated("select option"):
            self._handle.evaluate(_SET_SELECTED_JS, selected)

    # -------- state --------

    @property
    def tag_name(self) -> str:
        with _translated("tag_name"):
            return str(self._handle.evaluate("e => e.tagName.toLowerCase()"))

    @property
    def text(self) -> str:
        with _translated("text"):
            return self._handle.inner_text()

    def is_selected(self) -> bool:
        with _translated("is_selected"):
            return bool(self._handle.evaluate("e => !!(e.checked || e.selected)"))

    def is_enabled(self) -> bool:
        with _translated("is_enabled"):
            return self._handle.is_enabled()

    def is_displayed(self) -> bool:
        with _translated("is_displayed"):
            return self._handle.is_visible()

    def get_attribute(self, name: str) -> Optional[str]:
        with _translated("get_attribute"):
            return self._handle.evaluate(_GET_ATTRIBUTE_JS, name)


class PlaywrightDriver:
    """
    A concrete BrowserDriver based on Playwright.
    - One incognito BrowserContext per driver; its pages are the windows.
    - `action_timeout_ms` bounds Playwright's own actionability checks; the
      DSL's wait policies do the waiting before actions are issued.
    """

    def __init__(
        self,
        *,
        browser_name: str = "chromium",
        headless: bool = True,
        slow_mo_ms: int = 0,
        action_timeout_ms: int = 5_000,
        navigation_timeout_ms: int = 30_000,
    ) -> None:
        self.browser_name = browser_name
        self.headless = headless
        self.slow_mo_ms = slow_mo_ms
        self.action_timeout_ms = action_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms

        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._handles: dict[str, Page] = {}
        self._dialogs: dict[Page, list[Dialog]] = {}
        self._ids = itertools.count(1)
        self._current: Optional[str] = None
        self._frame: Optional[Frame] = None

    # ---------------- lifecycle ----------------

    def start(self) -> None:
        """Launch Playwright, the browser and a first window, once."""
        if self._browser is not None:
            return
        try:
            with _translated("start"):
                pw = sync_playwright().start()
                self._pw = pw
                launcher = getattr(pw, self.browser_name)
                self._browser = launcher.launch(headless=self.headless, slow_mo=self.slow_mo_ms)
                self._context = self._browser.new_context()
                self._context.set_default_navigation_timeout(self.navigation_timeout_ms)
                self._context.on("page", self._register)
                page = self._context.new_page()
        except DriverError:
            self.quit()
            raise
        self._current = self._register(page)
        self._frame = page.main_frame
        logger.debug("started %s (headless=%s)", self.browser_name, self.headless)

    def quit(self) -> None:
        """Close the context and browser, then stop Playwright."""
        try:
            if self._context is not None:
                try:
                    self._context.close()
                except PlaywrightError:
                    logger.debug("context already closed")
            if self._browser is not None:
                self._browser.close()
        finally:
            if self._pw is not None:
                self._pw.stop()
            self._pw = None
            self._browser = None
            self._context = None
            self._handles.clear()
            self._dialogs.clear()

    # ---------------- navigation ----------------

    def open_url(self, url: str) -> None:
        page = self._page()
        with _translated("open_url"):
            page.goto(url, wait_until="load")
        self._frame = page.main_frame

    def back(self) -> None:
        page = self._page()
        with _translated("back"):
            page.go_back(wait_until="load")
        self._frame = page.main_frame

    def forward(self) -> None:
        page = self._page()
        with _translated("forward"):
            page.go_forward(wait_until="load")
        self._frame = page.main_frame

    def refresh(self) -> None:
        page = self._page()
        with _translated("refresh"):
            page.reload(wait_until="load")
        self._frame = page.main_frame

    @property
    def current_url(self) -> str:
        return self._page().url

    @property
    def page_source(self) -> str:
        with _translated("page_source"):
            return self._current_frame().content()

    @property
    def title(self) -> str:
        with _translated("title"):
            return self._page().title()

    # ---------------- lookup ----------------

    def find_elements(self, selector: Selector) -> list[PlaywrightElement]:
        frame = self._current_frame()
        with _translated("find_elements", selector):
            return [PlaywrightElement(h, self) for h in _query_all(frame, selector)]

    def find_element(self, selector: Selector) -> PlaywrightElement:
        matches = self.find_elements(selector)
        if not matches:
            raise NoSuchElement("find_element", "no element matched", locator=selector)
        return matches[0]

    # ---------------- windows ----------------

    @property
    def current_window_handle(self) -> str:
        if self._current is None:
            raise NoSuchWindow("no window is open")
        return self._current

    @property
    def all_window_handles(self) -> list[str]:
        self._pump()
        return list(self._handles)

    def switch_to_window(self, handle: str) -> None:
        self._pump()
        page = self._handles.get(handle)
        if page is None or page.is_closed():
            raise NoSuchWindow(f"no open window with handle {handle!r}")
        with _translated("switch_to_window"):
            page.bring_to_front()
        logger.debug("switched to window %s", handle)
        self._current = handle
        self._frame = page.main_frame

    def close_current_window(self) -> None:
        page = self._page()
        with _translated("close_window"):
            page.close()
        self._forget(page)

    def get_window_size(self) -> WindowSize:
        page = self._page()
        size = page.viewport_size
        if size is None:
            with _translated("window size"):
                w, h = page.evaluate("() => [window.innerWidth, window.innerHeight]")
            return WindowSize(int(w), int(h))
        return WindowSize(size["width"], size["height"])

    def set_window_size(self, size: WindowSize) -> None:
        with _translated("set window size"):
            self._page().set_viewport_size({"width": size.width, "height": size.height})

    # ---------------- frames ----------------

    def switch_to_frame(self, target: Union[int, Any]) -> None:
        current = self._current_frame()
        if isinstance(target, int):
            children = current.child_frames
            if not 0 <= target < len(children):
                raise NoSuchFrame(f"no frame at index {target} ({len(children)} frame(s))")
            self._frame = children[target]
        elif isinstance(target, PlaywrightElement):
            with _translated("switch_to_frame"):
                frame = target.handle.content_frame()
            if frame is None:
                raise NoSuchFrame("element is not a frame")
            self._frame = frame
        else:
            raise NoSuchFrame(f"cannot switch to frame {target!r}")
        logger.debug("switched to frame %s", self._frame.name or self._frame.url)

    def switch_to_default_content(self) -> None:
        self._frame = self._page().main_frame

    # ---------------- alerts ----------------

    def switch_to_alert(self) -> PlaywrightAlert:
        self._pump()
        pending = self._dialogs.get(self._page(), [])
        if not pending:
            raise NoAlertPresent("no alert is present")
        return PlaywrightAlert(pending[0], pending)

    # ---------------- internals ----------------

    def _ensure_started(self) -> None:
        if self._browser is None:
            raise RuntimeError("Browser not started. Call start() first.")

    def _register(self, page: Page) -> str:
        for handle, known in self._handles.items():
            if known is page:
                return handle
        handle = f"window-{next(self._ids)}"
        self._handles[handle] = page
        pending: list[Dialog] = []
        self._dialogs[page] = pending
        page.on("dialog", pending.append)
        page.on("close", self._forget)
        logger.debug("registered window %s", handle)
        return handle

    def _forget(self, page: Page) -> None:
        for handle, known in list(self._handles.items()):
            if known is page:
                del self._handles[handle]
        self._dialogs.pop(page, None)

    def _page(self) -> Page:
        self._ensure_started()
        page = self._handles.get(self._current) if self._current else None
        if page is None:
            raise NoSuchWindow(f"window {self._current!r} is closed")
        return page

    def _current_frame(self) -> Frame:
        page = self._page()
        if self._frame is None or self._frame.is_detached():
            self._frame = page.main_frame
        return self._frame

    def _pump(self) -> None:
        """Give Playwright a chance to dispatch pending events (new pages, dialogs)."""
        for page in self._handles.values():
            if not page.is_closed():
                page.wait_for_timeout(1)
                return
