"""
Reusable driver-level conditions for `Waiter.until_native()`.

A condition is a callable taking the driver and returning a truthy value once
satisfied (None/False while not yet). `PageLoad` is the idiomatic page
transition signal: capture it *before* the navigating action, wait on it
afterwards. It only detects navigations that replace the document root, not
in-page (single-page-app) content swaps.
"""
# @file purpose: Provide native wait conditions, including page-load detection.

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Collection, Generic, Optional, TypeVar

from .errors import NoAlertPresent, StaleElement
from .locator import TAG_NAME, Selector

if TYPE_CHECKING:
    from ..io.driver import AlertRef, BrowserDriver, ElementRef

T = TypeVar("T")

DOCUMENT_ROOT = Selector(TAG_NAME, "html")


class Condition(Generic[T]):
    """A described driver predicate/extractor."""

    def __init__(self, description: str, fn: Callable[["BrowserDriver"], Optional[T]]) -> None:
        self.description = description
        self._fn = fn

    def __call__(self, driver: "BrowserDriver") -> Optional[T]:
        return self._fn(driver)

    def __repr__(self) -> str:
        return f"Condition({self.description!r})"


def is_stale(ref: "ElementRef") -> bool:
    try:
        ref.is_enabled()
    except StaleElement:
        return True
    return False


class PageLoad:
    """Satisfied once the document root captured at construction has gone stale."""

    description = "page load"

    def __init__(self, driver: "BrowserDriver") -> None:
        self._root = driver.find_element(DOCUMENT_ROOT)

    def __call__(self, driver: "BrowserDriver | None" = None) -> bool:
        return is_stale(self._root)


def staleness_of(ref: "ElementRef") -> Condition[bool]:
    return Condition("staleness of element", lambda _d: is_stale(ref))


def presence_of(selector: Selector) -> Condition["ElementRef"]:
    return Condition(f"presence of {selector}", lambda d: d.find_element(selector))


def visibility_of(ref: "ElementRef") -> Condition["ElementRef"]:
    return Condition("visibility of element", lambda _d: ref if ref.is_displayed() else None)


def element_to_be_clickable(ref: "ElementRef") -> Condition["ElementRef"]:
    def clickable(_d: "BrowserDriver") -> Optional["ElementRef"]:
        return ref if ref.is_displayed() and ref.is_enabled() else None

    return Condition("element to be clickable", clickable)


def _alert(driver: "BrowserDriver") -> Optional["AlertRef"]:
    try:
        return driver.switch_to_alert()
    except NoAlertPresent:
        return None


alert_is_present: Condition["AlertRef"] = Condition("alert to be present", _alert)


def new_window_opened(known_handles: Collection[str]) -> Condition[str]:
    """Yields the newest handle (last reported) once it is not among `known_handles`."""

    def newest(driver: "BrowserDriver") -> Optional[str]:
        handles = list(driver.all_window_handles)
        if handles and handles[-1] not in known_handles:
            return handles[-1]
        return None

    return Condition("new window to open", newest)


def title_is(title: str) -> Condition[bool]:
    return Condition(f"title to be {title!r}", lambda d: d.title == title)


def url_contains(fragment: str) -> Condition[bool]:
    return Condition(f"url to contain {fragment!r}", lambda d: fragment in d.current_url)
