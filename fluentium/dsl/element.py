"""
Lazy element handles.

An `ElementHandle` is a (resolution strategy, locator, wait policy) triple,
never a cached live element: every operation resolves the element again right
before acting, so an interaction cannot hit an element that went stale since
an earlier, unrelated one. Resolution is either from the document root of the
driver's current window/frame (`RootResolution`) or inside the element
currently matched by a parent handle (`NestedResolution`).

Errors:
- NoSuchElement: the locator matched nothing within the presence wait.
- ElementNotInteractable: present, but not clickable within the wait.
- StaleElement: the element vanished between resolution and the action.
- InvalidElementState: e.g. clear() on something that is not editable.
"""
# @file purpose: Implement lazily re-resolved element handles and search contexts.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from ..core.errors import ElementNotInteractable, NoSuchElement, TimeoutError
from ..core.hooks import notify_failures
from ..core.keys import Chord, Key, KeyInput, chord, modifier_key
from ..core.locator import Locator
from ..core.waiter import WaitPolicy

if TYPE_CHECKING:
    from ..core.hooks import BrowserHooks
    from ..core.waiter import Waiter
    from ..io.driver import BrowserDriver, ElementRef
    from .page import Page

ElementActions = Optional[Callable[["ElementHandle"], Any]]


def _waited(error: TimeoutError, policy: WaitPolicy) -> float:
    # an enclosing wait may have cut the budget short
    return policy.timeout if error.timeout is None else error.timeout


# ---------------- resolution strategies ----------------


class Resolution(ABC):
    """How a handle turns its selector into live element(s), one attempt, no waiting."""

    @abstractmethod
    def find_one(self, locator: Locator) -> "ElementRef": ...

    @abstractmethod
    def find_all(self, locator: Locator) -> Sequence["ElementRef"]: ...


class RootResolution(Resolution):
    """Search the document of the driver's current window and frame."""

    def __init__(self, driver: "BrowserDriver") -> None:
        self.driver = driver

    def find_one(self, locator: Locator) -> "ElementRef":
        return self.driver.find_element(locator.resolve())

    def find_all(self, locator: Locator) -> Sequence["ElementRef"]:
        return self.driver.find_elements(locator.resolve())

    def __str__(self) -> str:
        return "page"


class NestedResolution(Resolution):
    """Search inside the element the parent handle matches at the moment of the call."""

    def __init__(self, parent: "ElementHandle") -> None:
        self.parent = parent

    def find_one(self, locator: Locator) -> "ElementRef":
        return self.parent.raw().find_element(locator.resolve())

    def find_all(self, locator: Locator) -> Sequence["ElementRef"]:
        return self.parent.raw().find_elements(locator.resolve())

    def __str__(self) -> str:
        return str(self.parent)


# ---------------- search contexts ----------------


class SearchContext(ABC):
    """Anything elements can be looked up in: a page, a window, an element."""

    @abstractmethod
    def element(self, locator: Locator, actions: ElementActions = None) -> "ElementHandle":
        """
        Handle to the first element matching `locator`; `actions` (optional)
        is applied to it right away. Nothing is looked up until an operation
        runs on the handle.
        """

    @abstractmethod
    def elements(
        self, locator: Locator, *, wait: WaitPolicy | None = None, timeout: float | None = None
    ) -> list["ElementHandle"]:
        """
        Handles to all current matches of `locator`.

        Without `wait`/`timeout` this never waits: no match gives an empty
        list. With one of them, it polls until at least one element matches
        and raises TimeoutError if none does in time.
        """

    def has_element(self, locator: Locator) -> bool:
        return bool(self.elements(locator))


def collect(
    page: "Page",
    resolution: Resolution,
    locator: Locator,
    base: WaitPolicy,
    *,
    wait: WaitPolicy | None = None,
    timeout: float | None = None,
) -> list["ElementHandle"]:
    """Snapshot the number of matches now; each handle re-resolves "the i-th match"."""
    if wait is None and timeout is None:
        count = len(resolution.find_all(locator))
        policy = base
    else:
        policy = base.override(wait=wait, timeout=timeout)
        count = page.browser.waiter.until(
            policy,
            lambda: len(resolution.find_all(locator)) or None,
            message=f"elements matching {locator}",
        )
    return [ElementHandle(page, resolution, locator, policy, index=i) for i in range(count)]


# ---------------- element handle ----------------


class ElementHandle(SearchContext):
    """
    A single element and its interactions.

    Handles are cheap values; create them freely through `Page.element()`,
    `Page.elements()` or by nesting (`handle.element(...)`). Interactions
    honour the owning page's `autoscroll` flag: when set, click/enter first
    scroll an element that is not displayed into the viewport.
    """

    def __init__(
        self,
        page: "Page",
        resolution: Resolution,
        locator: Locator,
        wait: WaitPolicy,
        *,
        index: int | None = None,
    ) -> None:
        self.page = page
        self.resolution = resolution
        self.locator = locator
        self.wait = wait
        self.index = index

    # ---------------- plumbing ----------------

    @property
    def _waiter(self) -> "Waiter":
        return self.page.browser.waiter

    @property
    def _hooks(self) -> "BrowserHooks":
        return self.page.browser.hooks

    def _lookup(self) -> "ElementRef":
        if self.index is None:
            return self.resolution.find_one(self.locator)
        matches = self.resolution.find_all(self.locator)
        if self.index >= len(matches):
            raise NoSuchElement(
                "resolve",
                f"match #{self.index} is gone ({len(matches)} match(es) left)",
                locator=self.locator,
            )
        return matches[self.index]

    def raw(self) -> "ElementRef":
        """
        Resolve now (waiting for presence) and return the driver's live element.

        For functionality fluentium does not wrap. The returned reference is
        not re-resolved and may go stale; this API may change without notice.
        """
        try:
            return self._waiter.until(self.wait, self._lookup, message=f"presence of {self}")
        except NoSuchElement:
            raise
        except TimeoutError as e:
            raise NoSuchElement(
                "resolve",
                f"no element matched within {_waited(e, self.wait):g}s",
                locator=self.locator,
                details={"within": str(self.resolution)},
                cause=e.__cause__ or e,
            ) from e

    def _scroll_if_needed(self, ref: "ElementRef") -> None:
        if self.page.autoscroll and not ref.is_displayed():
            ref.scroll_into_view()

    # ---------------- nesting ----------------

    def element(self, locator: Locator, actions: ElementActions = None) -> "ElementHandle":
        e = ElementHandle(self.page, NestedResolution(self), locator, self.wait)
        if actions is not None:
            actions(e)
        return e

    def elements(
        self, locator: Locator, *, wait: WaitPolicy | None = None, timeout: float | None = None
    ) -> list["ElementHandle"]:
        return collect(self.page, NestedResolution(self), locator, self.wait, wait=wait, timeout=timeout)

    # ---------------- interactions ----------------

    def click(self, *, modifiers: Sequence[Key | str] = ()) -> None:
        """
        Click once the element is displayed and enabled.

        `modifiers` are held during the click (e.g. `modifier_key()` to open
        a link in a new window).
        """
        with notify_failures(self._hooks):
            self._hooks.before_click(self)
            live = self.raw()
            self._scroll_if_needed(live)
            try:
                self._waiter.until(
                    self.wait.strict(),
                    lambda: live.is_displayed() and live.is_enabled(),
                    message=f"clickability of {self}",
                )
            except ElementNotInteractable:
                raise
            except TimeoutError as e:
                raise ElementNotInteractable(
                    "click",
                    f"element not clickable within {_waited(e, self.wait):g}s",
                    locator=self.locator,
                    cause=e,
                ) from e
            live.click(modifiers=tuple(str(m) for m in modifiers))
            self._hooks.after_click(self)

    def enter(self, *text: KeyInput, replace: bool = False) -> "ElementHandle":
        """
        Type text and/or key presses into this element.

        Text is appended to the current content unless `replace` is set, in
        which case the content is first selected (platform select-all) and
        deleted. `replace` avoids the extra change event a separate `clear()`
        triggers.
        """
        typed = "".join(str(t) for t in text)
        with notify_failures(self._hooks):
            self._hooks.before_change_value(self, typed)
            ref = self.raw()
            self._scroll_if_needed(ref)
            if replace:
                ref.press(str(chord(modifier_key(), "a")))
                ref.press(str(Key.DELETE))
            for item in text:
                if isinstance(item, (Key, Chord)):
                    ref.press(str(item))
                else:
                    ref.send_keys(item)
            self._hooks.after_change_value(self, typed)
        return self

    def press(self, key: Key | Chord | str) -> "ElementHandle":
        with notify_failures(self._hooks):
            self.raw().press(str(key))
        return self

    def clear(self) -> "ElementHandle":
        """Clear the value of a text entry element; InvalidElementState otherwise."""
        with notify_failures(self._hooks):
            self._hooks.before_change_value(self, "")
            self.raw().clear()
            self._hooks.after_change_value(self, "")
        return self

    def submit(self) -> "ElementHandle":
        """Submit the form this element is (in) a part of; NoSuchElement if there is none."""
        with notify_failures(self._hooks):
            self.raw().submit()
        return self

    def scroll_into_view(self) -> "ElementHandle":
        self.raw().scroll_into_view()
        return self

    # ---------------- state ----------------

    @property
    def text(self) -> str:
        return self.raw().text

    @property
    def tag_name(self) -> str:
        return self.raw().tag_name

    @property
    def selected(self) -> bool:
        """Only meaningful for checkboxes, radio buttons and options."""
        return self.raw().is_selected()

    @property
    def enabled(self) -> bool:
        return self.raw().is_enabled()

    @property
    def displayed(self) -> bool:
        return self.raw().is_displayed()

    def get_attribute(self, name: str) -> Optional[str]:
        """Current value of the attribute/property `name`, or None if it is not set."""
        return self.raw().get_attribute(name)

    @property
    def value(self) -> Optional[str]:
        return self.get_attribute("value")

    def has(self, attribute: str) -> bool:
        return self.get_attribute(attribute) is not None

    def __str__(self) -> str:
        where = "" if isinstance(self.resolution, RootResolution) else f"{self.resolution} > "
        nth = "" if self.index is None else f"[{self.index}]"
        return f"{where}{self.locator}{nth}"

    def __repr__(self) -> str:
        return f"ElementHandle({self})"
