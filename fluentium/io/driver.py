"""
Browser driver protocol (abstraction).

This Protocol defines the minimal browser control surface the DSL relies on.
It allows plugging different backends (Playwright today, an in-memory fake in
the tests) without changing `fluentium.dsl`.

Notes:
- Selectors are backend-neutral `fluentium.core.locator.Selector` values.
- Window and frame addressing is mutable state of the driver: every lookup
  and interaction applies to the current window / current frame.
- `all_window_handles` must report handles in insertion order, so the last
  one is the most recently opened window.
- Implementations translate backend failures into `fluentium.core.errors`
  (NoSuchElement, StaleElement, InvalidElementState, NoAlertPresent,
  NoSuchWindow, NoSuchFrame, DriverError).
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Protocol, Sequence, Union

from ..core.locator import Selector


class WindowSize(NamedTuple):
    width: int
    height: int


class AlertRef(Protocol):
    @property
    def text(self) -> str: ...
    def accept(self) -> None: ...
    def dismiss(self) -> None: ...


class ElementRef(Protocol):
    """A live element. Goes stale once its node leaves the document."""

    # -------- lookup --------
    def find_element(self, selector: Selector) -> "ElementRef": ...
    def find_elements(self, selector: Selector) -> Sequence["ElementRef"]: ...

    # -------- interactions --------
    def click(self, *, modifiers: Sequence[str] = ()) -> None: ...
    def send_keys(self, text: str) -> None: ...
    def press(self, keys: str) -> None: ...
    def clear(self) -> None: ...
    def submit(self) -> None: ...
    def scroll_into_view(self) -> None: ...
    def set_selected(self, selected: bool) -> None: ...

    # -------- state --------
    @property
    def tag_name(self) -> str: ...
    @property
    def text(self) -> str: ...
    def is_selected(self) -> bool: ...
    def is_enabled(self) -> bool: ...
    def is_displayed(self) -> bool: ...
    def get_attribute(self, name: str) -> Optional[str]: ...


class BrowserDriver(Protocol):
    # -------- lifecycle --------
    def quit(self) -> None: ...

    # -------- navigation --------
    def open_url(self, url: str) -> None: ...
    def back(self) -> None: ...
    def forward(self) -> None: ...
    def refresh(self) -> None: ...
    @property
    def current_url(self) -> str: ...
    @property
    def page_source(self) -> str: ...
    @property
    def title(self) -> str: ...

    # -------- lookup (current window, current frame) --------
    def find_element(self, selector: Selector) -> ElementRef: ...
    def find_elements(self, selector: Selector) -> Sequence[ElementRef]: ...

    # -------- windows --------
    @property
    def current_window_handle(self) -> str: ...
    @property
    def all_window_handles(self) -> Sequence[str]: ...
    def switch_to_window(self, handle: str) -> None: ...
    def close_current_window(self) -> None: ...
    def get_window_size(self) -> WindowSize: ...
    def set_window_size(self, size: WindowSize) -> None: ...

    # -------- frames --------
    def switch_to_frame(self, target: Union[int, ElementRef]) -> None: ...
    def switch_to_default_content(self) -> None: ...

    # -------- alerts --------
    def switch_to_alert(self) -> AlertRef: ...
