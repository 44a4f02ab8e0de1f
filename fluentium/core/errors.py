"""
Project-level error taxonomy, shared by the DSL and the driver adapters.
- FluentiumError: base class for every error raised by fluentium
- ElementError: element interaction failures, carrying locator/url context
- TimeoutError: a bounded wait ran out (deliberately not the builtin)
- NoSuchElement / StaleElement / ElementNotInteractable / InvalidElementState
- NoAlertPresent / NoSuchWindow / NoSuchFrame / UnsupportedOperation / DriverError
"""
# @file purpose: Define error taxonomy for fluentium.

from __future__ import annotations

from typing import Any


class FluentiumError(Exception):
    """Base class for all custom errors in fluentium."""


class ElementError(FluentiumError):
    """
    Raised when an interaction with a page element fails.
    Wraps the context (action, locator, url) so that hooks and the CLI can
    print consistent diagnostics.
    """

    def __init__(
        self,
        action: str,
        message: str,
        *,
        locator: Any | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.action: str = action
        self.locator: Any | None = locator
        self.url: str | None = url
        self.details: dict[str, Any] = details or {}
        self.cause: BaseException | None = cause

    def __str__(self) -> str:
        parts = [f"[{self.action}] {super().__str__()}"]
        if self.locator is not None:
            parts.append(f"locator={self.locator}")
        if self.url:
            parts.append(f"url={self.url}")
        if self.details:
            kv = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"details={{ {kv} }}")
        return " | ".join(parts)


class TimeoutError(FluentiumError):
    """Raised when a bounded wait elapses without its condition being met."""

    def __init__(self, message: str = "condition not met in time", *, timeout: float | None = None,
                 polls: int = 0) -> None:
        super().__init__(message)
        self.timeout = timeout
        self.polls = polls


class NoSuchElement(ElementError):
    """A locator matched nothing, or an element is not where an operation needs it."""


class StaleElement(ElementError):
    """A previously resolved element is no longer attached to the document."""


class ElementNotInteractable(ElementError, TimeoutError):
    """The element was present but did not become clickable within the wait policy."""


class InvalidElementState(ElementError):
    """The operation is not applicable to the element's current type or state."""


class UnsupportedOperation(FluentiumError):
    """The operation is not supported by this element kind or driver backend."""


class NoAlertPresent(FluentiumError):
    """No alert dialog is (or became) present."""


class NoSuchWindow(FluentiumError):
    """The window handle does not name an open window."""


class NoSuchFrame(FluentiumError):
    """The frame index or element does not name a frame in the current document."""


class DriverError(FluentiumError):
    """Any other failure reported by the underlying browser driver."""
