"""
Check helpers for tests written with fluentium.

Plain booleans, so they work with bare `assert` under any test framework.
"""
# @file purpose: Boolean check helpers for assertions in tests.

from __future__ import annotations

from ..core.locator import Locator
from .element import ElementHandle, SearchContext


def has_element(context: SearchContext, locator: Locator) -> bool:
    """True if `context` currently contains an element matching `locator` (no waiting)."""
    return context.has_element(locator)


def has_attribute(element: ElementHandle, attribute: str) -> bool:
    """True if the attribute/property exists on the element."""
    return element.has(attribute)
