"""
Scoped frame switching.

The driver's current frame is global mutable state of the session. A
FrameScope switches into a frame for the duration of a block and always
switches back, also when the block raises. Scopes nest: leaving an inner
scope returns to the top-level document and re-enters the frames of the
scopes still open, so leaving the outermost scope leaves the driver on the
top-level document.
"""
# @file purpose: Provide push/restore frame scoping over the driver.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Union

from ..core.locator import Locator

if TYPE_CHECKING:
    from .browser import Browser
    from .page import Page

logger = logging.getLogger(__name__)

FrameTarget = Union[int, Locator]


class FrameScope:
    """Stack of frames entered on one browser session."""

    def __init__(self, browser: "Browser") -> None:
        self.browser = browser
        self._stack: list[FrameTarget] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _switch_into(self, page: "Page", target: FrameTarget) -> None:
        driver = self.browser.driver
        if isinstance(target, int):
            driver.switch_to_frame(target)
        else:
            driver.switch_to_frame(page.element(target).raw())

    @contextmanager
    def entered(self, page: "Page", target: FrameTarget) -> Iterator[None]:
        self._switch_into(page, target)
        self._stack.append(target)
        logger.debug("entered frame %s (depth %d)", target, self.depth)
        try:
            yield
        finally:
            self._stack.pop()
            self.restore(page)

    def restore(self, page: "Page") -> None:
        """Switch to the top-level document, then back into every frame still open."""
        self.browser.driver.switch_to_default_content()
        for target in self._stack:
            self._switch_into(page, target)
