"""
Select dropdowns (<select>, single or multiple).

Unlike element handles, SelectOptions checks its element eagerly: it fails
at construction when the element is not a <select>.
"""
# @file purpose: Implement select/deselect helpers for <select> elements.

from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field
from pydantic.dataclasses import dataclass

from ..core.errors import InvalidElementState, NoSuchElement, UnsupportedOperation
from ..core.hooks import notify_failures
from ..core.locator import XPATH, Locator, Selector, Tag, xpath_literal
from .element import ElementHandle


class SelectLocator:
    """Ways to pick options of a select: Value, Text or Index."""


@dataclass(frozen=True)
class Value(SelectLocator, Locator):
    """Options whose value attribute equals `value`."""

    value: str

    def resolve(self) -> Selector:
        return Selector(XPATH, f".//option[@value={xpath_literal(self.value)}]")


@dataclass(frozen=True)
class Text(SelectLocator, Locator):
    """Options whose visible text equals `text` (surrounding whitespace ignored)."""

    text: str

    def resolve(self) -> Selector:
        return Selector(XPATH, f".//option[normalize-space(.)={xpath_literal(self.text.strip())}]")


@dataclass(frozen=True)
class Index(SelectLocator):
    """The option at position `index` (zero-based) among the select's options."""

    index: Annotated[int, Field(ge=0)]


OptionLocator = Union[Value, Text, Index]


class SelectOptions:
    def __init__(self, element: ElementHandle) -> None:
        self.element = element
        tag = element.tag_name.lower()
        if tag != "select":
            raise InvalidElementState(
                "option", f"element is a <{tag}>, not a <select>", locator=element.locator
            )

    @property
    def is_multiple(self) -> bool:
        return self.element.get_attribute("multiple") not in (None, "false")

    @property
    def all_options(self) -> list[ElementHandle]:
        return self.element.elements(Tag("option"))

    @property
    def selected_options(self) -> list[ElementHandle]:
        return [o for o in self.all_options if o.selected]

    @property
    def first_selected_option(self) -> ElementHandle:
        for o in self.all_options:
            if o.selected:
                return o
        raise NoSuchElement("option", "no option is selected", locator=self.element.locator)

    def _matching(self, loc: OptionLocator) -> list[ElementHandle]:
        options = self.all_options
        if isinstance(loc, Index):
            matched = options[loc.index : loc.index + 1]
        elif isinstance(loc, Value):
            matched = [o for o in options if o.value == loc.value]
        else:
            wanted = loc.text.strip()
            matched = [o for o in options if o.text.strip() == wanted]
        if not matched:
            raise NoSuchElement("option", f"no option matches {loc!r}", locator=self.element.locator)
        return matched

    def _require_multiple(self, what: str) -> None:
        if not self.is_multiple:
            raise UnsupportedOperation(f"You may only {what} on multi-select options!")

    @staticmethod
    def _set(option: ElementHandle, selected: bool) -> None:
        if option.selected != selected:
            option.raw().set_selected(selected)

    def select(self, loc: OptionLocator) -> "SelectOptions":
        """
        Select the matching option(s); NoSuchElement if none match.

        On a multi-select every match is selected, otherwise only the first.
        """
        with notify_failures(self.element.page.browser.hooks):
            matched = self._matching(loc)
            if not self.is_multiple:
                matched = matched[:1]
            for option in matched:
                self._set(option, True)
        return self

    def deselect(self, loc: OptionLocator) -> "SelectOptions":
        """Deselect the matching option(s) of a multi-select."""
        with notify_failures(self.element.page.browser.hooks):
            self._require_multiple("deselect options")
            for option in self._matching(loc):
                self._set(option, False)
        return self

    def select_all(self) -> "SelectOptions":
        with notify_failures(self.element.page.browser.hooks):
            self._require_multiple("call select_all")
            for option in self.all_options:
                self._set(option, True)
        return self

    def deselect_all(self) -> "SelectOptions":
        with notify_failures(self.element.page.browser.hooks):
            self._require_multiple("call deselect_all")
            for option in self.all_options:
                self._set(option, False)
        return self
