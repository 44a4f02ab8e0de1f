"""
Locators: immutable descriptions of how to find elements in a document.

A Locator never holds a live element. `resolve()` translates it into a
`Selector`, the backend-neutral native selector understood by every driver
in `fluentium.io` (a `(using, value)` pair modelled after the W3C WebDriver
locator strategies, plus two composite strategies).

    Id("search") & Tag("input")      # AllOf: chained search
    Css(".error") | Css(".warning")  # AnyOf: matches of either
"""
# @file purpose: Define locator variants and their native selector translation.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass as std_dataclass
from typing import Annotated, Union, cast

from pydantic import Field
from pydantic.dataclasses import dataclass

NonEmptyStr = Annotated[str, Field(min_length=1)]

# native locating strategies
ID = "id"
NAME = "name"
CLASS_NAME = "class name"
CSS = "css selector"
XPATH = "xpath"
LINK_TEXT = "link text"
PARTIAL_LINK_TEXT = "partial link text"
TAG_NAME = "tag name"
CHAINED = "chained"
ANY = "any"

COMPOSITE_STRATEGIES = frozenset({CHAINED, ANY})


@std_dataclass(frozen=True)
class Selector:
    """Native selector: a strategy name and its value (or member selectors for composites)."""

    using: str
    value: Union[str, tuple["Selector", ...]]

    @property
    def is_composite(self) -> bool:
        return self.using in COMPOSITE_STRATEGIES

    @property
    def members(self) -> tuple["Selector", ...]:
        if not self.is_composite:
            return (self,)
        return cast(tuple["Selector", ...], self.value)

    def __str__(self) -> str:
        if self.is_composite:
            inner = ", ".join(str(m) for m in self.members)
            return f"{self.using}({inner})"
        return f"{self.using}={self.value!r}"


def xpath_literal(text: str) -> str:
    """Quote `text` as an XPath string literal, falling back to concat() for mixed quotes."""
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    parts = text.split('"')
    return "concat(" + ", '\"', ".join(f'"{p}"' for p in parts) + ")"


def css_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Locator(ABC):
    """
    Mechanism used to locate elements within a document.

    Subclass and implement `resolve()` to add a locating mechanism of your own.
    """

    @abstractmethod
    def resolve(self) -> Selector: ...

    def __and__(self, other: "Locator") -> "AllOf":
        return AllOf(self, other)

    def __or__(self, other: "Locator") -> "AnyOf":
        return AnyOf(self, other)

    def __str__(self) -> str:
        return str(self.resolve())


@dataclass(frozen=True)
class Id(Locator):
    """Match the value of the "id" attribute."""

    value: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(ID, self.value)


@dataclass(frozen=True)
class Name(Locator):
    """Match the value of the "name" attribute."""

    value: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(NAME, self.value)


@dataclass(frozen=True)
class ClassName(Locator):
    """
    Match one of the classes of the "class" attribute.

    For class="one two" both ClassName("one") and ClassName("two") match.
    """

    name: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(CLASS_NAME, self.name)


@dataclass(frozen=True)
class Css(Locator):
    selector: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(CSS, self.selector)


@dataclass(frozen=True)
class XPath(Locator):
    expression: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(XPATH, self.expression)


@dataclass(frozen=True)
class Link(Locator):
    """Match a link by its exact visible text."""

    text: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(LINK_TEXT, self.text)


@dataclass(frozen=True)
class PartialLink(Locator):
    """Match a link whose visible text contains `text`."""

    text: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(PARTIAL_LINK_TEXT, self.text)


@dataclass(frozen=True)
class Tag(Locator):
    name: NonEmptyStr

    def resolve(self) -> Selector:
        return Selector(TAG_NAME, self.name)


@dataclass(frozen=True)
class Attribute(Locator):
    """Match elements whose attribute `name` equals `value`."""

    name: NonEmptyStr
    value: str

    def resolve(self) -> Selector:
        return Selector(CSS, f"[{self.name}={css_string(self.value)}]")


@dataclass(frozen=True)
class Label(Locator):
    """Match the input referenced (via `for`) by a <label> containing `text`."""

    text: NonEmptyStr

    def resolve(self) -> Selector:
        label = f"//label[contains(text(), {xpath_literal(self.text)})]/@for"
        return Selector(XPATH, f"//input[@id=string({label})]")


class _Composite(Locator):
    strategy: str = ""

    def __init__(self, *locators: Locator) -> None:
        if not locators:
            raise ValueError(f"{type(self).__name__} needs at least one locator")
        for loc in locators:
            if not isinstance(loc, Locator):
                raise TypeError(f"{type(self).__name__} accepts Locators only, got {loc!r}")
        self.locators: tuple[Locator, ...] = tuple(locators)

    def resolve(self) -> Selector:
        return Selector(self.strategy, tuple(loc.resolve() for loc in self.locators))

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.locators == self.locators  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.locators))

    def __repr__(self) -> str:
        inner = ", ".join(repr(loc) for loc in self.locators)
        return f"{type(self).__name__}({inner})"


class AllOf(_Composite):
    """
    Elements fulfilling all given locators: each locator is searched within
    the matches of the previous one.
    """

    strategy = CHAINED


class AnyOf(_Composite):
    """Elements fulfilling any single one of the given locators, in locator order."""

    strategy = ANY
