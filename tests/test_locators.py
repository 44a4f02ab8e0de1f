"""Locators resolve to native selectors without touching a driver."""
# @file purpose: Tests for locator variants, combinators and quoting helpers.

import pytest
from pydantic import ValidationError

from fluentium.core.keys import Key, chord, modifier_key
from fluentium.core.locator import (
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
    AllOf,
    AnyOf,
    Attribute,
    ClassName,
    Css,
    Id,
    Label,
    Link,
    Name,
    PartialLink,
    Selector,
    Tag,
    XPath,
    css_string,
    xpath_literal,
)


@pytest.mark.parametrize(
    "locator, using, value",
    [
        (Id("search"), ID, "search"),
        (Name("q"), NAME, "q"),
        (ClassName("btn"), CLASS_NAME, "btn"),
        (Css("div > p"), CSS, "div > p"),
        (XPath("//a"), XPATH, "//a"),
        (Link("Home"), LINK_TEXT, "Home"),
        (PartialLink("Ho"), PARTIAL_LINK_TEXT, "Ho"),
        (Tag("input"), TAG_NAME, "input"),
        (Attribute("data-role", "menu"), CSS, '[data-role="menu"]'),
    ],
)
def test_simple_locators_resolve_deterministically(locator, using, value) -> None:
    first, second = locator.resolve(), locator.resolve()
    assert first == second == Selector(using, value)
    assert not first.is_composite


def test_label_resolves_to_input_referenced_by_label() -> None:
    sel = Label("E-mail").resolve()
    assert sel.using == XPATH
    assert sel.value == '//input[@id=string(//label[contains(text(), "E-mail")]/@for)]'


def test_empty_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Id("")
    with pytest.raises(ValidationError):
        Css("")


def test_and_builds_chained_search() -> None:
    loc = Id("menu") & Tag("a")
    assert isinstance(loc, AllOf)
    sel = loc.resolve()
    assert sel.using == CHAINED
    assert sel.members == (Selector(ID, "menu"), Selector(TAG_NAME, "a"))


def test_or_builds_union_in_order() -> None:
    loc = Css(".error") | Css(".warning")
    assert isinstance(loc, AnyOf)
    sel = loc.resolve()
    assert sel.using == ANY
    assert [m.value for m in sel.members] == [".error", ".warning"]


def test_composites_validate_members() -> None:
    with pytest.raises(ValueError):
        AllOf()
    with pytest.raises(TypeError):
        AnyOf("#id")  # type: ignore[arg-type]


def test_locators_are_hashable_values() -> None:
    assert Id("a") == Id("a")
    assert AllOf(Id("a"), Tag("b")) == AllOf(Id("a"), Tag("b"))
    assert AllOf(Id("a"), Tag("b")) != AnyOf(Id("a"), Tag("b"))
    assert len({Id("a"), Id("a"), Name("a")}) == 2


def test_str_shows_native_selector() -> None:
    assert str(Id("go")) == "id='go'"
    assert str(Id("a") | Name("b")) == "any(id='a', name='b')"


def test_xpath_literal_quoting() -> None:
    assert xpath_literal("plain") == '"plain"'
    assert xpath_literal('say "hi"') == "'say \"hi\"'"
    assert xpath_literal("""it's "x\"""") == """concat("it's ", '"', "x", '"', "")"""


def test_css_string_escapes_quotes() -> None:
    assert css_string('a"b') == '"a\\"b"'


def test_keys_and_chords() -> None:
    assert str(chord(Key.CONTROL, "a")) == "Control+a"
    assert Key.RETURN is Key.ENTER
    assert modifier_key("darwin") is Key.META
    assert modifier_key("linux") is Key.CONTROL
    with pytest.raises(ValueError):
        chord()
