"""Hooks observe interactions and failures without changing control flow."""
# @file purpose: Tests for BrowserHooks, Verbose, SlowDown and CompositeHooks.

import logging

import pytest

from conftest import BASE_URL
from fakes import FakeDriver, FakeNode, html
from fluentium.core.errors import NoSuchElement
from fluentium.core.hooks import BrowserHooks, CompositeHooks, SlowDown, Verbose
from fluentium.core.locator import Id, Name
from fluentium.core.waiter import WaitPolicy
from fluentium.dsl.browser import Browser


class Recorder(BrowserHooks):
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def before_navigate(self, url):
        self.events.append(("before_navigate", url))

    def after_navigate(self, url):
        self.events.append(("after_navigate", url))

    def before_click(self, target):
        self.events.append(("before_click", str(target)))

    def after_click(self, target):
        self.events.append(("after_click", str(target)))

    def before_change_value(self, target, text):
        self.events.append(("before_change_value", str(target), text))

    def after_change_value(self, target, text):
        self.events.append(("after_change_value", str(target), text))

    def before_close(self):
        self.events.append(("before_close",))

    def on_exception(self, error):
        self.events.append(("on_exception", type(error).__name__))


def make_browser(driver, waiter, test_settings, hooks) -> Browser:
    driver.pages[f"{BASE_URL}/form"] = lambda: html(
        FakeNode("input", name="q"), FakeNode("button", id="go")
    )
    return Browser(driver, settings=test_settings, hooks=hooks, waiter=waiter,
                   default_wait=WaitPolicy(timeout=1.0))


def test_hooks_fire_around_interactions(waiter, test_settings) -> None:
    rec = Recorder()
    browser = make_browser(FakeDriver(), waiter, test_settings, rec)
    page = browser.open(f"{BASE_URL}/form")
    page.element(Name("q")).enter("cheese")
    page.element(Id("go")).click()
    browser.close_window()

    assert rec.events == [
        ("before_navigate", f"{BASE_URL}/form"),
        ("after_navigate", f"{BASE_URL}/form"),
        ("before_change_value", "name='q'", "cheese"),
        ("after_change_value", "name='q'", "cheese"),
        ("before_click", "id='go'"),
        ("after_click", "id='go'"),
        ("before_close",),
    ]


def test_history_moves_fire_navigate_hooks(waiter, test_settings) -> None:
    rec = Recorder()
    driver = FakeDriver()
    driver.pages[f"{BASE_URL}/1"] = lambda: html(title="one")
    driver.pages[f"{BASE_URL}/2"] = lambda: html(title="two")
    browser = make_browser(driver, waiter, test_settings, rec)
    browser.open(f"{BASE_URL}/1")
    browser.open(f"{BASE_URL}/2")
    rec.events.clear()

    assert browser.navigation.back().title == "one"
    assert browser.navigation.forward().title == "two"

    assert rec.events == [
        ("before_navigate", f"{BASE_URL}/2"),
        ("after_navigate", f"{BASE_URL}/1"),
        ("before_navigate", f"{BASE_URL}/1"),
        ("after_navigate", f"{BASE_URL}/2"),
    ]


def test_on_exception_is_notified_and_error_reraised(waiter, test_settings) -> None:
    rec = Recorder()
    browser = make_browser(FakeDriver(), waiter, test_settings, rec)
    page = browser.open(f"{BASE_URL}/form")
    with pytest.raises(NoSuchElement):
        page.element(Id("missing")).click()
    assert rec.events[-1] == ("on_exception", "NoSuchElement")
    assert ("after_click", "id='missing'") not in rec.events


def test_verbose_messages(waiter, test_settings) -> None:
    lines: list[str] = []
    browser = make_browser(FakeDriver(), waiter, test_settings, Verbose(lines.append))
    page = browser.open(f"{BASE_URL}/form")
    page.element(Name("q")).enter("abc")
    page.element(Id("go")).click()
    with pytest.raises(NoSuchElement):
        page.element(Id("missing")).click()

    assert lines[0] == f"will navigate to {BASE_URL}/form."
    assert "will enter 'abc' into name='q'" in lines
    assert "will click on id='go'" in lines
    assert lines[-1].startswith("action failed with error [resolve]")


def test_verbose_logs_at_info_by_default(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="fluentium"):
        Verbose().before_navigate("http://x")
    assert "will navigate to http://x." in caplog.text


def test_slow_down_sleeps_before_clicks_and_typing(waiter, test_settings) -> None:
    naps: list[float] = []
    browser = make_browser(FakeDriver(), waiter, test_settings, SlowDown(0.5, sleep=naps.append))
    page = browser.open(f"{BASE_URL}/form")
    page.element(Name("q")).enter("x")
    page.element(Id("go")).click()
    assert naps == [0.5, 0.5]


def test_composite_hooks_fan_out_in_order() -> None:
    order: list[str] = []
    first = Verbose(lambda m: order.append(f"1:{m}"))
    second = Verbose(lambda m: order.append(f"2:{m}"))
    CompositeHooks(first, second).before_close()
    assert order == ["1:will close window.", "2:will close window."]
