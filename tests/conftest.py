"""Shared fixtures: a fake driver, a fake clock and a Browser wired to both."""
# @file purpose: Pytest fixtures for the fake-driver based unit tests.

from __future__ import annotations

import pytest

from fakes import FakeClock, FakeDriver, FakeNode, html
from fluentium.core.settings import Settings
from fluentium.core.waiter import WaitPolicy, Waiter
from fluentium.dsl.browser import Browser
from fluentium.dsl.page import Page

BASE_URL = "http://test.local"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def waiter(clock: FakeClock) -> Waiter:
    return Waiter(clock=clock, sleep=clock.sleep)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture()
def browser(driver: FakeDriver, waiter: Waiter, test_settings: Settings) -> Browser:
    return Browser(
        driver,
        settings=test_settings,
        waiter=waiter,
        default_wait=WaitPolicy(timeout=5.0, poll_interval=0.25),
    )


@pytest.fixture()
def load(driver: FakeDriver, browser: Browser):
    """Serve `*body` at a test URL, open it and return the Page."""

    def _load(*body: FakeNode, title: str = "", path: str = "/") -> Page:
        url = f"{BASE_URL}{path}"
        driver.pages[url] = lambda: html(*body, title=title)
        return browser.open(url)

    return _load
