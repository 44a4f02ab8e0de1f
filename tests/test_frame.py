"""Frame scopes always switch back, also when the block raises."""
# @file purpose: Tests for frame scoping against the fake driver.

import pytest

from fakes import FakeDriver, FakeNode, html
from fluentium.core.errors import NoSuchFrame
from fluentium.core.locator import Id


def framed_page(load):
    inner = FakeNode("iframe", id="inner", content=html(FakeNode("p", id="deep", text="deep")))
    outer = FakeNode(
        "iframe", id="outer", content=html(FakeNode("p", id="mid", text="middle"), inner)
    )
    return load(FakeNode("p", id="top", text="top"), outer)


def test_in_frame_by_locator_and_back(load, driver: FakeDriver) -> None:
    page = framed_page(load)
    assert page.in_frame(Id("outer"), lambda p: p.element(Id("mid")).text) == "middle"
    assert driver.frame_path == []
    assert page.element(Id("top")).text == "top"


def test_in_frame_by_index(load, driver: FakeDriver) -> None:
    page = framed_page(load)
    with page.frame(0) as framed:
        assert framed.element(Id("mid")).text == "middle"
    assert driver.frame_path == []


def test_in_frame_restores_top_level_when_action_raises(load, driver: FakeDriver) -> None:
    page = framed_page(load)

    def boom(_page):
        raise ValueError("inside frame")

    with pytest.raises(ValueError):
        page.in_frame(Id("outer"), boom)
    assert driver.frame_path == []
    assert page.browser.frames.depth == 0


def test_nested_frames_restore_enclosing_frame(load, driver: FakeDriver) -> None:
    page = framed_page(load)
    with page.frame(Id("outer")):
        with page.frame(Id("inner")):
            assert page.element(Id("deep")).text == "deep"
            assert page.browser.frames.depth == 2
        assert [n.attrs["id"] for n in driver.frame_path] == ["outer"]
        assert page.element(Id("mid")).text == "middle"
    assert driver.frame_path == []


def test_unknown_frame_index(load, driver: FakeDriver) -> None:
    page = framed_page(load)
    with pytest.raises(NoSuchFrame):
        with page.frame(3):
            pass
    assert driver.frame_path == []
    assert page.browser.frames.depth == 0
