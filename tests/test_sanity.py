"""Minimal tests: the package imports and settings come from the environment."""
# @file purpose: Minimal smoke test.

import logging

from rich.logging import RichHandler


def test_imports() -> None:
    import fluentium.cli.main as cli  # noqa: F401
    import fluentium.core.settings as settings  # noqa: F401
    import fluentium.dsl.browser as browser  # noqa: F401
    import fluentium.io.playwright_driver as driver  # noqa: F401


def test_settings_from_env(monkeypatch) -> None:
    from fluentium.core.settings import Settings

    monkeypatch.setenv("FLUENTIUM_HEADLESS", "false")
    monkeypatch.setenv("FLUENTIUM_DEFAULT_TIMEOUT_SECONDS", "3.5")
    s = Settings(_env_file=None)
    assert s.headless is False
    assert s.default_timeout_seconds == 3.5
    assert s.browser == "chromium"


def test_configure_logging_is_idempotent() -> None:
    from fluentium.core.log import ROOT_LOGGER, configure_logging

    logger = configure_logging("debug")
    configure_logging("debug")
    assert logger.name == ROOT_LOGGER
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
