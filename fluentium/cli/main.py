"""
CLI entrypoint.

doctor: print the effective settings (env / .env) to confirm the setup.
probe:  open a URL, wait for elements matching a CSS selector and print their
        text (or an attribute) as a table; non-zero exit on failure.
"""
# @file purpose: Typer CLI for environment checks and element probing.

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..core.errors import FluentiumError, TimeoutError
from ..core.hooks import BrowserHooks, Verbose
from ..core.locator import Css
from ..core.log import configure_logging
from ..core.settings import settings
from ..dsl.browser import launch

app = typer.Typer(help="fluentium CLI")
console = Console()


@app.command("doctor")
def doctor() -> None:
    """Environment check: print the effective settings."""
    console.print("[bold green]fluentium[/] environment")
    console.print(f"- browser:  {settings.browser}")
    console.print(f"- headless: {settings.headless}")
    console.print(f"- slow-mo:  {settings.slow_mo_ms}ms")
    console.print(f"- timeout:  {settings.default_timeout_seconds:g}s (poll {settings.poll_interval_seconds:g}s)")
    console.print(f"- alerts:   {settings.alert_timeout_seconds:g}s")
    console.print(f"- autoscroll: {settings.autoscroll}")
    console.print(f"- log level:  {settings.log_level}")


@app.command("probe")
def probe(
    url: str = typer.Argument(..., help="Page to open"),
    css: str = typer.Argument(..., help="CSS selector of the element(s) to read"),
    timeout: float = typer.Option(
        settings.default_timeout_seconds, "--timeout", help="Seconds to wait for a match"
    ),
    attribute: Optional[str] = typer.Option(
        None, "--attribute", "-a", help="Print this attribute instead of the text"
    ),
    headless: bool = typer.Option(settings.headless, "--headless/--no-headless", help="Run browser headless"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every browser interaction"),
) -> None:
    """
    Open URL, wait up to --timeout seconds for CSS to match and print every
    match. Exits 1 if nothing matched in time, 2 on any other failure.
    """
    configure_logging("DEBUG" if verbose else None, console=console)
    hooks: BrowserHooks = Verbose() if verbose else BrowserHooks()
    cfg = settings.model_copy(update={"headless": headless})

    try:
        with launch(cfg, hooks=hooks) as browser:
            page = browser.open(url)
            matches = page.elements(Css(css), timeout=timeout)

            table = Table(title=f"{css} @ {page.current_url}", show_header=True, header_style="bold")
            table.add_column("#", justify="right", style="dim")
            table.add_column("tag")
            table.add_column(attribute or "text")
            for i, e in enumerate(matches):
                shown = e.get_attribute(attribute) if attribute else e.text
                table.add_row(str(i), e.tag_name, "-" if shown is None else shown)
            console.print(table)
    except TimeoutError as e:
        typer.secho(f"[probe] no element matched {css!r}: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except FluentiumError as e:
        typer.secho(f"[probe] failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
