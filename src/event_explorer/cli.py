"""Event Explorer CLI."""

import asyncio
import json
import logging
import sys

import click

from .adapters.http_backend import HttpEventBackend
from .config import Config, load_config
from .coordinator import FetchCoordinator
from .core.state import Phase, UiState
from .errors import BackendError
from .formatting import format_sections, format_view, serialize_sections

BROWSE_HELP = "Type to search. ':c NAME' switches category (':c' for all), ':r' reloads, ':q' quits."


def _make_coordinator(config: Config, category: str = "") -> FetchCoordinator:
    backend = HttpEventBackend(config=config)
    return FetchCoordinator(
        backend,
        timeout=config.request_timeout,
        state=UiState(selected_category=category),
    )


@click.group()
@click.version_option(package_name="event-explorer")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--base-url", default=None, help="Backend URL (overrides config)")
@click.pass_context
def main(ctx, debug: bool, base_url: str | None):
    """Event Explorer - browse events by registration status."""
    config = load_config()
    if base_url:
        config.backend_url = base_url.rstrip("/")

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = config


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def categories(config: Config, as_json: bool):
    """List event categories."""
    backend = HttpEventBackend(config=config)
    try:
        names = backend.fetch_categories()
    except BackendError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        backend.close()

    if as_json:
        click.echo(json.dumps(names, indent=2))
        return

    if not names:
        click.echo("No categories.")
        return

    for name in names:
        click.echo(f"• {name}")


async def _load_once(config: Config, category: str, query: str):
    coordinator = _make_coordinator(config, category)
    try:
        result = await coordinator.load_events()
        coordinator.set_query(query)
        return result, coordinator.sections()
    finally:
        await coordinator.aclose()
        coordinator.backend.close()


@main.command("list")
@click.option("--category", "-c", default=None, help="Only events in this category")
@click.option("--query", "-q", default="", help="Search titles, descriptions and venues")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_events(config: Config, category: str | None, query: str, as_json: bool):
    """Show events grouped by registration status."""
    if category is None:
        category = config.default_category

    result, sections = asyncio.run(_load_once(config, category, query))
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(serialize_sections(sections), indent=2))
    else:
        click.echo(format_sections(sections))


def _render(coordinator: FetchCoordinator) -> None:
    state = coordinator.state
    click.echo()
    category = state.selected_category or "All Categories"
    search = f", search: {state.query!r}" if state.query else ""
    click.echo(f"== {category}{search} ==")
    click.echo(format_view(state, coordinator.sections()))
    if state.phase is Phase.ERRORED and state.last_error:
        click.echo(f"Error: {state.last_error.error} (showing previous results)", err=True)


async def _switch_category(coordinator: FetchCoordinator, category: str) -> None:
    await coordinator.set_category(category)


def _browse(config: Config, category: str) -> None:
    """Prompt on the main thread; each reload runs on one shared event loop."""
    coordinator = _make_coordinator(config, category)
    with asyncio.Runner() as runner:
        try:
            runner.run(coordinator.start())
            if coordinator.state.categories:
                click.echo(f"Categories: {', '.join(coordinator.state.categories)}")
            click.echo(BROWSE_HELP)
            _render(coordinator)

            while True:
                try:
                    line = click.prompt("search", default="", show_default=False)
                except click.Abort:
                    break

                line = line.strip()
                if line == ":q":
                    break
                elif line == ":r":
                    runner.run(_switch_category(coordinator, coordinator.state.selected_category))
                elif line == ":c" or line.startswith(":c "):
                    runner.run(_switch_category(coordinator, line[2:].strip()))
                else:
                    coordinator.set_query(line)
                _render(coordinator)
        except KeyboardInterrupt:
            click.echo()
        finally:
            runner.run(coordinator.aclose())
            coordinator.backend.close()


@main.command()
@click.option("--category", "-c", default=None, help="Start in this category")
@click.pass_obj
def browse(config: Config, category: str | None):
    """Interactively search and switch categories."""
    if category is None:
        category = config.default_category
    _browse(config, category)
    click.echo("Bye.")
