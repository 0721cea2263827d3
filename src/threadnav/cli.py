"""CLI for threadnav (outline, key replay, click-to-toggle)."""

import json
from pathlib import Path
from typing import Annotated

import requests
import typer
from loguru import logger

from threadnav.config import DEFAULT_VIEWPORT_HEIGHT_PX, resolve_fold_mode
from threadnav.core.navigation.events import InputEvent, parse_key_spec
from threadnav.core.tree.outline import render_outline
from threadnav.host.click_toggle import ClickToggle
from threadnav.host.dom import class_test
from threadnav.host.fetch import HackerNewsClient, item_url, resolve_item_id
from threadnav.host.html_page import ThreadPage, parse_thread_page
from threadnav.host.native import NativeFoldTable
from threadnav.logging_config import configure_logging
from threadnav.session import ThreadSession

app = typer.Typer(help="Keyboard navigation and folding for Hacker News comment threads.")

SourceArg = Annotated[
    str, typer.Argument(help="Saved item page (HTML file), item id, or item URL")
]
CacheOpt = Annotated[
    bool,
    typer.Option("--cache", "-C", help="Cache fetched pages and reuse the cache"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load_page(source: str, *, cache: bool = False) -> ThreadPage:
    """Read a page from disk or fetch it, exiting on failure."""
    path = Path(source).expanduser()
    if path.is_file():
        return parse_thread_page(path.read_text(encoding="utf-8"))

    item_id = resolve_item_id(source)
    if item_id is None:
        logger.error("Not a file, item id or item URL: {}", source)
        raise typer.Exit(1)

    try:
        html = HackerNewsClient(from_cache=cache).fetch_item(item_id)
    except requests.RequestException as e:
        logger.error("Failed to fetch item {}: {}", item_id, e)
        raise typer.Exit(1) from e
    return parse_thread_page(html, url=item_url(item_id))


def _require_comments(page: ThreadPage) -> None:
    if not page.comments:
        typer.echo("No comments found.")
        raise typer.Exit(0)


def _parse_keys(keys: list[str]) -> list[InputEvent]:
    events = []
    for key in keys:
        try:
            events.append(parse_key_spec(key))
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="KEYS") from e
    return events


@app.command()
def outline(source: SourceArg, cache: CacheOpt = False) -> None:
    """Print every comment row with its depth and native fold state."""
    page = _load_page(source, cache=cache)
    _require_comments(page)
    if page.title:
        typer.echo(f"{page.title}\n")
    typer.echo(render_outline(page.comments), nl=False)


@app.command()
def replay(
    source: SourceArg,
    keys: Annotated[
        list[str],
        typer.Argument(help="Keys to press, e.g. down shift+left space click:3"),
    ],
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--merged",
            help="Ignore (--strict) or honor (--merged) rows folded by the page itself. "
            "Defaults to THREADNAV_FOLD_MODE.",
        ),
    ] = None,
    viewport_height: int = typer.Option(
        DEFAULT_VIEWPORT_HEIGHT_PX, "--viewport-height", help="Viewport height in pixels"
    ),
    cache: CacheOpt = False,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Press keys on a thread and show where the cursor and folds end up."""
    events = _parse_keys(keys)

    if strict is None:
        try:
            honor_native_folds = resolve_fold_mode()
        except ValueError as e:
            logger.error("{}", e)
            raise typer.Exit(1) from e
    else:
        honor_native_folds = not strict

    page = _load_page(source, cache=cache)
    _require_comments(page)

    session = ThreadSession(
        page, honor_native_folds=honor_native_folds, viewport_height=viewport_height
    )
    for event in events:
        session.handle(event)

    if output_json:
        state = session.state()
        native = session.host
        data = {
            "active": state.active,
            "collapsed": sorted(state.collapsed),
            "visible": session.visible_positions(),
            "opened": session.opened,
            "native_folded": native.folded_positions()
            if isinstance(native, NativeFoldTable)
            else [],
            "native_clicks": native.clicks if isinstance(native, NativeFoldTable) else [],
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(session.render(), nl=False)
    for link in session.opened:
        typer.echo(f"open: {link}")


@app.command()
def click(
    source: SourceArg,
    position: int = typer.Argument(..., help="Row position (as shown by 'outline')"),
    selection: str = typer.Option("", "--selection", help="Pretend this text is selected"),
    on_link: bool = typer.Option(False, "--on-link", help="Click the author link instead"),
    cache: CacheOpt = False,
) -> None:
    """Click a comment row and report whether it was folded or unfolded."""
    page = _load_page(source, cache=cache)
    _require_comments(page)
    if not 0 <= position < len(page.comments):
        logger.error("Row {} does not exist ({} rows)", position, len(page.comments))
        raise typer.Exit(1)

    table = NativeFoldTable(page.comments)
    toggler = ClickToggle(page, table)
    toggler.enhance_all()

    target = None
    if on_link:
        links = page.rows[position].xpath(f".//a[{class_test('hnuser')}]") or list(
            page.rows[position].iter("a")
        )
        target = links[0] if links else None

    if toggler.handle_click(position, target, selection=selection):
        state = "folded" if table.is_natively_folded(position) else "unfolded"
        typer.echo(f"Row {position} {state}.")
    else:
        typer.echo(f"Click on row {position} ignored.")
