from __future__ import annotations

"""``qparas QUERY [KEY=VALUE ...]`` - query the Paras API and print JSON."""

import json
import os

import click

from qparas import __version__
from qparas.api_clients.paras_client import ParasClient
from qparas.config import load_config
from qparas.errors import QParasError
from qparas.pager import Pager
from qparas.query import QUERIES, Query
from qparas.utils.log_json import set_level

_EPILOG = (
    "Directives: __limit=N asks the server for N results per page; "
    "__min=N keeps fetching pages until at least N results arrived. "
    "Sort values use FIELD::DIRECTION, e.g. __sort=metadata.score::-1. "
    f"Queries: {', '.join(sorted(QUERIES))}."
)


def _progress_writer():
    stderr = click.get_text_stream("stderr")
    if not stderr.isatty():
        return None

    def _write(page: int, entries: int) -> None:
        click.echo(f"\x1b[K(Page {page}: {entries} entries)\r", err=True, nl=False)

    return _write


def _emit(text: str, stream=None) -> bool:
    """Write ``text`` to stdout; ``False`` once the reader has closed the pipe."""
    if stream is None:
        stream = click.get_text_stream("stdout")
    try:
        click.echo(text, file=stream)
        stream.flush()
    except BrokenPipeError:
        # downstream reader went away, e.g. ``| head``; the exit-time flush must not raise again
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, stream.fileno())
        os.close(devnull)
        return False
    return True


@click.command(epilog=_EPILOG, context_settings={"ignore_unknown_options": True})
@click.argument("query")
@click.argument("params", nargs=-1)
@click.option("--compact", is_flag=True, help="Print single-line JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr.")
@click.version_option(__version__)
def cli(query: str, params: tuple[str, ...], compact: bool, verbose: bool) -> None:
    """Query the Paras.id API and print the JSON result."""
    config = load_config()
    set_level("INFO" if verbose else config.log_level)
    progress = None
    try:
        parsed, directives = Query.parse(query, params)
        progress = _progress_writer()
        with ParasClient(config) as client:
            result = Pager(client.fetch, progress=progress).run(parsed, directives)
    except QParasError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if progress is not None:
            click.echo("\x1b[K", err=True, nl=False)

    text = json.dumps(result.value, ensure_ascii=False, indent=None if compact else 2)
    if _emit(text):
        click.echo(f"(Pages: {result.pages_fetched}, Entries: {result.entries})", err=True)


if __name__ == "__main__":  # pragma: no cover - manual usage
    cli()
