"""Typer application and CLI entry point for nodepath.

The root application exposes:

* ``nodepath show FILE`` -- run the ``show-tree`` command on a file and
  print the syntax path under the cursor.
* ``nodepath commands`` / ``nodepath modules`` -- list what the loaded
  modules registered.
* ``nodepath config ...`` -- manage the global configuration.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions other than
:class:`~nodepath.exceptions.NodepathError` are written to a crash log
under the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from nodepath import __version__
from nodepath.commands.config import config_app
from nodepath.exceptions import InvalidUsageError, NodepathError
from nodepath.exit_codes import EXIT_GENERIC_FAILURE
from nodepath.output import OutputFormat, OutputManager, error, print_table, set_output

SHOW_COMMAND = "show-tree"

app = typer.Typer(
    name="nodepath",
    help="Describe the syntax-tree path under the cursor.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"nodepath {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~nodepath.output.OutputManager` and, with
    ``--verbose``, routes library logging to stderr.
    """
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _configured_format() -> OutputFormat:
    """Output format from the global config; ``AUTO`` if unset or unreadable."""
    from nodepath.config import load_global_config

    try:
        return OutputFormat(load_global_config().output.format)
    except (NodepathError, ValueError):
        return OutputFormat.AUTO


def _create_manager(config: Any) -> Any:
    """Build a :class:`~nodepath.modules.ModuleManager` with modules loaded."""
    from nodepath.modules import ModuleManager
    from nodepath.output import debug

    manager = ModuleManager()
    loaded = manager.discover(config)
    debug(f"Loaded modules: {', '.join(loaded) or '(none)'}")
    return manager


@app.command("show")
def show_command(
    file: Path = typer.Argument(help="Document to inspect."),
    line: int = typer.Option(1, "--line", "-l", help="Cursor line (1-based)."),
    column: int = typer.Option(1, "--column", "-c", help="Cursor column (1-based)."),
    separator: Optional[str] = typer.Option(
        None, "--separator", "-s", help="Label separator. Empty means a single space."
    ),
    language: Optional[str] = typer.Option(
        None, "--language", help="Grammar name; detected from the file suffix by default."
    ),
    all_nodes: bool = typer.Option(
        False, "--all-nodes", help="Include anonymous tokens, not only named nodes."
    ),
) -> None:
    """Print the path from the document root to the node under the cursor.

    Example::

        nodepath show app.py --line 12 --column 8
        nodepath show README.md -l 3 --separator /
    """
    from nodepath.config import resolve_config
    from nodepath.providers import load_document

    try:
        if line < 1 or column < 1:
            raise InvalidUsageError("--line and --column are 1-based and must be positive")
        config = resolve_config(cli_separator=separator)
        if all_nodes:
            config.show_tree.named_only = False
        document = load_document(file, line - 1, column - 1, content_type=language)

        manager = _create_manager(config)
        try:
            manager.run_command(SHOW_COMMAND, document)
        finally:
            manager.cleanup()
    except NodepathError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@app.command("commands")
def commands_command(
    content_type: Optional[str] = typer.Option(
        None, "--content-type", "-t", help="Only commands usable for this content type."
    ),
) -> None:
    """List the commands registered by loaded modules."""
    from nodepath.config import resolve_config

    try:
        manager = _create_manager(resolve_config())
    except NodepathError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        rows = manager.commands.list_commands()
        if content_type is not None:
            usable = set(manager.commands.available_for(content_type))
            rows = [row for row in rows if row["name"] in usable]
        print_table(
            ["name", "event", "content_types"],
            [[row["name"], row["event"], row["content_types"]] for row in rows],
            title="Commands",
        )
    finally:
        manager.cleanup()


@app.command("modules")
def modules_command() -> None:
    """List loaded modules."""
    from nodepath.config import resolve_config

    try:
        manager = _create_manager(resolve_config())
    except NodepathError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        rows = manager.list_modules()
        print_table(
            ["name", "version", "description"],
            [[row["name"], row["version"], row["description"]] for row in rows],
            title="Modules",
        )
    finally:
        manager.cleanup()


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from nodepath.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``nodepath`` console script."""
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except NodepathError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
