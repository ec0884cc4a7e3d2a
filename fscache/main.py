"""Main entry point for the fscache command line.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from fscache.core.command_handler import CommandHandler
from fscache.core.factory import create_cache_store

# --- Infrastructure Layer ---
from fscache.infrastructure.cli.display import ConsoleDisplay
from fscache.infrastructure.config.settings import (
    DEFAULT_LOG_FORMAT,
    get_cache_root,
    get_codec_name,
    get_config,
    get_default_ttl,
    load_configuration,
    use_high_resolution_clock,
)
from fscache.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    root: Optional[Path] = None,
    codec: Optional[str] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Command line options win over
    configured values.
    """
    load_configuration()
    log_level = logging.DEBUG if verbose else resolve_log_level(get_config('logging.level', 'WARNING'))
    setup_logging(
        log_level=log_level,
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['cache_service'] = create_cache_store(
        root=root or get_cache_root(),
        codec=codec or get_codec_name(),
        high_resolution_clock=use_high_resolution_clock(),
    )
    dependencies['command_handler'] = CommandHandler(
        cache_service=dependencies['cache_service'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# Populated by the callback before any command runs
_dependencies: Dict[str, Any] = {}

# --- Typer App Definition ---
app = typer.Typer(
    name="fscache",
    help="fscache: a persistent filesystem-backed key/value cache with TTL support.",
    add_completion=False,
)


# --- Helper for Running Async Commands ---
def run_async(coro: Coroutine[Any, Any, int]) -> None:
    """Runs an async command handler and exits with its status code."""
    exit_code = asyncio.run(coro)
    raise typer.Exit(code=exit_code)


def _handler() -> CommandHandler:
    return _dependencies['command_handler']


# --- CLI Commands ---

@app.callback()
def main_callback(
    root: Annotated[
        Optional[Path],
        typer.Option("--root", "-r", file_okay=False, help="Cache root directory. Defaults to cache.root from config.")
    ] = None,
    codec: Annotated[
        Optional[str],
        typer.Option("--codec", "-c", help="Entry codec: 'pickle' or 'json'. Defaults to cache.codec from config.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """Persistent filesystem-backed key/value cache."""
    try:
        _dependencies.clear()
        _dependencies.update(create_dependencies(root=root, codec=codec, verbose=verbose))
    except ValueError as e:
        logger.error(f"Fatal Error during application initialization: {e}")
        ConsoleDisplay().display_error(f"Initialization failed: {e}")
        raise typer.Exit(code=2)


@app.command()
def get(
    key: Annotated[str, typer.Argument(help="Cache key, '/' separates directories.")],
    default: Annotated[Optional[str], typer.Option("--default", "-d", help="Printed when the key is missing or expired.")] = None,
):
    """Print the value stored under KEY."""
    run_async(_handler().handle_get(key, default))


@app.command(name="set")
def set_command(
    key: Annotated[str, typer.Argument(help="Cache key, '/' separates directories.")],
    value: Annotated[str, typer.Argument(help="Value to store (as a string).")],
    ttl: Annotated[Optional[float], typer.Option("--ttl", "-t", min=0, help="Time-to-live in seconds. Never expires if unset.")] = None,
):
    """Store VALUE under KEY."""
    run_async(_handler().handle_set(key, value, ttl if ttl is not None else get_default_ttl()))


@app.command()
def delete(
    key: Annotated[str, typer.Argument(help="Cache key to remove.")],
):
    """Remove the entry stored under KEY."""
    run_async(_handler().handle_delete(key))


@app.command()
def has(
    key: Annotated[str, typer.Argument(help="Cache key to check.")],
):
    """Check whether an entry exists for KEY (ignores TTL)."""
    run_async(_handler().handle_has(key))


@app.command()
def clear():
    """Remove every entry under the cache root."""
    run_async(_handler().handle_clear())


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
