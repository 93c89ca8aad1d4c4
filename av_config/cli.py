"""CLI entry point for av-config.

Commands:
    av-config init     write a starter config in the current directory
    av-config migrate  create the database schema
    av-config serve    start the HTTP API server
    av-config mcp      start the MCP server (stdio transport)
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import click

from av_config.config import CONFIG_FILENAME, DEFAULTS, ConfigError, load_config

DEFAULT_DB_PATH = "~/.av-config/av-config.db"

DEFAULT_CONFIG = {"db_path": DEFAULT_DB_PATH, **DEFAULTS}


def _load_config_or_defaults() -> dict[str, Any]:
    """Load ./av-config.config.json, falling back to built-in defaults."""
    try:
        return load_config()
    except ConfigError:
        config = dict(DEFAULT_CONFIG)
        config["db_path"] = str(Path(DEFAULT_DB_PATH).expanduser())
        return config


def _resolve_db_path(db_path: str | None, config: dict[str, Any]) -> str:
    """--db-path wins, then AV_CONFIG_DB, then the config file."""
    if db_path:
        return str(Path(db_path).expanduser())
    return os.environ.get("AV_CONFIG_DB") or config["db_path"]


@click.group()
def main() -> None:
    """av-config: configuration database for the AV-control platform."""


@main.command()
def init() -> None:
    """Create a starter av-config.config.json."""
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        click.echo(f"Config already exists: {config_path}")
        return

    config_path.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    click.echo(f"Created {config_path}")


@main.command()
@click.option("--db-path", default=None, help="SQLite database file to migrate")
def migrate(db_path: str | None) -> None:
    """Create all tables. Safe to run repeatedly."""
    from db.migrations import init_db

    path = _resolve_db_path(db_path, _load_config_or_defaults())
    conn = init_db(path)
    conn.close()
    click.echo(f"Migrated {path}")


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", default=None, type=int, help="Port to bind (default from config)")
@click.option("--db-path", default=None, help="SQLite database file")
def serve(host: str | None, port: int | None, db_path: str | None) -> None:
    """Start the av-config API server."""
    try:
        config = load_config()
    except ConfigError as e:
        if (Path.cwd() / CONFIG_FILENAME).exists():
            click.echo(f"Config error: {e}", err=True)
            sys.exit(1)
        config = _load_config_or_defaults()

    logging.basicConfig(
        level=getattr(logging, config["log_level"], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    import uvicorn

    from api.app import create_app
    from db.migrations import init_db

    path = _resolve_db_path(db_path, config)
    init_db(path).close()

    app = create_app(db_path=path)
    uvicorn.run(
        app,
        host=host or config["host"],
        port=port or config["port"],
        log_level=config["log_level"].lower(),
    )


@main.command()
@click.option("--db-path", default=None, help="SQLite database file")
def mcp(db_path: str | None) -> None:
    """Start the av-config MCP server (stdio transport)."""
    from av_config.mcp.server import run_server

    run_server(db_path=_resolve_db_path(db_path, _load_config_or_defaults()))
