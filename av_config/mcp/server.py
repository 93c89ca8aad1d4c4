"""MCP server for av-config.

Exposes configuration lookups and device attribute updates via stdio
transport. Launched by `av-config mcp`.
"""

from __future__ import annotations

import json
import os
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from mcp.server.fastmcp import Context, FastMCP

from av_config.mcp import tools
from db.migrations import init_db

DEFAULT_DB_PATH = "~/.av-config/av-config.db"


@dataclass
class AppState:
    """Lifespan state accessible by tools via Context."""

    conn: sqlite3.Connection


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppState]:  # type: ignore[type-arg]
    """Open DB connection at startup, close on shutdown."""
    db_path = os.environ.get("AV_CONFIG_DB", DEFAULT_DB_PATH)
    db_path = str(Path(db_path).expanduser())

    conn = init_db(db_path)
    try:
        yield AppState(conn=conn)
    finally:
        conn.close()


def _get_conn(ctx: Context) -> sqlite3.Connection:
    """Extract DB connection from Context lifespan state."""
    state: AppState = ctx.request_context.lifespan_context
    return state.conn


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools registered."""
    server = FastMCP(
        name="av-config",
        instructions="Lookup and update tools for the AV configuration database.",
        lifespan=app_lifespan,
    )

    @server.tool(description="List every building")
    def list_buildings(ctx: Context) -> str:
        conn = _get_conn(ctx)
        return json.dumps(tools.list_buildings(conn), indent=2)

    @server.tool(description="List rooms, optionally only those in one building (by shortname)")
    def list_rooms(building: str | None = None, ctx: Context = None) -> str:  # type: ignore[assignment]
        conn = _get_conn(ctx)
        return json.dumps(tools.list_rooms(conn, building), indent=2)

    @server.tool(description="Return a room with its devices and configuration")
    def get_room(building: str, room: str, ctx: Context) -> str:
        conn = _get_conn(ctx)
        return json.dumps(tools.get_room(conn, building, room), indent=2)

    @server.tool(description="List the devices in a room, optionally filtered by role name")
    def get_devices_in_room(
        building: str,
        room: str,
        role: str | None = None,
        ctx: Context = None,  # type: ignore[assignment]
    ) -> str:
        conn = _get_conn(ctx)
        return json.dumps(tools.get_devices_in_room(conn, building, room, role), indent=2)

    @server.tool(description="Return a device with its roles, power states, ports and commands")
    def get_device(device_id: int, ctx: Context) -> str:
        conn = _get_conn(ctx)
        return json.dumps(tools.get_device(conn, device_id), indent=2)

    @server.tool(description="List the device fields that set_device_attribute accepts")
    def list_device_attributes() -> str:
        return json.dumps(tools.list_device_attributes(), indent=2)

    @server.tool(
        description="Set one device field. Booleans must be 'true' or 'false'; integers base-10."
    )
    def set_device_attribute(
        device_id: int,
        attribute: str,
        value: str,
        ctx: Context = None,  # type: ignore[assignment]
    ) -> str:
        conn = _get_conn(ctx)
        result = tools.set_device_attribute(conn, device_id, attribute, value)
        return json.dumps(result, indent=2)

    return server


def run_server(db_path: str | None = None) -> None:
    """Entry point: create server and run on stdio."""
    if db_path:
        os.environ["AV_CONFIG_DB"] = db_path

    server = create_server()
    server.run(transport="stdio")
