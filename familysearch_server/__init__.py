"""FamilySearch Genealogy Server - FastMCP server for the FamilySearch API.

Exposes person search, person details, ancestor/descendant trees and
historical record search as MCP tools, with OAuth credentials persisted in
~/.familysearch-mcp/config.json.

Usage:
    familysearch-server
    FAMILYSEARCH_ENVIRONMENT=beta python -m familysearch_server
"""

from fastmcp import FastMCP

from .mcp_resources import register_resources
from .mcp_tools import register_tools
from .state import configure
from .telemetry import initialize_tracing

# Tracing must be set up before the server is created
# No-op unless FAMILYSEARCH_TRACING_ENABLED=true
initialize_tracing()

mcp = FastMCP("FamilySearch Genealogy Server")

register_tools(mcp)
register_resources(mcp)

_initialized = False


def initialize():
    """Initialize the server: read config from env vars and load credentials.

    Safe to call multiple times.
    """
    global _initialized
    if _initialized:
        return
    configure()
    _initialized = True


__all__ = ["mcp", "initialize"]
