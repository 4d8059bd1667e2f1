"""MCP resource definitions for the FamilySearch server."""

from .core import _get_config_status


def register_resources(mcp):
    """Register all MCP resources with the server."""

    @mcp.resource("familysearch://config")
    def resource_config() -> str:
        """Current configuration status (never includes tokens or the password)."""
        status = _get_config_status()
        return "\n".join(f"{key}: {value}" for key, value in status.items())
