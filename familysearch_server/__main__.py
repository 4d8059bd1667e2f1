"""Entry point for running the FamilySearch server as a module.

Usage:
    python -m familysearch_server
    familysearch-server --environment beta
"""

import argparse
import logging
import os
import sys


def main():
    """Main entry point for the FamilySearch MCP server."""
    parser = argparse.ArgumentParser(
        description="FamilySearch MCP Server - Query the FamilySearch API via MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  familysearch-server
  familysearch-server --environment beta --timeout 60

Environment variables:
  FAMILYSEARCH_CONFIG_DIR       Directory for config.json (default: ~/.familysearch-mcp)
  FAMILYSEARCH_ENVIRONMENT      production, beta or integration (default: production)
  FAMILYSEARCH_TIMEOUT          Request timeout in seconds (default: 30)
  FAMILYSEARCH_LOG_LEVEL        Log level for stderr output (default: INFO)
  FAMILYSEARCH_TRACING_ENABLED  Export OpenTelemetry traces (default: false)
""",
    )
    parser.add_argument(
        "--config-dir",
        "-c",
        metavar="PATH",
        help="Directory holding config.json (or set FAMILYSEARCH_CONFIG_DIR)",
    )
    parser.add_argument(
        "--environment",
        "-e",
        choices=["production", "beta", "integration"],
        help="FamilySearch environment (or set FAMILYSEARCH_ENVIRONMENT)",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        metavar="SECONDS",
        help="Request timeout in seconds (or set FAMILYSEARCH_TIMEOUT)",
    )
    args = parser.parse_args()

    # CLI args override env vars
    if args.config_dir:
        os.environ["FAMILYSEARCH_CONFIG_DIR"] = args.config_dir
    if args.environment:
        os.environ["FAMILYSEARCH_ENVIRONMENT"] = args.environment
    if args.timeout:
        os.environ["FAMILYSEARCH_TIMEOUT"] = args.timeout

    # stdout carries the MCP protocol
    logging.basicConfig(
        level=os.getenv("FAMILYSEARCH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Import and initialize AFTER setting env vars
    from . import initialize, mcp

    initialize()
    logging.getLogger(__name__).info("FamilySearch server is running")
    mcp.run()


if __name__ == "__main__":
    main()
