"""
MCP Server implementation for neorest

This module is the entrypoint used when running the MCP server process.
It imports the shared `mcp` instance and all MCP tools so they are
registered on the same FastMCP server.
"""

from __future__ import annotations

import logging

logging.basicConfig(
    level=logging.INFO,
    handlers=[logging.FileHandler("/tmp/neorest_mcp_server.log")]
)

# Import tools so their @tool decorators run and register them on `mcp`.
from .tools import cypher as cypher_tools  # noqa: F401
from .mcp_instance import config, mcp  # shared FastMCP instance


logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the MCP server."""
    logging.getLogger().setLevel(config.log_level.upper())
    logger.info("Starting neorest MCP server on %s:%s...", config.mcp_host, config.mcp_port)
    # Run the shared FastMCP instance; this will block the current process.
    mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
