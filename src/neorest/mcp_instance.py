"""Shared MCP server and Neo4j REST wiring for neorest MCP tools.

All MCP tools and the server entrypoint must import and use this module
so that there is exactly one FastMCP and one REST client/CypherDB per
process.
"""

from mcp.server.fastmcp import FastMCP

from .config import Config
from .rest import CypherDB, Neo4jRestClient

config = Config()

# Single shared MCP server instance
mcp = FastMCP(
    "neorest-mcp-server",
    host=config.mcp_host,
    streamable_http_path="/",
    port=config.mcp_port,
)

# Shared Neo4j wiring for all tools
neo4j_client = Neo4jRestClient(config=config)
cypherdb = CypherDB(neo4j_client)

# Convenience alias for defining tools bound to this server
tool = mcp.tool

__all__ = ["mcp", "tool", "config", "neo4j_client", "cypherdb"]
