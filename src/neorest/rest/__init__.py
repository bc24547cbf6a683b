"""
Neo4j REST client, service root discovery, and Cypher execution.

This package should contain ONLY Neo4j REST-specific logic:
- Connection handle and HTTP exchange
- Cypher query execution and result decoding

Outer surfaces (CLI, MCP tools) belong in the top-level modules and the
`tools` package.
"""

from .client import Neo4jRestClient, RestResponse, ServiceRoot
from .cypher import CypherDB, CypherQuery, CypherResult
from .errors import ErrorKind, Neo4jRestError, NeoError
from .records import column, decode_rows, field_bindings

__all__ = [
    "Neo4jRestClient",
    "RestResponse",
    "ServiceRoot",
    "CypherDB",
    "CypherQuery",
    "CypherResult",
    "ErrorKind",
    "Neo4jRestError",
    "NeoError",
    "column",
    "decode_rows",
    "field_bindings",
]
