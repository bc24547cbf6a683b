"""MCP tools for Cypher queries over the Neo4j REST API.

This module exposes `CypherDB` execution and service root discovery as
MCP tools.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import requests

from ..mcp_instance import cypherdb, neo4j_client, tool
from ..rest import CypherQuery, Neo4jRestError
from .utils import log_mcp_tool


@tool()
def run_cypher(
    statement: str,
    parameters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run a Cypher statement and return its rows keyed by column name.

    Use this tool when:
        - You need to read data from the graph with an ad-hoc Cypher query.
        - You want the column names the query returns, in order.

    Always pass values through `parameters` and reference them in the
    statement (`{name}` or `$name` depending on the server version) instead
    of formatting them into the statement text.

    Args:
        statement: Cypher statement text.
        parameters: Named parameter values (JSON values; lists keep their order).

    Returns:
        A JSON-serializable dict:

            {
              "columns": [<str>, ...],
              "count": <int>,
              "results": [ {<column>: <value>, ...}, ... ]
            }

    Example:
        run_cypher(statement="MATCH (n) WHERE id(n) IN {ids} RETURN n.name ORDER BY id(n)",
                   parameters={"ids": [0, 1]})
        {
            "columns": ["n.name"],
            "count": 2,
            "results": [{"n.name": "I"}, {"n.name": "you"}]
        }
    """
    start_time = time.time()
    log_mcp_tool("run_cypher", "called", {
        "statement": statement,
        "parameters": parameters,
    })

    records: list = []
    query = CypherQuery(statement=statement, parameters=parameters or {}, result=records)
    try:
        cypherdb.execute(query)
    except Neo4jRestError as e:
        log_mcp_tool("run_cypher", "failed", {
            "statement": statement,
            "kind": e.kind.value,
            "status": e.status,
        }, duration=time.time() - start_time)
        raise

    duration = time.time() - start_time
    log_mcp_tool("run_cypher", "completed", {
        "statement": statement,
        "result_count": len(records),
    }, duration=duration)

    return {
        "columns": query.columns(),
        "count": len(records),
        "results": records,
    }


@tool()
def service_root() -> Dict[str, Any]:
    """Describe the connected Neo4j server and the REST endpoints it advertises.

    Use this tool when:
        - You need the server version before writing a version-specific query.
        - You want to check that the database is reachable.

    Returns:
        A JSON-serializable dict of the service root document, e.g.

            {
              "neo4j_version": "2.0.0",
              "cypher": "http://localhost:7474/db/data/cypher",
              "node": "http://localhost:7474/db/data/node",
              ...
            }
    """
    start_time = time.time()
    log_mcp_tool("service_root", "called", {})

    try:
        root = neo4j_client.service_root.model_dump(exclude_none=True)
    except (requests.RequestException, Neo4jRestError) as e:
        log_mcp_tool("service_root", "failed", {
            "error": str(e),
        }, duration=time.time() - start_time)
        raise

    log_mcp_tool("service_root", "completed", {
        "neo4j_version": root.get("neo4j_version"),
    }, duration=time.time() - start_time)
    return root
