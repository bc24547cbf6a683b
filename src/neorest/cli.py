"""Simple CLI for running Cypher against a Neo4j REST server.

Usage examples (from project root):

    # Ensure src is on PYTHONPATH, then:
    PYTHONPATH=src python -m neorest.cli service-root

    PYTHONPATH=src python -m neorest.cli cypher \
        "START n=node(*) WHERE id(n) IN {arr} RETURN n.name" \
        --params '{"arr": [0, 1]}'

    PYTHONPATH=src python -m neorest.cli cypher \
        "START n=node:name_index(name={name}) RETURN id(n)" --param name=I

The CLI uses:
- .env configuration (NEO4J_URL, NEO4J_REQUEST_TIMEOUT, LOG_LEVEL)
- Neo4jRestClient for the connection
- CypherDB for query execution
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .config import Config
from .rest import CypherDB, CypherQuery, Neo4jRestClient, Neo4jRestError


def _parse_param(value: str) -> tuple:
    """Parse a ``name=value`` pair; the value is read as JSON when possible."""
    name, sep, raw = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f'parameter must look like name=value, got "{value}"')
    try:
        parsed: Any = json.loads(raw)
    except ValueError:
        parsed = raw
    return name, parsed


def _parse_params_json(value: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"--params is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("--params must be a JSON object")
    return parsed


def _collect_parameters(
    params_json: Optional[Dict[str, Any]], pairs: Optional[List[tuple]]
) -> Dict[str, Any]:
    parameters: Dict[str, Any] = dict(params_json or {})
    for name, value in pairs or []:
        parameters[name] = value
    return parameters


def _cmd_cypher(args: argparse.Namespace) -> int:
    """Run a Cypher statement and print columns and rows."""

    config = Config()
    client = Neo4jRestClient(config=config)

    records: List[Dict[str, Any]] = []
    query = CypherQuery(
        statement=args.statement,
        parameters=_collect_parameters(args.params, args.param),
        result=records,
    )

    with client:
        CypherDB(client).execute(query)

    serializable: Dict[str, Any] = {
        "columns": query.columns(),
        "count": len(records),
    }
    if args.raw:
        serializable["data"] = query.raw_result.data if query.raw_result else []
    else:
        serializable["results"] = records

    print(json.dumps(serializable, indent=2, sort_keys=True, default=str))
    return 0


def _cmd_service_root(args: argparse.Namespace) -> int:
    """Print the service root document of the configured server."""

    config = Config()
    client = Neo4jRestClient(config=config)

    with client:
        root = client.service_root.model_dump(exclude_none=True)

    print(json.dumps(root, indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI for running Cypher against a Neo4j REST server",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # cypher command
    p_cypher = subparsers.add_parser(
        "cypher",
        help="Execute a Cypher statement and print the result set",
    )
    p_cypher.add_argument("statement", type=str, help="Cypher statement text")
    p_cypher.add_argument(
        "--params",
        type=_parse_params_json,
        default=None,
        help='All parameters as one JSON object, e.g. \'{"arr": [1, 2]}\'',
    )
    p_cypher.add_argument(
        "--param",
        type=_parse_param,
        action="append",
        default=None,
        help="One parameter as name=value (value parsed as JSON if possible); repeatable",
    )
    p_cypher.add_argument(
        "--raw",
        action="store_true",
        help="Print positional rows instead of column-keyed records",
    )
    p_cypher.set_defaults(func=_cmd_cypher)

    # service-root command
    p_root = subparsers.add_parser(
        "service-root",
        help="Show the server version and the REST endpoints it advertises",
    )
    p_root.set_defaults(func=_cmd_service_root)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=Config().log_level.upper())

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except Neo4jRestError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
