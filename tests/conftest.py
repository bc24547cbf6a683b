"""Shared HTTP stubs for the Neo4j REST client tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from neorest.config import Config
from neorest.rest import Neo4jRestClient

ROOT_URL = "http://neo4j.test:7474/db/data/"
CYPHER_URL = "http://neo4j.test:7474/db/data/cypher"

SERVICE_ROOT = {
    "extensions": {},
    "node": "http://neo4j.test:7474/db/data/node",
    "node_index": "http://neo4j.test:7474/db/data/index/node",
    "relationship_index": "http://neo4j.test:7474/db/data/index/relationship",
    "extensions_info": "http://neo4j.test:7474/db/data/ext",
    "relationship_types": "http://neo4j.test:7474/db/data/relationship/types",
    "batch": "http://neo4j.test:7474/db/data/batch",
    "cypher": CYPHER_URL,
    "transaction": "http://neo4j.test:7474/db/data/transaction",
    "node_labels": "http://neo4j.test:7474/db/data/labels",
    "neo4j_version": "2.0.0",
}


class FakeResponse:
    def __init__(self, status_code: int, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Replays canned responses keyed by (method, url) and records requests."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def add(self, method: str, url: str, response: Any) -> None:
        self.routes.setdefault((method, url), []).append(response)

    def request(self, method: str, url: str, json: Any = None, headers: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append(
            {"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        queue = self.routes[(method, url)]
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def config() -> Config:
    return Config(NEO4J_URL=ROOT_URL)


@pytest.fixture
def session() -> FakeSession:
    fake = FakeSession()
    fake.add("GET", ROOT_URL, FakeResponse(200, SERVICE_ROOT))
    return fake


@pytest.fixture
def client(config: Config, session: FakeSession) -> Neo4jRestClient:
    return Neo4jRestClient(config=config, session=session)
