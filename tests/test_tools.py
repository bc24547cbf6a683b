"""Tests for the MCP tool functions."""

from __future__ import annotations

import pytest

from neorest.rest import CypherDB, ErrorKind, Neo4jRestClient, Neo4jRestError
from neorest.tools import cypher as cypher_tools

from conftest import CYPHER_URL, ROOT_URL, FakeResponse, FakeSession


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, client: Neo4jRestClient, session: FakeSession) -> FakeSession:
    monkeypatch.setattr(cypher_tools, "neo4j_client", client)
    monkeypatch.setattr(cypher_tools, "cypherdb", CypherDB(client))
    return session


def test_run_cypher_returns_column_keyed_rows(wired: FakeSession) -> None:
    wired.add(
        "POST",
        CYPHER_URL,
        FakeResponse(200, {"columns": ["type(r)", "n.name"], "data": [["knows", "you"]]}),
    )

    result = cypher_tools.run_cypher("START x=node(0) MATCH x-[r]->n RETURN type(r), n.name")

    assert result == {
        "columns": ["type(r)", "n.name"],
        "count": 1,
        "results": [{"type(r)": "knows", "n.name": "you"}],
    }
    assert wired.calls[-1]["json"]["params"] == {}


def test_run_cypher_logs_and_raises_on_bad_response(
    wired: FakeSession, caplog: pytest.LogCaptureFixture
) -> None:
    wired.add("POST", CYPHER_URL, FakeResponse(400, {"message": "Invalid input"}))

    with pytest.raises(Neo4jRestError) as exc_info:
        cypher_tools.run_cypher("foobar(")

    assert exc_info.value.kind is ErrorKind.BAD_RESPONSE
    assert "run_cypher failed" in caplog.text


def test_service_root_tool(wired: FakeSession) -> None:
    root = cypher_tools.service_root()

    assert root["neo4j_version"] == "2.0.0"
    assert root["cypher"] == CYPHER_URL


def test_service_root_tool_logs_failure(
    monkeypatch: pytest.MonkeyPatch, config, caplog: pytest.LogCaptureFixture
) -> None:
    session = FakeSession()
    session.add("GET", ROOT_URL, FakeResponse(503, text="Service Unavailable"))
    monkeypatch.setattr(cypher_tools, "neo4j_client", Neo4jRestClient(config=config, session=session))

    with pytest.raises(Neo4jRestError) as exc_info:
        cypher_tools.service_root()

    assert exc_info.value.kind is ErrorKind.BAD_RESPONSE
    assert "service_root failed" in caplog.text
