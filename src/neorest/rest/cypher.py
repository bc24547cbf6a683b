"""Cypher queries over the Neo4j REST ``cypher`` endpoint.

The server answers a query with parallel arrays:

    {"columns": ["id(n)", "n.name"], "data": [[0, "I"], [1, "you"]]}

``CypherDB.execute`` stores that raw result on the query and, when the
query carries a destination list, decodes the rows into it. Decoding errors
are raised from ``execute`` like any other failure.

Important: this module assumes the REST client is managed by the caller. It
does NOT create or close connections.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ValidationError, model_validator

from .client import Neo4jRestClient, log_bad_response
from .errors import ErrorKind, Neo4jRestError
from .records import decode_rows, field_bindings

logger = logging.getLogger(__name__)


class CypherResult(BaseModel):
    """Raw column/row result set as returned on the wire."""

    columns: List[str]
    data: List[List[Any]]

    @model_validator(mode="after")
    def _rows_match_columns(self) -> "CypherResult":
        width = len(self.columns)
        for row_num, row in enumerate(self.data):
            if len(row) != width:
                raise ValueError(
                    f"row {row_num} has {len(row)} values for {width} columns"
                )
        return self


@dataclass
class CypherQuery:
    """A Cypher statement with named parameters and an optional destination.

    If ``result`` is a list, it is filled with one record per returned row
    when the query is executed. Records are instances of ``record_type``
    (a pydantic model or dataclass) or, without one, dicts keyed by column.
    ``column_map`` maps record field names to column names and overrides
    what the record type declares.
    """

    statement: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    result: Optional[List[Any]] = None
    record_type: Optional[type] = None
    column_map: Optional[Mapping[str, str]] = None
    _raw: Optional[CypherResult] = field(default=None, init=False, repr=False)

    def columns(self) -> List[str]:
        """Column names, in order, of the last execution. Empty before one."""
        if self._raw is None:
            return []
        return list(self._raw.columns)

    @property
    def raw_result(self) -> Optional[CypherResult]:
        return self._raw

    def unmarshal(
        self,
        record_type: Optional[type] = None,
        column_map: Optional[Mapping[str, str]] = None,
    ) -> List[Any]:
        """Decode the last raw result into a new list of records."""
        if self._raw is None:
            return []
        return decode_rows(self._raw.columns, self._raw.data, record_type, column_map)

    def to_request(self) -> Dict[str, Any]:
        """Wire form of the query."""
        return {"query": self.statement, "params": self.parameters}


class CypherDB:
    """Cypher query execution backed by a Neo4jRestClient."""

    def __init__(self, client: Neo4jRestClient) -> None:
        self.client = client

    def execute(self, query: CypherQuery) -> CypherResult:
        """Run ``query`` against the server and populate its result.

        Returns:
            The raw result, also kept on ``query`` for ``columns()``.

        Raises:
            requests.RequestException: the HTTP call itself failed.
            Neo4jRestError: ``BAD_RESPONSE`` on any non-200 status, ``DECODE``
                when the body or the destination records cannot be decoded.
            TypeError, ValueError: the destination record type or column_map
                cannot be bound to named columns; raised before any request.
        """
        if query.result is not None and query.record_type is not None:
            field_bindings(query.record_type, query.column_map)

        url = self.client.cypher_url
        logger.debug("Executing cypher: %s params=%s", query.statement.strip(), query.parameters)
        response = self.client.post(url, query.to_request())

        if response.status != 200:
            neo_error = log_bad_response(response)
            raise Neo4jRestError(
                ErrorKind.BAD_RESPONSE,
                "cypher query rejected",
                uri=url,
                status=response.status,
                neo_error=neo_error,
            )

        try:
            raw = CypherResult.model_validate(response.body)
        except ValidationError as e:
            logger.error("Cannot decode cypher result: %s", response.pretty(), exc_info=True)
            raise Neo4jRestError(
                ErrorKind.DECODE,
                f"malformed cypher result: {e.error_count()} error(s)",
                uri=url,
                status=response.status,
            ) from e

        # Decode before touching the query so a failure leaves it as it was.
        records = None
        if query.result is not None:
            records = decode_rows(raw.columns, raw.data, query.record_type, query.column_map)

        query._raw = raw
        if records is not None:
            query.result[:] = records
        return raw

    def query(
        self,
        statement: str,
        parameters: Optional[Dict[str, Any]] = None,
        record_type: Optional[type] = None,
        column_map: Optional[Mapping[str, str]] = None,
    ) -> List[Any]:
        """Run a statement and return its decoded records."""
        records: List[Any] = []
        self.execute(
            CypherQuery(
                statement=statement,
                parameters=parameters or {},
                result=records,
                record_type=record_type,
                column_map=column_map,
            )
        )
        return records
