"""Neo4j REST connection handle and service root discovery."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import Config
from .errors import ErrorKind, Neo4jRestError, NeoError

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Accept": "application/json; charset=UTF-8",
    "Content-Type": "application/json",
}


class ServiceRoot(BaseModel):
    """Endpoint hrefs advertised by the server's service root document."""

    model_config = ConfigDict(extra="allow")

    node: Optional[str] = None
    node_index: Optional[str] = None
    relationship_index: Optional[str] = None
    relationship_types: Optional[str] = None
    extensions_info: Optional[str] = None
    batch: Optional[str] = None
    cypher: Optional[str] = None
    indexes: Optional[str] = None
    constraints: Optional[str] = None
    transaction: Optional[str] = None
    node_labels: Optional[str] = None
    neo4j_version: Optional[str] = None
    extensions: Dict[str, Any] = {}


@dataclass
class RestResponse:
    """Status code, decoded JSON body and raw text of one HTTP exchange."""

    status: int
    body: Any
    text: str
    url: str
    method: str = "GET"

    def pretty(self) -> str:
        """Render the full response for diagnostic logging."""
        if self.body is not None:
            payload = json.dumps(self.body, indent=2, sort_keys=True, default=str)
        else:
            payload = self.text
        return f"{self.method} {self.url} -> {self.status}\n{payload}"


def log_bad_response(response: RestResponse) -> Optional[NeoError]:
    """Log a non-success response in full and decode its error document."""
    neo_error = NeoError.from_body(response.body)
    logger.error("Bad response from Neo4j: %s", response.pretty())
    return neo_error


class Neo4jRestClient:
    """Neo4j REST client holding one HTTP session per instance."""

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[Any] = None,
    ) -> None:
        """Initialize the client; ``session`` defaults to a ``requests.Session``."""
        self.config = config or Config()
        self._session = session
        self._service_root: Optional[ServiceRoot] = None

    @property
    def url(self) -> str:
        return str(self.config.neo4j_url)

    def _get_session(self) -> Any:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def request(self, method: str, url: str, body: Any = None) -> RestResponse:
        """Send one JSON request and return the decoded response.

        Transport errors raised by the session propagate unchanged.
        """
        session = self._get_session()
        logger.debug("%s %s", method, url)
        resp = session.request(
            method,
            url,
            json=body,
            headers=JSON_HEADERS,
            timeout=self.config.neo4j_request_timeout,
        )
        try:
            decoded = resp.json() if resp.text else None
        except ValueError:
            decoded = None
        return RestResponse(
            status=resp.status_code,
            body=decoded,
            text=resp.text,
            url=url,
            method=method,
        )

    def get(self, url: str) -> RestResponse:
        return self.request("GET", url)

    def post(self, url: str, body: Any) -> RestResponse:
        return self.request("POST", url, body)

    def connect(self) -> None:
        """Fetch the service root and remember its endpoint hrefs."""
        if self._service_root is not None:
            return

        response = self.get(self.url)
        if response.status == 404:
            neo_error = log_bad_response(response)
            raise Neo4jRestError(
                ErrorKind.NOT_FOUND,
                "service root not found",
                uri=self.url,
                status=response.status,
                neo_error=neo_error,
            )
        if response.status != 200:
            neo_error = log_bad_response(response)
            raise Neo4jRestError(
                ErrorKind.BAD_RESPONSE,
                "unexpected status fetching service root",
                uri=self.url,
                status=response.status,
                neo_error=neo_error,
            )

        try:
            root = ServiceRoot.model_validate(response.body)
        except ValidationError as e:
            logger.error("Service root at %s is not a JSON object", self.url, exc_info=True)
            raise Neo4jRestError(
                ErrorKind.DECODE,
                "cannot decode service root",
                uri=self.url,
                status=response.status,
            ) from e

        if not root.cypher:
            logger.error("Service root at %s advertises no cypher endpoint", self.url)
            raise Neo4jRestError(
                ErrorKind.INVALID_DATABASE,
                "service root has no cypher endpoint",
                uri=self.url,
                status=response.status,
            )

        logger.info("Connected to Neo4j %s at %s", root.neo4j_version or "?", self.url)
        self._service_root = root

    @property
    def service_root(self) -> ServiceRoot:
        if self._service_root is None:
            self.connect()
        assert self._service_root is not None  # for type checkers
        return self._service_root

    @property
    def cypher_url(self) -> str:
        return self.service_root.cypher or ""

    def close(self) -> None:
        """Close the HTTP session and forget the discovered endpoints."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self._service_root = None

    def verify_connectivity(self) -> bool:
        """Verify the service root is reachable and looks like Neo4j."""
        try:
            self._service_root = None
            self.connect()
            return True
        except (requests.RequestException, Neo4jRestError) as e:
            logger.error("Neo4j connectivity check failed: %s", e, exc_info=True)
            return False

    def __enter__(self) -> "Neo4jRestClient":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
