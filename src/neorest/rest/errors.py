"""Error kinds raised by the Neo4j REST client.

Every failure detected by this package is a ``Neo4jRestError`` carrying an
``ErrorKind`` plus the context that triggered it (URI, HTTP status and the
server's error document when one was returned). Transport failures are not
wrapped: the ``requests`` exception reaches the caller as raised.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ErrorKind(str, Enum):
    """What went wrong, for callers that branch on failure type."""

    BAD_RESPONSE = "bad_response"
    NOT_FOUND = "not_found"
    DECODE = "decode"
    INVALID_DATABASE = "invalid_database"


class NeoError(BaseModel):
    """Error document returned by the server on a failed request."""

    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    exception: Optional[str] = None
    fullname: Optional[str] = None
    stacktrace: List[str] = Field(default_factory=list)

    @classmethod
    def from_body(cls, body: Any) -> Optional["NeoError"]:
        """Decode an error body, returning None when it is not an error document."""
        if not isinstance(body, dict):
            return None
        try:
            return cls.model_validate(body)
        except ValidationError:
            return None

    def __str__(self) -> str:
        if self.exception and self.message:
            return f"{self.exception}: {self.message}"
        return self.message or self.exception or "unknown server error"


class Neo4jRestError(Exception):
    """A failure talking to the Neo4j REST API."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        uri: Optional[str] = None,
        status: Optional[int] = None,
        neo_error: Optional[NeoError] = None,
    ) -> None:
        self.kind = kind
        self.uri = uri
        self.status = status
        self.neo_error = neo_error
        super().__init__(message)

    def __str__(self) -> str:
        parts = [f"[{self.kind.value}] {self.args[0]}"]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.uri:
            parts.append(f"uri={self.uri}")
        if self.neo_error is not None:
            parts.append(f"server={self.neo_error}")
        return " ".join(parts)
