"""Configuration management for the Neo4j REST client and MCP server.

Loads configuration from environment variables and an optional .env file
in the project root.

Example .env:

    NEO4J_URL=http://localhost:7474/db/data/
    NEO4J_REQUEST_TIMEOUT=30
    LOG_LEVEL=INFO
"""

from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment / .env file.

    We use explicit aliases so the mapping to env vars is obvious and
    easy to consume from scripts.
    """

    # Neo4j REST configuration
    neo4j_url: AnyHttpUrl = Field(
        "http://localhost:7474/db/data/",
        alias="NEO4J_URL",
        description="Neo4j REST service root, e.g. http://localhost:7474/db/data/",
    )
    neo4j_request_timeout: Optional[float] = Field(
        None,
        alias="NEO4J_REQUEST_TIMEOUT",
        description="Timeout in seconds handed to the HTTP transport (None blocks)",
    )

    # Server configuration
    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Log level for server / CLI (e.g. DEBUG, INFO, WARN, ERROR)",
    )
    mcp_host: str = Field(
        "0.0.0.0",
        alias="MCP_HOST",
        description="Interface the MCP server binds to",
    )
    mcp_port: int = Field(
        8000,
        alias="MCP_PORT",
        description="Port the MCP server listens on",
    )

    # Pydantic v2 settings for env loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,  # we use explicit aliases, so keep env lookup strict
        extra="ignore",
        populate_by_name=False,
    )
