"""Utility functions for MCP tools."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

mcp_tools_logger = logging.getLogger('neorest.mcp.tools')


def log_mcp_tool(function_name: str, phase: str, extra: Dict[str, Any], duration: Optional[float] = None) -> None:
    """Log an MCP tool call ("called") or its completion ("completed").

    Args:
        function_name: Name of the MCP tool function.
        phase: Either "called", "completed" or "failed".
        extra: Structured fields attached to the log record.
        duration: Optional duration in seconds, recorded once the call ends.
    """
    if duration is not None:
        extra["duration_seconds"] = duration
    level = logging.ERROR if phase == "failed" else logging.INFO
    mcp_tools_logger.log(
        level,
        f"{function_name} {phase}",
        extra=extra
    )
