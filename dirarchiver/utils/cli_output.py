"""JSON output helper for CLI commands."""

from __future__ import annotations

import json
from typing import Any

from dirarchiver.utils.schema import build_schema_stamp


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "archive_summary").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.

    Example:
        >>> json_response("archive_summary", 1, format="zip", file_count=2)
        {
          "schema_id": "archive_summary",
          "schema_version": 1,
          "producer": "dirarchiver-0.1.0",
          "produced_at": "2026-10-19T10:30:00+00:00",
          "format": "zip",
          "file_count": 2
        }
    """
    stamp = build_schema_stamp(schema_id=schema_id, schema_version=schema_version)
    return json.dumps(stamp.apply(data), indent=2, default=str)
