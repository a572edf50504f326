"""JSON event lines for the robots-interpreter CLI.

One event per line, keys sorted, ASCII only, so output can be piped into
`jq` or collected by a log shipper without further framing.
"""

from __future__ import annotations

import json
import sys
from datetime import UTC, datetime
from typing import Any, TextIO


LOG_LEVELS = ("debug", "info", "warning", "error")
_RESERVED_KEYS = frozenset({"event_type", "level", "timestamp", "run_id"})


def render_json_event(
    event_type: str,
    *,
    run_id: str | None,
    level: str = "info",
    **payload: Any,
) -> str:
    """Render one event as a single JSON line (no trailing newline)."""
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}")
    clashing = _RESERVED_KEYS.intersection(payload)
    if clashing:
        raise ValueError(f"Payload overrides reserved event fields: {', '.join(sorted(clashing))}")

    event: dict[str, Any] = {
        "event_type": event_type,
        "level": level,
        "timestamp": datetime.now(UTC).isoformat(),
        "run_id": run_id,
        **payload,
    }
    return json.dumps(event, ensure_ascii=True, sort_keys=True, default=str)


def emit_json_event(
    event_type: str,
    *,
    run_id: str | None,
    level: str = "info",
    stream: TextIO | None = None,
    **payload: Any,
) -> str:
    """Write one event line to `stream` (stdout by default) and return it."""
    line = render_json_event(event_type, run_id=run_id, level=level, **payload)
    out = stream if stream is not None else sys.stdout
    out.write(line + "\n")
    out.flush()
    return line
