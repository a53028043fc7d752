"""Console exporter for structured logging."""

import json
import sys
from typing import Any, Optional, TextIO


class ConsoleExporter:
    """Exports events to stderr as JSON lines."""

    def __init__(self, prefix: str = "[doccompress]", stream: Optional[TextIO] = None):
        """Initialize console exporter."""
        self.prefix = prefix
        self.stream = stream
        self.pending_events: list[dict[str, Any]] = []

    def emit_event(
        self,
        event_type: str,
        properties: dict[str, Any],
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        """Buffer an event until the next flush."""
        event = {
            "type": event_type,
            "properties": properties,
        }
        if payload:
            event["payload"] = payload

        self.pending_events.append(event)

    def flush(self) -> None:
        """Write all pending events to the stream (stderr by default)."""
        stream = self.stream or sys.stderr
        for event in self.pending_events:
            msg = json.dumps(event, ensure_ascii=False)
            print(f"{self.prefix} {msg}", file=stream)
        self.pending_events.clear()


class NullExporter:
    """Discards every event; used when telemetry is disabled."""

    def emit_event(
        self,
        event_type: str,
        properties: dict[str, Any],
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        pass

    def flush(self) -> None:
        pass
