"""HTTP exporter posting compression events to a trace collector."""

import json
import sys
import time
import uuid
from typing import Any, Optional

import httpx


class HttpExporter:
    """
    Exports compression events to an HTTP ingest endpoint.

    Events are batched and sent on flush. Export failures are reported on
    stderr and never interrupt compression.
    """

    def __init__(
        self,
        url: str = "http://localhost:5175/ingest",
        trace_id: Optional[str] = None,
        timeout: float = 2.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize HTTP exporter.

        Args:
            url: Ingest endpoint
            trace_id: Trace ID for all events (auto-generated if not provided)
            timeout: HTTP request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.url = url
        self.trace_id = trace_id or f"compress-{uuid.uuid4().hex[:12]}"
        self.timeout = timeout
        self.pending_events: list[dict[str, Any]] = []
        self.http_client = httpx.Client(
            timeout=httpx.Timeout(timeout), transport=transport
        )

    def emit_event(
        self,
        event_type: str,
        properties: dict[str, Any],
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        """Buffer an event for export."""
        event = {
            "type": "span",
            "trace_id": self.trace_id,
            "span_id": f"compress-{uuid.uuid4().hex[:8]}",
            "name": event_type,
            "timestamp": time.time(),
            "properties": properties,
        }

        if payload:
            event["payload"] = json.dumps(payload, ensure_ascii=False)

        self.pending_events.append(event)

    def flush(self) -> None:
        """Send all pending events in one batch."""
        if not self.pending_events:
            return

        try:
            response = self.http_client.post(
                self.url, json={"events": self.pending_events}
            )
            response.raise_for_status()
            self.pending_events.clear()
        except httpx.HTTPError as e:
            print(f"[doccompress] Failed to export events: {e}", file=sys.stderr)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()
