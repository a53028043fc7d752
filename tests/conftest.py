"""Test fixtures and configuration."""

from typing import Any, Optional

import pytest

from doccompress import BudgetConfig, CompressConfig, RawDocument
from doccompress.compressor import DocumentCompressor


class RecordingExporter:
    """Exporter keeping events in memory."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []
        self.flushed = 0

    def emit_event(
        self,
        event_type: str,
        properties: dict[str, Any],
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        self.events.append({"type": event_type, "properties": properties})

    def flush(self) -> None:
        self.flushed += 1

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [e["properties"] for e in self.events if e["type"] == event_type]


@pytest.fixture
def default_config() -> CompressConfig:
    """Default budget, telemetry off."""
    return CompressConfig(telemetry_enabled=False)


@pytest.fixture
def small_config() -> CompressConfig:
    """Small budget: 1700 tokens available for documents."""
    return CompressConfig(
        budget=BudgetConfig(
            max_tokens=2000,
            max_system_tokens=100,
            max_history_tokens=100,
            max_response_tokens=100,
            min_tokens_per_doc=100,
        ),
        telemetry_enabled=False,
    )


@pytest.fixture
def recorder() -> RecordingExporter:
    """In-memory exporter."""
    return RecordingExporter()


@pytest.fixture
def small_compressor(small_config: CompressConfig, recorder: RecordingExporter) -> DocumentCompressor:
    """Compressor on the small budget, recording telemetry."""
    return DocumentCompressor(config=small_config, exporter=recorder)


@pytest.fixture
def report_text() -> str:
    """Eight equally important sections of about 380 tokens each."""
    sections = []
    for i in range(8):
        sentences = "".join(
            f"Le point {i}.{j} doit être examiné par le comité avant la décision finale. "
            for j in range(20)
        )
        sections.append(f"## Section {i}\n{sentences.strip()}")
    return "\n\n".join(sections)


@pytest.fixture
def plain_paragraphs() -> str:
    """Unique low-importance paragraphs, about 150,000 tokens in total."""
    paragraphs = [
        f"Paragraphe {i}. " + "Lorem ipsum dolor sit amet. " * 20 for i in range(1045)
    ]
    return "\n\n".join(paragraphs)


@pytest.fixture
def small_documents() -> list[RawDocument]:
    """Three short documents."""
    return [
        RawDocument(name="a.txt", content="Premier document court."),
        RawDocument(name="b.txt", content="Deuxième document court."),
        RawDocument(name="c.txt", content="Troisième document court."),
    ]
