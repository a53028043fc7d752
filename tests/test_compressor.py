"""Tests for the document compressor."""

from doccompress import (
    BudgetConfig,
    CompressConfig,
    RawDocument,
    compress_documents,
    estimate_tokens,
)
from doccompress.compressor import (
    COMPRESSION_NOTE,
    SUMMARY_PREFIX,
    DocumentCompressor,
    normalize_text,
)
from doccompress.exporters import NullExporter
from doccompress.scoring import ENGLISH_POLICY
from doccompress.summarizer import split_sentences


def assert_no_fabrication(original: str, compressed: str) -> None:
    """Every kept section and summary sentence must come from the original."""
    body = compressed
    if body.endswith(COMPRESSION_NOTE):
        body = body[: -len(COMPRESSION_NOTE)]
    for chunk in body.split("\n\n"):
        if chunk.startswith(SUMMARY_PREFIX):
            for sentence in split_sentences(chunk[len(SUMMARY_PREFIX):]):
                assert sentence in original
        else:
            assert chunk in original


def test_normalize_text() -> None:
    assert normalize_text("Cafe\u0301") == "Caf\u00e9"
    assert normalize_text("a\u00a0b\u202fc") == "a b c"
    assert normalize_text("\ufeffa\u200bb\u00adc\u2060") == "abc"


class TestCompressionScenarios:
    """Budget scenarios with the default configuration."""

    def test_three_documents_within_budget(self, default_config: CompressConfig) -> None:
        documents = [
            RawDocument(name=f"doc{i}.txt", content=f"{i}" * 80000) for i in range(3)
        ]
        results = compress_documents(documents, 3, config=default_config)

        assert [r.name for r in results] == ["doc0.txt", "doc1.txt", "doc2.txt"]
        for doc, result in zip(documents, results):
            assert result.compressed is False
            assert result.content == doc.content
            assert result.original_tokens == result.compressed_tokens == 20000

    def test_single_document_below_budget(self, default_config: CompressConfig) -> None:
        content = "x" * 400000
        [result] = compress_documents([RawDocument("big.txt", content)], 1, config=default_config)
        assert result.compressed is False
        assert result.original_tokens == 100000
        assert result.content is content

    def test_single_document_over_budget(
        self, default_config: CompressConfig, plain_paragraphs: str
    ) -> None:
        original_tokens = estimate_tokens(plain_paragraphs)
        assert original_tokens > 119000

        [result] = compress_documents(
            [RawDocument("huge.txt", plain_paragraphs)], 1, config=default_config
        )

        assert result.compressed is True
        assert result.original_tokens == original_tokens
        assert result.compressed_tokens <= 119000
        assert result.compressed_tokens < result.original_tokens
        assert result.content.endswith(COMPRESSION_NOTE)
        # Every section scores 1, so overflow is dropped, never summarized
        assert SUMMARY_PREFIX not in result.content
        assert_no_fabrication(plain_paragraphs, result.content)


class TestDocumentCompressor:
    """Tests for compression with a small budget."""

    def test_passthrough_for_small_documents(
        self, small_compressor: DocumentCompressor, small_documents: list[RawDocument]
    ) -> None:
        for total_docs in (1, 3, 50):
            results = small_compressor.compress_documents(small_documents, total_docs)
            for doc, result in zip(small_documents, results):
                assert result.compressed is False
                assert result.content == doc.content

    def test_packs_then_summarizes(
        self, small_compressor: DocumentCompressor, report_text: str
    ) -> None:
        [result] = small_compressor.compress_documents(
            [RawDocument("rapport.md", report_text)], 1
        )

        assert result.compressed is True
        assert result.compressed_tokens < result.original_tokens
        assert result.content.startswith("## Section 0\n")
        assert f"\n\n{SUMMARY_PREFIX} ## Section 3\n" in result.content
        assert result.content.endswith(COMPRESSION_NOTE)
        assert "\n\n\n" not in result.content
        assert_no_fabrication(report_text, result.content)

    def test_output_order_matches_input(
        self, small_compressor: DocumentCompressor, report_text: str
    ) -> None:
        documents = [
            {"name": "b.md", "content": report_text},
            {"name": "a.txt", "content": "Court."},
            {"name": "c.md", "content": report_text},
        ]
        results = small_compressor.compress_documents(documents, 3)
        assert [r.name for r in results] == ["b.md", "a.txt", "c.md"]
        assert [r.compressed for r in results] == [True, False, True]

    def test_priority_keywords_select_sections(self) -> None:
        config = CompressConfig(
            budget=BudgetConfig(
                max_tokens=2000,
                max_system_tokens=100,
                max_history_tokens=100,
                max_response_tokens=100,
                min_tokens_per_doc=100,
                max_section_tokens=60,
            ),
            telemetry_enabled=False,
        )
        compressor = DocumentCompressor(config=config)
        first = "Premier bloc " + "x " * 100
        second = "Bloc sur la tarification " + "y " * 90
        content = f"{first}\n\n{second}"

        plain = compressor.compress_text(content, 70)
        assert plain.startswith("Premier bloc")
        assert "tarification" not in plain

        biased = compressor.compress_text(content, 70, ["tarification"])
        assert biased.startswith("Bloc sur la tarification")
        assert "Premier bloc" not in biased

    def test_separators_count_towards_budget(
        self, small_compressor: DocumentCompressor
    ) -> None:
        # 2000 one-token paragraphs, each costing two tokens with its separator
        content = "\n\n".join(f"p{i:03d}" for i in range(2000))

        result = small_compressor.compress_text(content, 100)

        assert result.endswith(COMPRESSION_NOTE)
        body = result[: -len(COMPRESSION_NOTE)]
        assert body.startswith("p000\n\np001")
        assert body.count("\n\n") == 39
        assert estimate_tokens(body) <= 80

    def test_empty_content(self, small_compressor: DocumentCompressor) -> None:
        assert small_compressor.compress_text("", 100) == ""
        assert small_compressor.compress_text("  \n\n ", 100) == ""

        [result] = small_compressor.compress_documents([RawDocument("vide.txt", "")], 1)
        assert result.compressed is False
        assert result.content == ""
        assert result.original_tokens == 0

    def test_never_grows_a_document(self) -> None:
        config = CompressConfig(
            budget=BudgetConfig(
                max_tokens=10,
                max_system_tokens=0,
                max_history_tokens=0,
                max_response_tokens=0,
                min_tokens_per_doc=1,
            ),
            telemetry_enabled=False,
        )
        compressor = DocumentCompressor(config=config)
        content = "x" * 50

        [result] = compressor.compress_documents([RawDocument("x.txt", content)], 1)

        # The note alone is longer than the document, so it is left untouched
        assert result.compressed is False
        assert result.content == content

    def test_note_only_when_content_lost(self, small_compressor: DocumentCompressor) -> None:
        content = "# Titre\n" + "Un texte suffisamment long pour ne pas être pénalisé. " * 3
        content = content.strip()
        assert small_compressor.compress_text(content, 1000) == content

    def test_normalizes_before_compressing(self, small_compressor: DocumentCompressor) -> None:
        content = "# Titre\u200b\n" + "Texte\u00a0ins\u00e9cable " * 20
        result = small_compressor.compress_text(content, 1000)
        assert "\u200b" not in result
        assert "\u00a0" not in result

    def test_telemetry_events(
        self, small_compressor: DocumentCompressor, recorder, report_text: str
    ) -> None:
        small_compressor.compress_documents(
            [RawDocument("rapport.md", report_text), RawDocument("note.txt", "Court.")], 2
        )

        assert [e["type"] for e in recorder.events] == [
            "compress.budget",
            "compress.document",
            "compress.document",
            "compress.summary",
        ]
        assert recorder.flushed == 1

        budget = recorder.of_type("compress.budget")[0]
        assert budget["allocated_tokens_per_doc"] == 850
        assert budget["over_allocated"] is False

        rapport, note = recorder.of_type("compress.document")
        assert rapport["compressed"] is True
        assert rapport["sections"] == 8
        assert rapport["kept"] + rapport["summarized"] + rapport["dropped"] == 8
        assert note["compressed"] is False

    def test_telemetry_disabled_uses_null_exporter(self, default_config: CompressConfig) -> None:
        assert isinstance(DocumentCompressor(default_config).exporter, NullExporter)

    def test_locale_selects_policy(self) -> None:
        config = CompressConfig(locale="en", telemetry_enabled=False)
        compressor = DocumentCompressor(config)
        assert compressor.scorer.policy is ENGLISH_POLICY


class TestCompressionReport:
    """Tests for the aggregate report."""

    def test_report_totals(
        self, small_compressor: DocumentCompressor, report_text: str
    ) -> None:
        documents = [RawDocument("rapport.md", report_text), RawDocument("note.txt", "Court.")]
        report = small_compressor.run(documents)

        assert report.available_tokens == 1700
        assert report.allocated_tokens_per_doc == 850
        assert report.compressed_count == 1
        assert report.total_original_tokens == sum(d.original_tokens for d in report.documents)
        assert report.total_compressed_tokens < report.total_original_tokens

    def test_over_allocation_flag(self, default_config: CompressConfig) -> None:
        compressor = DocumentCompressor(default_config)
        documents = [RawDocument(f"{i}.txt", "Court.") for i in range(30)]
        report = compressor.run(documents)

        assert report.allocated_tokens_per_doc == 5000
        assert report.over_allocated is True
