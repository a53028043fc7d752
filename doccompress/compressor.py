"""
Document compressor fitting extracted documents into a token budget.
"""

import re
import time
import unicodedata
from typing import Any, Mapping, Optional, Sequence, Union

from .estimators import CharRatioEstimator, TiktokenEstimator
from .exporters import ConsoleExporter, NullExporter
from .policy import BudgetAllocator
from .protocols import Exporter, Scorer, Summarizer, TokenEstimator
from .scoring import SectionScorer, get_policy
from .splitter import split_into_sections
from .summarizer import SentenceSummarizer
from .types import (
    CompressConfig,
    CompressedDocument,
    CompressionReport,
    RawDocument,
    Section,
)

SUMMARY_PREFIX = "[Résumé]"
COMPRESSION_NOTE = (
    "\n---\n[Note: Document compressé automatiquement pour optimiser le traitement]"
)

NBSP_PATTERN = re.compile("[\u00a0\u202f]")
INVISIBLE_PATTERN = re.compile("[\u00ad\u200b-\u200f\u202a-\u202e\u2060-\u2064\ufeff]")
EXCESS_NEWLINES = re.compile(r"\n{3,}")

DocumentInput = Union[RawDocument, Mapping[str, Any]]


def normalize_text(text: str) -> str:
    """NFC-normalize text, turn non-breaking spaces into spaces, drop invisible characters."""
    text = unicodedata.normalize("NFC", text)
    text = NBSP_PATTERN.sub(" ", text)
    return INVISIBLE_PATTERN.sub("", text)


def _as_raw_document(document: DocumentInput) -> RawDocument:
    if isinstance(document, RawDocument):
        return document
    return RawDocument(
        name=str(document.get("name", "")),
        content=str(document.get("content", "") or ""),
    )


class DocumentCompressor:
    """Compresses documents that exceed their share of the token budget."""

    def __init__(
        self,
        config: Optional[CompressConfig] = None,
        estimator: Optional[TokenEstimator] = None,
        scorer: Optional[Scorer] = None,
        summarizer: Optional[Summarizer] = None,
        exporter: Optional[Exporter] = None,
    ):
        """
        Initialize document compressor.

        Args:
            config: Compression configuration
            estimator: Token estimator (default: from config.estimator)
            scorer: Section scorer (default: SectionScorer for config.locale)
            summarizer: Overflow summarizer (default: SentenceSummarizer)
            exporter: Telemetry exporter (default: ConsoleExporter, or
                NullExporter when telemetry is disabled)
        """
        self.config = config or CompressConfig()
        self.config.validate()

        policy = get_policy(self.config.locale)
        if estimator is None:
            if self.config.estimator == "tiktoken":
                estimator = TiktokenEstimator(self.config.model)
            else:
                estimator = CharRatioEstimator()
        self.estimator = estimator
        self.scorer = scorer or SectionScorer(policy)
        self.summarizer = summarizer or SentenceSummarizer(policy, self.estimator)
        if exporter is None:
            exporter = ConsoleExporter() if self.config.telemetry_enabled else NullExporter()
        self.exporter = exporter

        self.allocator = BudgetAllocator(self.config.budget)

    def compress_documents(
        self,
        documents: Sequence[DocumentInput],
        total_docs: int,
        priority_keywords: Optional[Sequence[str]] = None,
    ) -> list[CompressedDocument]:
        """
        Fit every document into its share of the budget.

        Args:
            documents: RawDocument objects or {"name", "content"} mappings
            total_docs: Number of documents sharing the budget
            priority_keywords: Terms that boost matching sections

        Returns:
            One CompressedDocument per input, in input order
        """
        return list(self.run(documents, total_docs, priority_keywords).documents)

    def run(
        self,
        documents: Sequence[DocumentInput],
        total_docs: Optional[int] = None,
        priority_keywords: Optional[Sequence[str]] = None,
    ) -> CompressionReport:
        """
        Compress documents and collect telemetry.

        Args:
            documents: RawDocument objects or {"name", "content"} mappings
            total_docs: Number of documents sharing the budget
                (default: len(documents))
            priority_keywords: Terms that boost matching sections

        Returns:
            CompressionReport with the compressed documents and totals
        """
        start_time = time.time()
        if total_docs is None:
            total_docs = len(documents)

        available = self.allocator.available_tokens()
        allocated = self.allocator.allocate(total_docs)
        over_allocated = self.allocator.is_over_allocated(total_docs)

        self.exporter.emit_event(
            "compress.budget",
            {
                "total_docs": total_docs,
                "available_tokens": available,
                "allocated_tokens_per_doc": allocated,
                "over_allocated": over_allocated,
            },
        )

        results = [
            self._compress_document(_as_raw_document(doc), allocated, priority_keywords)
            for doc in documents
        ]

        report = CompressionReport(
            documents=results,
            available_tokens=available,
            allocated_tokens_per_doc=allocated,
            total_original_tokens=sum(doc.original_tokens for doc in results),
            total_compressed_tokens=sum(doc.compressed_tokens for doc in results),
            over_allocated=over_allocated,
        )

        self.exporter.emit_event(
            "compress.summary",
            {
                "documents": len(results),
                "compressed": report.compressed_count,
                "tokens_before": report.total_original_tokens,
                "tokens_after": report.total_compressed_tokens,
                "elapsed_ms": int((time.time() - start_time) * 1000),
            },
        )
        self.exporter.flush()

        return report

    def compress_text(
        self,
        content: str,
        target_tokens: int,
        priority_keywords: Optional[Sequence[str]] = None,
    ) -> str:
        """Compress one document's text towards target_tokens."""
        text, _ = self._intelligent_compress(content, target_tokens, priority_keywords)
        return text

    def _compress_document(
        self,
        doc: RawDocument,
        allocated: int,
        priority_keywords: Optional[Sequence[str]],
    ) -> CompressedDocument:
        original_tokens = self.estimator.estimate_tokens(doc.content)
        passthrough = CompressedDocument(
            name=doc.name,
            content=doc.content,
            compressed=False,
            original_tokens=original_tokens,
            compressed_tokens=original_tokens,
        )

        if not self.allocator.needs_compression(original_tokens, allocated):
            self._emit_document(passthrough, {})
            return passthrough

        content, stats = self._intelligent_compress(
            doc.content, allocated, priority_keywords
        )
        compressed_tokens = self.estimator.estimate_tokens(content)

        if compressed_tokens > original_tokens:
            self._emit_document(passthrough, {**stats, "reverted": True})
            return passthrough

        result = CompressedDocument(
            name=doc.name,
            content=content,
            compressed=True,
            original_tokens=original_tokens,
            compressed_tokens=compressed_tokens,
        )
        self._emit_document(result, stats)
        return result

    def _intelligent_compress(
        self,
        content: str,
        target_tokens: int,
        priority_keywords: Optional[Sequence[str]],
    ) -> tuple[str, dict[str, int]]:
        stats = {"sections": 0, "kept": 0, "summarized": 0, "dropped": 0}
        if not content.strip():
            return "", stats

        text = normalize_text(content)
        budget = self.config.budget
        sections = [
            Section(
                content=chunk,
                score=self.scorer.score(chunk, priority_keywords),
                tokens=self.estimator.estimate_tokens(chunk),
                index=index,
            )
            for index, chunk in enumerate(
                split_into_sections(
                    text, budget.max_section_tokens, budget.fallback_window_chars
                )
            )
        ]
        stats["sections"] = len(sections)

        ranked = sorted(sections, key=lambda s: (-s.score, s.index))

        threshold = self.allocator.summary_threshold(target_tokens)
        result = ""
        current_tokens = 0

        # Separators and prefixes count towards the budget
        summary_overhead = self.estimator.estimate_tokens(f"{SUMMARY_PREFIX} \n\n")

        for section in ranked:
            block = section.content + "\n\n"
            block_tokens = self.estimator.estimate_tokens(block)
            if current_tokens + block_tokens <= threshold:
                result += block
                current_tokens += block_tokens
                stats["kept"] += 1
                continue

            if current_tokens < target_tokens and section.score > 1:
                summary = self.summarizer.summarize(
                    section.content, target_tokens - current_tokens - summary_overhead
                )
                if summary:
                    block = f"{SUMMARY_PREFIX} {summary}\n\n"
                    result += block
                    current_tokens += self.estimator.estimate_tokens(block)
                    stats["summarized"] += 1
                    continue

            stats["dropped"] += 1

        result = EXCESS_NEWLINES.sub("\n\n", result).strip()

        if any(section.content not in result for section in sections):
            result += COMPRESSION_NOTE

        return result, stats

    def _emit_document(self, doc: CompressedDocument, stats: dict[str, Any]) -> None:
        self.exporter.emit_event(
            "compress.document",
            {
                "name": doc.name,
                "compressed": doc.compressed,
                "original_tokens": doc.original_tokens,
                "compressed_tokens": doc.compressed_tokens,
                "reduction_pct": round(doc.reduction_pct, 2),
                **stats,
            },
        )


def compress_documents(
    documents: Sequence[DocumentInput],
    total_docs: int,
    config: Optional[CompressConfig] = None,
    priority_keywords: Optional[Sequence[str]] = None,
) -> list[CompressedDocument]:
    """Compress documents with a throwaway, silent DocumentCompressor."""
    compressor = DocumentCompressor(config=config, exporter=NullExporter())
    return compressor.compress_documents(documents, total_docs, priority_keywords)
