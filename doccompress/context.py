"""
Assembly of the document context sent to the LLM.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .compressor import DocumentCompressor, DocumentInput
from .keywords import extract_keywords_from_query
from .types import CompressConfig, CompressedDocument, ContextTooLargeError

DOCUMENT_DELIMITER = "====== DOCUMENT ACTIF: {name} ======"


def format_document_block(doc: CompressedDocument) -> str:
    """Wrap a document's content in the active-document delimiter."""
    return f"{DOCUMENT_DELIMITER.format(name=doc.name)}\n{doc.content}"


@dataclass
class DocumentContext:
    """Document context ready to be placed in a system message."""

    text: str
    documents: Sequence[CompressedDocument] = field(default_factory=list)
    total_tokens: int = 0

    @property
    def document_count(self) -> int:
        return len(self.documents)


class ContextBuilder:
    """Builds the documents part of the system context for one chat turn."""

    def __init__(
        self,
        config: Optional[CompressConfig] = None,
        compressor: Optional[DocumentCompressor] = None,
    ):
        """
        Initialize context builder.

        Args:
            config: Compression configuration
            compressor: Document compressor (default: built from config)
        """
        self.config = config or CompressConfig()
        self.compressor = compressor or DocumentCompressor(self.config)

    def build(
        self,
        documents: Sequence[DocumentInput],
        query: Optional[str] = None,
        strict: bool = False,
    ) -> DocumentContext:
        """
        Compress documents and join them into one context block.

        Query keywords are only used to bias compression when
        use_query_keywords is enabled.

        Args:
            documents: Active documents of the conversation
            query: Latest user message
            strict: Raise when the context exceeds the available budget

        Returns:
            DocumentContext

        Raises:
            ContextTooLargeError: In strict mode, if the joined context is
                larger than the tokens available for documents
        """
        priority_keywords = None
        if query and self.config.use_query_keywords:
            priority_keywords = extract_keywords_from_query(query) or None

        compressed = self.compressor.compress_documents(
            documents, len(documents), priority_keywords
        )
        text = "\n\n".join(format_document_block(doc) for doc in compressed)
        total_tokens = self.compressor.estimator.estimate_tokens(text)

        available = self.config.budget.available_tokens
        if strict and total_tokens > available:
            raise ContextTooLargeError(
                f"Document context too large: {total_tokens} tokens "
                f"for {available} available",
                total_tokens=total_tokens,
                available_tokens=available,
            )

        return DocumentContext(text=text, documents=compressed, total_tokens=total_tokens)

    def select_history(
        self,
        messages: Sequence[Mapping[str, Any]],
        max_tokens: Optional[int] = None,
    ) -> list[Mapping[str, Any]]:
        """
        Keep the most recent messages that fit in the history budget.

        Returns:
            Selected messages in chronological order
        """
        if max_tokens is None:
            max_tokens = self.config.budget.max_history_tokens

        selected = []
        used = 0
        for message in reversed(messages):
            tokens = self.compressor.estimator.estimate_tokens(
                str(message.get("content", ""))
            )
            if used + tokens > max_tokens:
                break
            selected.append(message)
            used += tokens

        selected.reverse()
        return selected
