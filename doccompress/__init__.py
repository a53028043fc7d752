"""
doccompress - fit extracted documents into an LLM token budget
"""

from .estimators import estimate_tokens
from .keywords import extract_keywords_from_query
from .types import (
    BudgetConfig,
    CompressConfig,
    CompressedDocument,
    CompressError,
    CompressionReport,
    ContextTooLargeError,
    RawDocument,
    Section,
)

__version__ = "0.1.0"
__all__ = [
    "BudgetConfig",
    "CompressConfig",
    "CompressedDocument",
    "CompressError",
    "CompressionReport",
    "ContextBuilder",
    "ContextTooLargeError",
    "DocumentCompressor",
    "RawDocument",
    "Section",
    "compress_documents",
    "estimate_tokens",
    "extract_keywords_from_query",
]

# Lazy imports to avoid circular dependencies
def __getattr__(name: str):  # type: ignore
    if name in ("DocumentCompressor", "compress_documents"):
        from . import compressor
        return getattr(compressor, name)
    elif name == "ContextBuilder":
        from .context import ContextBuilder
        return ContextBuilder
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
