"""Token estimators for document compression."""

from .chars import CharRatioEstimator, estimate_tokens
from .noop import NoOpEstimator
from .tiktoken import TiktokenEstimator

__all__ = ["CharRatioEstimator", "NoOpEstimator", "TiktokenEstimator", "estimate_tokens"]
