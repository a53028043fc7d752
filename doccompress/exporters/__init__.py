"""Telemetry exporters for compression events."""

from .console import ConsoleExporter, NullExporter
from .http import HttpExporter

__all__ = ["ConsoleExporter", "HttpExporter", "NullExporter"]
