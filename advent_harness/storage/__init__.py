"""
Storage implementations.

Provides implementations of the ReportStore interface for persisting benchmark
timings between sessions.

Available implementations:
- TimingsStore: Persists the cumulative report to a JSON document
"""

from .timings_storage import TimingsStore

__all__ = ["TimingsStore"]
