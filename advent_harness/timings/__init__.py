"""
Timing statistics.
"""

from .aggregator import aggregate, format_duration, scale_duration

__all__ = ["aggregate", "format_duration", "scale_duration"]
