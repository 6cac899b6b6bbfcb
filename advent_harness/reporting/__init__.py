"""
Benchmark reporting.

Merges per-session timing statistics into the cumulative report and renders it
as a Markdown table for the project README.
"""

from .readme_table import MARKER, ReadmeReport, merge, render, update

__all__ = ["MARKER", "ReadmeReport", "merge", "render", "update"]
