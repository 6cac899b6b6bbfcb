"""
Data access.

Provides the locator that maps day/part identifiers to the example, input and
puzzle-description files under the project's data/ directory.
"""

from .locator import DataLocator

__all__ = ["DataLocator"]
