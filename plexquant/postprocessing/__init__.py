"""
Post-processing utilities for the plexquant package.

This module provides utilities for reshaping between long and wide tables.
"""

from plexquant.postprocessing.reshape import pivot_wider, pivot_longer

__all__ = [
    "pivot_wider",
    "pivot_longer",
]
