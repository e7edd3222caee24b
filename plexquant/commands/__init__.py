"""
CLI commands for the plexquant package.
"""

from plexquant.commands.crosstab import crosstab, run_crosstab

__all__ = [
    "crosstab",
    "run_crosstab",
]
