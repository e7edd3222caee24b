"""
plexquant - Crosstabs of isobaric reporter ion intensities.

This package links MS/MS identifications with TMT/iTRAQ reporter ion
intensities from multiple plexes, aggregates them to a reporting level
(protein, peptide, phosphosite), normalizes every channel to the reference
defined in the study design, and returns a species x sample matrix of log2
relative abundances.
"""

__version__ = "0.1.0"

from plexquant.core.logger import initialize_logging

# NullHandler on the package logger
initialize_logging()

from plexquant.crosstab.pipeline import CrosstabPipeline, create_crosstab  # noqa: E402

__all__ = [
    "__version__",
    "CrosstabPipeline",
    "create_crosstab",
]
