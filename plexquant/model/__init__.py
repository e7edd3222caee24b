"""
Data models and enumerations for the plexquant package.

This module provides:
- Isobaric labeling schemes and their reporter ion converter tables
- The crosstab pipeline configuration
- The crosstab result and its mismatch notices
"""

from plexquant.model.labeling import (
    IsobaricLabel,
    ReporterConverter,
    find_reporter_converter,
    TMT6plex,
    TMT10plex,
    TMT11plex,
    TMT16plex,
    TMT18plex,
    ITRAQ4plex,
    ITRAQ8plex,
)
from plexquant.model.config import AggregationLevel, CrosstabConfig, parse_aggregation_level
from plexquant.model.notices import MismatchKind, Notice, CrosstabResult

__all__ = [
    # Labeling
    "IsobaricLabel",
    "ReporterConverter",
    "find_reporter_converter",
    "TMT6plex",
    "TMT10plex",
    "TMT11plex",
    "TMT16plex",
    "TMT18plex",
    "ITRAQ4plex",
    "ITRAQ8plex",
    # Configuration
    "AggregationLevel",
    "CrosstabConfig",
    "parse_aggregation_level",
    # Results
    "MismatchKind",
    "Notice",
    "CrosstabResult",
]
