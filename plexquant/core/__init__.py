"""
Core modules for the plexquant package.

This module provides column name constants, the error taxonomy of the
crosstab pipeline and logging utilities.
"""

from plexquant.core.constants import (
    DATASET,
    SCAN,
    IS_DECOY,
    REPORTER_ION_REGEX,
    PLEX_ID,
    QUANT_BLOCK,
    REPORTER_NAME,
    REPORTER_ALIAS,
    REPORTER_ION,
    MEASUREMENT_NAME,
    REFERENCE,
    SPECIE,
    ABUNDANCE,
    RATIO,
    SPECIES_SEPARATOR,
)
from plexquant.core.exceptions import (
    CrosstabError,
    ConfigurationError,
    SchemaError,
    PartialMismatchWarning,
)
from plexquant.core.logger import get_logger, configure_logging, log_execution_time

__all__ = [
    # Constants
    "DATASET",
    "SCAN",
    "IS_DECOY",
    "REPORTER_ION_REGEX",
    "PLEX_ID",
    "QUANT_BLOCK",
    "REPORTER_NAME",
    "REPORTER_ALIAS",
    "REPORTER_ION",
    "MEASUREMENT_NAME",
    "REFERENCE",
    "SPECIE",
    "ABUNDANCE",
    "RATIO",
    "SPECIES_SEPARATOR",
    # Errors
    "CrosstabError",
    "ConfigurationError",
    "SchemaError",
    "PartialMismatchWarning",
    # Logger
    "get_logger",
    "configure_logging",
    "log_execution_time",
]
