"""
Input/Output utilities for the plexquant package.

This module provides readers for identification, reporter intensity and
study design tables, the crosstab writer, and configuration file I/O.
"""

from plexquant.io.tables import read_table, write_crosstab, read_crosstab
from plexquant.io.config import load_crosstab_config, save_crosstab_config

__all__ = [
    "read_table",
    "write_crosstab",
    "read_crosstab",
    "load_crosstab_config",
    "save_crosstab_config",
]
