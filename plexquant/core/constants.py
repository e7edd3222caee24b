"""
Constants for the plexquant package.

This module defines the canonical column names of the study design tables,
identification and reporter intensity tables, and the crosstab produced
from them.
"""

# Identification and reporter intensity columns
DATASET = "Dataset"
SCAN = "Scan"
SCAN_PREFIX = "Scan"
IS_DECOY = "isDecoy"

# Column names used by MS-GF+/MSnID style identification tables
SPECTRUM_FILE = "spectrumFile"
SPECTRUM_ID = "spectrumID"

identification_column_aliases = {
    SPECTRUM_FILE: DATASET,
    SPECTRUM_ID: SCAN,
}

# Reporter ion intensity columns, e.g. "Ion_126.128"
REPORTER_ION_REGEX = r"^Ion.*\d$"

# Study design columns
PLEX_ID = "PlexID"
QUANT_BLOCK = "QuantBlock"
REPORTER_NAME = "ReporterName"
REPORTER_ALIAS = "ReporterAlias"
REPORTER_ION = "ReporterIon"
MEASUREMENT_NAME = "MeasurementName"
REFERENCE = "Reference"

DEFAULT_QUANT_BLOCK = 1

# Derived columns
SPECIE = "Specie"
ABUNDANCE = "Abundance"
RATIO = "Ratio"

SPECIES_SEPARATOR = "@"

# Common aggregation level columns
ACCESSION = "accession"
PEPTIDE = "peptide"
SITE_ID = "SiteID"

FRACTIONS_COLUMNS = [DATASET, PLEX_ID]
SAMPLES_COLUMNS = [PLEX_ID, REPORTER_NAME, REPORTER_ALIAS, MEASUREMENT_NAME]
REFERENCES_COLUMNS = [PLEX_ID, REFERENCE]
