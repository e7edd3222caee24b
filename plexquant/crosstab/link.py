"""
Linking of MS/MS identifications with reporter ion intensities.
"""

import re
from typing import List

import pandas as pd

from plexquant.core.constants import (
    DATASET,
    SCAN,
    SCAN_PREFIX,
    IS_DECOY,
    REPORTER_ION_REGEX,
    identification_column_aliases,
)
from plexquant.core.exceptions import SchemaError
from plexquant.core.logger import get_logger

logger = get_logger("plexquant.crosstab.link")


def harmonize_identification_columns(identifications: pd.DataFrame) -> pd.DataFrame:
    """Fill Dataset/Scan from spectrumFile/spectrumID when the former are absent."""
    renames = {
        alias: canonical
        for alias, canonical in identification_column_aliases.items()
        if canonical not in identifications.columns and alias in identifications.columns
    }
    if renames:
        logger.debug("Using %s as identification columns", renames)
        identifications = identifications.rename(columns=renames)
    return identifications


def harmonize_scan_column(intensities: pd.DataFrame) -> pd.DataFrame:
    """Rename the column starting with "Scan" (e.g. "ScanNumber") to "Scan"."""
    scan_columns = [col for col in intensities.columns if str(col).startswith(SCAN_PREFIX)]
    if len(scan_columns) > 1:
        raise SchemaError(
            f"Reporter intensities have more than one scan column: {scan_columns}"
        )
    if scan_columns and scan_columns[0] != SCAN:
        intensities = intensities.rename(columns={scan_columns[0]: SCAN})
    return intensities


def reporter_ion_columns(df: pd.DataFrame, pattern: str = REPORTER_ION_REGEX) -> List[str]:
    """Return the columns of ``df`` that hold reporter ion intensities."""
    regex = re.compile(pattern)
    return [col for col in df.columns if regex.search(str(col))]


def remove_decoys(identifications: pd.DataFrame) -> pd.DataFrame:
    """Drop identifications flagged as decoy."""
    if IS_DECOY not in identifications.columns:
        raise SchemaError(f"Column '{IS_DECOY}' is required to remove decoys.")
    is_decoy = identifications[IS_DECOY].fillna(False).astype(bool)
    logger.info("Removing %d decoy identifications", int(is_decoy.sum()))
    return identifications[~is_decoy]


def link_identifications_and_intensities(
    identifications: pd.DataFrame,
    intensities: pd.DataFrame,
    aggregation_level: List[str],
    reporter_ion_pattern: str = REPORTER_ION_REGEX,
) -> pd.DataFrame:
    """
    Merge MS/MS identifications with reporter ion intensities.

    Identifications are reduced to distinct (Dataset, Scan, level keys)
    combinations so several PSM rows for one scan do not multiply its
    intensities, then inner-joined to the intensities on (Dataset, Scan).

    Parameters
    ----------
    identifications : pd.DataFrame
        Filtered MS/MS identifications.
    intensities : pd.DataFrame
        Reporter ion intensities, one row per scan.
    aggregation_level : list[str]
        Identification columns that define a species.
    reporter_ion_pattern : str
        Regex every non-key intensity column has to match.

    Returns
    -------
    pd.DataFrame
        Dataset, Scan, level keys and reporter ion columns.

    Raises
    ------
    SchemaError
        If a required column is missing or the intensities carry columns
        that are not reporter ions.
    """
    identifications = harmonize_identification_columns(identifications)
    msms_cols = [DATASET, SCAN] + list(aggregation_level)
    missing = [col for col in msms_cols if col not in identifications.columns]
    if missing:
        raise SchemaError(f"Identifications are missing required columns: {missing}")

    intensities = harmonize_scan_column(intensities)
    masic_cols = [DATASET, SCAN]
    missing = [col for col in masic_cols if col not in intensities.columns]
    if missing:
        raise SchemaError(f"Reporter intensities are missing required columns: {missing}")

    ion_cols = reporter_ion_columns(intensities, reporter_ion_pattern)
    unexpected = [col for col in intensities.columns if col not in masic_cols and col not in ion_cols]
    if unexpected:
        raise SchemaError(
            f"Reporter intensities contain columns that are not reporter ions: {unexpected}"
        )
    if not ion_cols:
        raise SchemaError("Reporter intensities contain no reporter ion columns.")

    msms = identifications[msms_cols].drop_duplicates()
    quant_data = msms.merge(intensities[masic_cols + ion_cols], on=masic_cols, how="inner")
    quant_data = quant_data.sort_values(masic_cols, kind="mergesort").reset_index(drop=True)

    logger.info(
        "Linked %d identifications with %d reporter intensity scans into %d rows",
        len(msms),
        len(intensities),
        len(quant_data),
    )
    return quant_data
