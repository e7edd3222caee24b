"""
Aggregation of linked reporter intensities to the reporting level.
"""

from typing import List

import pandas as pd

from plexquant.core.constants import (
    DATASET,
    PLEX_ID,
    SPECIE,
    REPORTER_ION_REGEX,
    SPECIES_SEPARATOR,
)
from plexquant.core.exceptions import SchemaError
from plexquant.core.logger import get_logger
from plexquant.crosstab.link import reporter_ion_columns

logger = get_logger("plexquant.crosstab.aggregate")


def make_species_id(
    df: pd.DataFrame, columns: List[str], separator: str = SPECIES_SEPARATOR
) -> pd.Series:
    """Join the values of ``columns`` row-wise with ``separator``."""
    species = df[columns[0]].astype(str)
    for col in columns[1:]:
        species = species + separator + df[col].astype(str)
    return species


def aggregate_reporters(
    quant_data: pd.DataFrame,
    fractions: pd.DataFrame,
    aggregation_level: List[str],
    separator: str = SPECIES_SEPARATOR,
    reporter_ion_pattern: str = REPORTER_ION_REGEX,
) -> pd.DataFrame:
    """
    Sum reporter intensities per plex and species.

    Intensities from all fractions of a plex and all scans of a species
    are summed. Missing intensities count as zero.

    Parameters
    ----------
    quant_data : pd.DataFrame
        Output of link_identifications_and_intensities.
    fractions : pd.DataFrame
        Fractions study design with Dataset and PlexID columns.
    aggregation_level : list[str]
        Level-key columns, in the order used to build the species id.
    separator : str
        Separator between level-key values in the species id.
    reporter_ion_pattern : str
        Regex selecting the reporter ion columns to sum.

    Returns
    -------
    pd.DataFrame
        PlexID, Specie and one summed column per reporter ion.
    """
    missing = [col for col in [DATASET, PLEX_ID] if col not in fractions.columns]
    if missing:
        raise SchemaError(f"Fractions are missing required columns: {missing}")

    ion_cols = reporter_ion_columns(quant_data, reporter_ion_pattern)
    group_cols = [PLEX_ID] + list(aggregation_level)

    quant_data = quant_data.merge(fractions[[DATASET, PLEX_ID]], on=DATASET, how="inner")

    incomplete = quant_data[group_cols].isna().any(axis=1)
    if incomplete.any():
        logger.debug(
            "Dropping %d rows without a value for %s", int(incomplete.sum()), group_cols
        )
        quant_data = quant_data[~incomplete]

    aggregated = quant_data.groupby(group_cols, sort=True)[ion_cols].sum(min_count=0).reset_index()

    species_cols = list(aggregation_level)
    aggregated.insert(1, SPECIE, make_species_id(aggregated, species_cols, separator))
    aggregated = aggregated.drop(columns=species_cols)

    logger.info(
        "Aggregated %d rows into %d species across %d plexes",
        len(quant_data),
        aggregated[SPECIE].nunique(),
        aggregated[PLEX_ID].nunique(),
    )
    return aggregated[[PLEX_ID, SPECIE] + ion_cols]
