"""
Normalization of reporter abundances to their block reference.
"""

from typing import List

import numpy as np
import pandas as pd

from plexquant.core.constants import (
    PLEX_ID,
    QUANT_BLOCK,
    REPORTER_ALIAS,
    MEASUREMENT_NAME,
    SPECIE,
    RATIO,
)
from plexquant.core.logger import get_logger
from plexquant.crosstab.reference import QuantBlockData
from plexquant.postprocessing.reshape import pivot_longer

logger = get_logger("plexquant.crosstab.normalize")

NORMALIZED_COLUMNS = [PLEX_ID, QUANT_BLOCK, SPECIE, MEASUREMENT_NAME, RATIO]


def block_ratios(block: QuantBlockData) -> pd.DataFrame:
    """
    Divide the abundances of one block by its reference values.

    Returns the long table of ratios with aliases replaced by measurement
    names; aliases without a measurement name (e.g. the reference channel)
    are left out.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        ratios = block.abundance.div(block.reference_values, axis=0)
    ratios.index.name = SPECIE

    long_ratios = pivot_longer(ratios, row_name=SPECIE, col_name=REPORTER_ALIAS, values=RATIO)
    long_ratios = long_ratios.merge(block.naming, on=REPORTER_ALIAS, how="inner")
    long_ratios.insert(0, PLEX_ID, block.plex_id)
    long_ratios.insert(1, QUANT_BLOCK, block.quant_block)
    return long_ratios[NORMALIZED_COLUMNS]


def normalize_to_reference(blocks: List[QuantBlockData]) -> pd.DataFrame:
    """
    Compute ratios to the reference for every block and stack them.

    Parameters
    ----------
    blocks : list[QuantBlockData]
        Output of resolve_references.

    Returns
    -------
    pd.DataFrame
        PlexID, QuantBlock, Specie, MeasurementName and Ratio columns.
    """
    frames = [block_ratios(block) for block in blocks]
    frames = [frame for frame in frames if not frame.empty]
    if not frames:
        logger.warning("No ratios could be computed for any quant block")
        return pd.DataFrame(columns=NORMALIZED_COLUMNS)

    normalized = pd.concat(frames, ignore_index=True)
    logger.info(
        "Computed %d ratios for %d measurements in %d quant blocks",
        len(normalized),
        normalized[MEASUREMENT_NAME].nunique(),
        len(blocks),
    )
    return normalized
