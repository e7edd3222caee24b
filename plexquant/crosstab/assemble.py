"""
Assembly of normalized ratios into the species x sample crosstab.
"""

import numpy as np
import pandas as pd

from plexquant.core.constants import MEASUREMENT_NAME, RATIO, SPECIE
from plexquant.core.logger import get_logger
from plexquant.postprocessing.reshape import pivot_wider

logger = get_logger("plexquant.crosstab.assemble")


def assemble_matrix(normalized: pd.DataFrame) -> pd.DataFrame:
    """
    Pivot ratios into a log2 crosstab.

    Non-finite, zero and negative ratios become NaN, species without any
    value are dropped, and the remaining ratios are log2-transformed.

    Parameters
    ----------
    normalized : pd.DataFrame
        Long table with Specie, MeasurementName and Ratio columns.

    Returns
    -------
    pd.DataFrame
        Species as rows (index "Specie"), measurement names as columns.
    """
    if normalized.empty:
        matrix = pd.DataFrame(dtype=float)
        matrix.index.name = SPECIE
        matrix.columns.name = MEASUREMENT_NAME
        return matrix

    matrix = pivot_wider(
        normalized,
        row_name=SPECIE,
        col_name=MEASUREMENT_NAME,
        values=RATIO,
        duplicates="first",
    ).astype(float)

    values = matrix.to_numpy()
    matrix = matrix.mask(~np.isfinite(values) | (values <= 0))

    n_species = len(matrix)
    matrix = matrix.dropna(axis=0, how="all")
    logger.debug("Dropped %d species without any ratio", n_species - len(matrix))

    with np.errstate(invalid="ignore"):
        matrix = np.log2(matrix)
    logger.info("Crosstab has %d species and %d samples", matrix.shape[0], matrix.shape[1])
    return matrix
