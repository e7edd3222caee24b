"""
Reading input tables and writing crosstabs.
"""

import logging
import os
from pathlib import Path
from typing import Union

import pandas as pd

from plexquant.core.constants import SPECIE

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TAB_SEPARATED = ("tsv", "txt", "tab")


def _suffix(path: Union[str, Path]) -> str:
    name = str(path)
    if name.endswith(".gz"):
        name = name[:-3]
    return os.path.splitext(name)[1][1:].lower()


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load a table as a dataframe, choosing the reader from the file suffix.

    Parameters
    ----------
    path : str or Path
        Path to a .tsv/.txt/.tab (tab separated), .csv or .parquet file,
        optionally gzip compressed for the text formats.

    Returns
    -------
    pd.DataFrame
        Loaded data.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the suffix is not supported.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"{path} does not exist!")

    suffix = _suffix(path)
    if suffix == "parquet":
        df = pd.read_parquet(path)
    elif suffix in TAB_SEPARATED:
        df = pd.read_csv(path, sep="\t")
    elif suffix == "csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(
            f"{suffix} is not allowed as input, please provide a tsv, txt, csv or parquet file."
        )
    logger.debug("Loaded %d rows from %s", len(df), path)
    return df


def write_crosstab(matrix: pd.DataFrame, path: Union[str, Path]) -> None:
    """
    Write a crosstab with the species as the first column.

    Parquet is used for a .parquet suffix, comma separated text for .csv,
    and tab separated text otherwise.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    table = matrix.copy()
    table.index.name = SPECIE
    table.columns = [str(col) for col in table.columns]
    table = table.reset_index()

    suffix = _suffix(path)
    if suffix == "parquet":
        table.to_parquet(path, index=False)
    elif suffix == "csv":
        table.to_csv(path, index=False)
    else:
        table.to_csv(path, sep="\t", index=False, na_rep="NA")
    logger.info("Wrote crosstab with %d species to %s", len(table), path)


def read_crosstab(path: Union[str, Path]) -> pd.DataFrame:
    """Read a crosstab written by write_crosstab back into a matrix."""
    table = read_table(path)
    return table.set_index(SPECIE)
