"""
Data reshaping utilities for the plexquant package.
"""

import logging
from typing import List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _as_list(columns: Union[str, List[str]]) -> List[str]:
    return [columns] if isinstance(columns, str) else list(columns)


def pivot_wider(
    df: pd.DataFrame,
    row_name: Union[str, List[str]],
    col_name: str,
    values: str,
    fillna: Union[int, float, bool] = False,
    duplicates: str = "raise",
) -> pd.DataFrame:
    """
    Create a matrix from a DataFrame given the row, column, and value columns.

    Missing cells stay NaN unless ``fillna`` is set. Rows and columns come
    out sorted by label.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format input.
    row_name : str or list[str]
        Column(s) forming the row index.
    col_name : str
        Column whose values become the new columns.
    values : str
        Column holding the cell values.
    fillna : int, float or bool
        ``True`` fills missing cells with 0, a number fills with that number.
    duplicates : str
        ``"raise"`` to fail on repeated (row, column) pairs, ``"first"`` to
        keep the first occurrence.

    Returns
    -------
    pd.DataFrame
        The wide matrix.
    """
    index_cols = _as_list(row_name)
    missing_columns = set(index_cols + [col_name, values]) - set(df.columns)
    if missing_columns:
        raise ValueError(f"Columns {missing_columns} not found in the DataFrame.")

    key = index_cols + [col_name]
    duplicated = df.duplicated(subset=key, keep="first")
    if duplicated.any():
        if duplicates == "raise":
            raise ValueError(
                f"Found duplicate combinations of {index_cols} and {col_name}. "
                "Use an aggregation function to handle duplicates."
            )
        logger.warning(
            "Found %d duplicate combinations of %s and %s, keeping the first",
            int(duplicated.sum()),
            index_cols,
            col_name,
        )
        df = df[~duplicated]

    index = index_cols[0] if len(index_cols) == 1 else index_cols
    matrix = df.pivot(index=index, columns=col_name, values=values)
    matrix = matrix.sort_index(axis=0).sort_index(axis=1)
    matrix.columns.name = col_name

    if fillna is True:
        matrix = matrix.fillna(0)
    elif fillna not in [None, False]:
        matrix = matrix.fillna(fillna)

    return matrix


def pivot_longer(
    df: pd.DataFrame,
    row_name: Union[str, List[str]],
    col_name: str,
    values: str,
    value_columns: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Transforms a wide-format DataFrame into a long-format DataFrame.

    Index levels named in ``row_name`` are moved back to columns first.

    Parameters
    ----------
    df : pd.DataFrame
        Wide-format input.
    row_name : str or list[str]
        Identifier column(s) kept on every row.
    col_name : str
        Name of the column receiving the former column labels.
    values : str
        Name of the column receiving the cell values.
    value_columns : list[str], optional
        Columns to melt. Defaults to every non-identifier column.

    Returns
    -------
    pd.DataFrame
        Long-format table with ``row_name`` + [col_name, values] columns.
    """
    if not isinstance(df, pd.DataFrame):
        raise ValueError("Input must be a pandas DataFrame")

    id_cols = _as_list(row_name)
    if any(name in id_cols for name in df.index.names if name is not None):
        df = df.reset_index()
    missing = [col for col in id_cols if col not in df.columns]
    if missing:
        raise ValueError(f"Row name(s) {missing} not found in DataFrame")

    long_df = pd.melt(
        df,
        id_vars=id_cols,
        value_vars=value_columns,
        var_name=col_name,
        value_name=values,
    )
    long_df[col_name] = long_df[col_name].astype(str)
    return long_df
