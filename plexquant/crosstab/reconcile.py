"""
Reconciliation of the datasets and plexes referenced by the input tables.

Identification, reporter intensity and study design tables are written
independently. Before linking, every table is subset to the datasets (runs)
present in all of them; after aggregation, to the plexes present in the
quantitative data and both study design tables.
"""

import warnings
from typing import List, Sequence, Tuple

import pandas as pd

from plexquant.core.constants import DATASET, MEASUREMENT_NAME, PLEX_ID
from plexquant.core.exceptions import ConfigurationError, PartialMismatchWarning, SchemaError
from plexquant.core.logger import get_logger
from plexquant.model.notices import MismatchKind, Notice

logger = get_logger("plexquant.crosstab.reconcile")


def _require_column(df: pd.DataFrame, column: str, table: str) -> None:
    if column not in df.columns:
        raise SchemaError(f"Column '{column}' is missing from the {table} table.")


def _emit(notice: Notice) -> Notice:
    warnings.warn(notice.message, PartialMismatchWarning, stacklevel=3)
    return notice


def _subset_to_common(
    tables: Sequence[Tuple[str, pd.DataFrame]],
    column: str,
    kind: MismatchKind,
    entity: str,
) -> Tuple[List[pd.DataFrame], List[Notice]]:
    """Subset every named table to the values of ``column`` shared by all of them."""
    for table, df in tables:
        _require_column(df, column, table)

    id_sets = [set(df[column].dropna().unique()) for _, df in tables]
    common = set.intersection(*id_sets)

    if not common:
        raise ConfigurationError(
            f"There are no common {entity} across the "
            f"{', '.join(table for table, _ in tables)} tables."
        )

    notices = []
    subset = []
    for (table, df), ids in zip(tables, id_sets):
        dropped = ids - common
        if dropped:
            notices.append(
                _emit(
                    Notice(
                        kind=kind,
                        table=table,
                        dropped=tuple(sorted(dropped, key=str)),
                        message=(
                            f"{len(dropped)} {entity} of the {table} table are not present in "
                            f"all inputs. Subsetting to {len(common)} common {entity}."
                        ),
                    )
                )
            )
        subset.append(df[df[column].isin(common)].copy())

    return subset, notices


def reconcile_datasets(
    identifications: pd.DataFrame,
    intensities: pd.DataFrame,
    fractions: pd.DataFrame,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame, List[Notice]]:
    """
    Subset identifications, intensities and fractions to their common datasets.

    Parameters
    ----------
    identifications : pd.DataFrame
        Filtered MS/MS identifications with a Dataset column.
    intensities : pd.DataFrame
        Reporter ion intensities with a Dataset column.
    fractions : pd.DataFrame
        Fractions study design with Dataset and PlexID columns.

    Returns
    -------
    tuple
        The three subset tables and the list of mismatch notices.

    Raises
    ------
    ConfigurationError
        If the tables share no dataset.
    """
    (identifications, intensities, fractions), notices = _subset_to_common(
        [
            ("identifications", identifications),
            ("reporter intensities", intensities),
            ("fractions", fractions),
        ],
        column=DATASET,
        kind=MismatchKind.DATASET,
        entity="datasets",
    )
    logger.info("Reconciled inputs to %d common datasets", fractions[DATASET].nunique())
    return identifications, intensities, fractions, notices


def check_measurement_names(samples: pd.DataFrame) -> None:
    """
    Ensure non-missing MeasurementName values are unique in the samples table.

    Raises
    ------
    ConfigurationError
        If a measurement name occurs more than once.
    """
    _require_column(samples, MEASUREMENT_NAME, "samples")
    names = samples[MEASUREMENT_NAME].dropna()
    duplicated = names[names.duplicated()].unique().tolist()
    if duplicated:
        raise ConfigurationError(f"There are duplicate MeasurementName in samples: {duplicated}")


def reconcile_plexes(
    quant_data: pd.DataFrame,
    samples: pd.DataFrame,
    references: pd.DataFrame,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame, List[Notice]]:
    """
    Subset aggregated data and the sample/reference design to their common plexes.

    Returns
    -------
    tuple
        The three subset tables and the list of mismatch notices.

    Raises
    ------
    ConfigurationError
        If the tables share no PlexID.
    """
    (quant_data, samples, references), notices = _subset_to_common(
        [
            ("reporter intensities", quant_data),
            ("samples", samples),
            ("references", references),
        ],
        column=PLEX_ID,
        kind=MismatchKind.PLEX,
        entity="plexes",
    )
    logger.info("Reconciled study design to %d common plexes", quant_data[PLEX_ID].nunique())
    return quant_data, samples, references, notices
