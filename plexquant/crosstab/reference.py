"""
Resolution of the reference value of every species in every quant block.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import pandas as pd

from plexquant.core.constants import (
    PLEX_ID,
    QUANT_BLOCK,
    DEFAULT_QUANT_BLOCK,
    REPORTER_NAME,
    REPORTER_ALIAS,
    REPORTER_ION,
    MEASUREMENT_NAME,
    REFERENCE,
    SPECIE,
    ABUNDANCE,
    REPORTER_ION_REGEX,
    SAMPLES_COLUMNS,
    REFERENCES_COLUMNS,
)
from plexquant.core.exceptions import ConfigurationError, SchemaError
from plexquant.core.logger import get_logger
from plexquant.crosstab.expression import ReferenceExpression
from plexquant.crosstab.link import reporter_ion_columns
from plexquant.model.labeling import ReporterConverter, find_reporter_converter
from plexquant.postprocessing.reshape import pivot_longer, pivot_wider

logger = get_logger("plexquant.crosstab.reference")


@dataclass
class QuantBlockData:
    """
    Abundances of one (PlexID, QuantBlock) unit and their reference values.

    Attributes
    ----------
    plex_id : Any
        The plex.
    quant_block : Any
        The quant block within the plex.
    reference : str
        The reference expression of the block.
    abundance : pd.DataFrame
        Summed intensities, species as rows and reporter aliases as columns.
    reference_values : pd.Series
        One reference value per species.
    naming : pd.DataFrame
        ReporterAlias to MeasurementName mapping of the block.
    """

    plex_id: Any
    quant_block: Any
    reference: str
    abundance: pd.DataFrame
    reference_values: pd.Series
    naming: pd.DataFrame


def add_default_quant_block(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with QuantBlock set to 1 when the column is absent."""
    df = df.copy()
    if QUANT_BLOCK not in df.columns:
        df[QUANT_BLOCK] = DEFAULT_QUANT_BLOCK
    return df


def _check_columns(df: pd.DataFrame, columns: List[str], table: str) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise SchemaError(f"The {table} table is missing required columns: {missing}")


def melt_reporter_ions(
    quant_data: pd.DataFrame, reporter_ion_pattern: str = REPORTER_ION_REGEX
) -> pd.DataFrame:
    """Reshape aggregated data to one row per (PlexID, Specie, ReporterIon)."""
    return pivot_longer(
        quant_data,
        row_name=[PLEX_ID, SPECIE],
        col_name=REPORTER_ION,
        values=ABUNDANCE,
        value_columns=reporter_ion_columns(quant_data, reporter_ion_pattern),
    )


def attach_sample_design(
    long_data: pd.DataFrame, samples: pd.DataFrame, converter: ReporterConverter
) -> pd.DataFrame:
    """
    Join long-form abundances with the samples table.

    The converter supplies the ReporterIon of every ReporterName; the join
    on (PlexID, ReporterIon) attaches QuantBlock, ReporterAlias and
    MeasurementName. Channels missing from the samples table are dropped.
    """
    samples = samples.copy()
    samples[REPORTER_NAME] = samples[REPORTER_NAME].astype(str)
    samples[REPORTER_ALIAS] = samples[REPORTER_ALIAS].astype(str)
    samples = samples.merge(converter.to_frame(), on=REPORTER_NAME, how="inner")
    sample_cols = [PLEX_ID, QUANT_BLOCK, REPORTER_ION, REPORTER_ALIAS, MEASUREMENT_NAME]
    return long_data.merge(samples[sample_cols], on=[PLEX_ID, REPORTER_ION], how="inner")


def resolve_references(
    quant_data: pd.DataFrame,
    samples: pd.DataFrame,
    references: pd.DataFrame,
    converters: Optional[Sequence[ReporterConverter]] = None,
    reporter_ion_pattern: str = REPORTER_ION_REGEX,
) -> List[QuantBlockData]:
    """
    Compute the reference value of every species for every reference row.

    Parameters
    ----------
    quant_data : pd.DataFrame
        Aggregated intensities: PlexID, Specie and reporter ion columns.
    samples : pd.DataFrame
        Samples study design (PlexID, QuantBlock, ReporterName, ReporterAlias,
        MeasurementName). QuantBlock is optional.
    references : pd.DataFrame
        References study design (PlexID, QuantBlock, Reference). QuantBlock
        is optional.
    converters : Sequence[ReporterConverter], optional
        Converter tables to search; defaults to the registered ones.
    reporter_ion_pattern : str
        Regex selecting the reporter ion columns.

    Returns
    -------
    list[QuantBlockData]
        One entry per reference row, in reference table order.

    Raises
    ------
    ConfigurationError
        If no converter matches the reporter ions, or a reference expression
        is malformed or uses an unknown alias.
    """
    _check_columns(samples, SAMPLES_COLUMNS, "samples")
    _check_columns(references, REFERENCES_COLUMNS, "references")
    samples = add_default_quant_block(samples)
    references = add_default_quant_block(references)

    long_data = melt_reporter_ions(quant_data, reporter_ion_pattern)
    converter = find_reporter_converter(long_data[REPORTER_ION].unique(), converters)
    logger.info("Reporter ions match the %s converter", converter.name)

    long_data = attach_sample_design(long_data, samples, converter)

    blocks = []
    for ref in references.itertuples(index=False):
        plex_id = getattr(ref, PLEX_ID)
        quant_block = getattr(ref, QUANT_BLOCK)
        reference = getattr(ref, REFERENCE)

        in_block = (long_data[PLEX_ID] == plex_id) & (long_data[QUANT_BLOCK] == quant_block)
        block_data = long_data[in_block]
        block_samples = samples[
            (samples[PLEX_ID] == plex_id) & (samples[QUANT_BLOCK] == quant_block)
        ]

        try:
            abundance = pivot_wider(
                block_data, row_name=SPECIE, col_name=REPORTER_ALIAS, values=ABUNDANCE
            )
        except ValueError as e:
            raise ConfigurationError(
                f"PlexID {plex_id}, QuantBlock {quant_block}: a ReporterAlias is assigned "
                f"to more than one reporter ion ({e})"
            ) from e
        try:
            expression = ReferenceExpression(reference)
            reference_values = expression.evaluate(
                abundance, known_names=block_samples[REPORTER_ALIAS].astype(str)
            )
        except ConfigurationError as e:
            raise ConfigurationError(f"PlexID {plex_id}, QuantBlock {quant_block}: {e}") from e

        naming = (
            block_samples[[REPORTER_ALIAS, MEASUREMENT_NAME]]
            .dropna(subset=[MEASUREMENT_NAME])
            .astype({REPORTER_ALIAS: str})
            .drop_duplicates()
        )

        logger.debug(
            "PlexID %s, QuantBlock %s: %d species, reference %r",
            plex_id,
            quant_block,
            len(abundance),
            expression.text,
        )
        blocks.append(
            QuantBlockData(
                plex_id=plex_id,
                quant_block=quant_block,
                reference=expression.text,
                abundance=abundance,
                reference_values=reference_values,
                naming=naming,
            )
        )

    return blocks
