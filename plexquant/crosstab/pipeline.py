"""
Crosstab pipeline: identifications + reporter intensities → log2 ratio matrix.

This module provides the `CrosstabPipeline` class and the `create_crosstab`
function that run the whole workflow:

- Reconcile datasets across identifications, intensities and fractions
- Link identifications to reporter intensities by (Dataset, Scan)
- Aggregate intensities per plex to the chosen reporting level
- Reconcile plexes with the samples and references study design
- Resolve the reference of every (PlexID, QuantBlock) unit
- Take ratios to the reference and assemble the crosstab
"""

from typing import List, Optional, Sequence, Union

import pandas as pd

from plexquant.core.logger import get_logger, log_execution_time
from plexquant.crosstab.aggregate import aggregate_reporters
from plexquant.crosstab.assemble import assemble_matrix
from plexquant.crosstab.link import link_identifications_and_intensities, remove_decoys
from plexquant.crosstab.normalize import normalize_to_reference
from plexquant.crosstab.reconcile import (
    check_measurement_names,
    reconcile_datasets,
    reconcile_plexes,
)
from plexquant.crosstab.reference import resolve_references
from plexquant.model.config import CrosstabConfig
from plexquant.model.labeling import ReporterConverter
from plexquant.model.notices import CrosstabResult, Notice

logger = get_logger("plexquant.pipeline")


class CrosstabPipeline:
    """
    Build a crosstab of log2 relative reporter ion intensities.

    Parameters
    ----------
    config : CrosstabConfig, optional
        Pipeline options. Defaults to aggregation at the "accession" level.
    converters : Sequence[ReporterConverter], optional
        Reporter converter tables to search, in order. Defaults to the
        registered TMT and iTRAQ converters.

    Examples
    --------
    >>> from plexquant.crosstab import CrosstabPipeline
    >>> from plexquant.model import CrosstabConfig
    >>>
    >>> pipeline = CrosstabPipeline(CrosstabConfig(aggregation_level=["accession"]))
    >>> result = pipeline.run(msms, masic, fractions, samples, references)
    >>> result.matrix.head()
    """

    def __init__(
        self,
        config: Optional[CrosstabConfig] = None,
        converters: Optional[Sequence[ReporterConverter]] = None,
    ):
        self.config = config if config is not None else CrosstabConfig()
        self.converters = list(converters) if converters is not None else None

    @log_execution_time(logger)
    def run(
        self,
        identifications: pd.DataFrame,
        intensities: pd.DataFrame,
        fractions: pd.DataFrame,
        samples: pd.DataFrame,
        references: pd.DataFrame,
    ) -> CrosstabResult:
        """
        Execute the full pipeline.

        Parameters
        ----------
        identifications : pd.DataFrame
            Filtered MS/MS identifications (Dataset, Scan, level-key columns).
        intensities : pd.DataFrame
            Reporter ion intensities (Dataset, Scan*, Ion_* columns).
        fractions : pd.DataFrame
            Fractions study design (Dataset, PlexID).
        samples : pd.DataFrame
            Samples study design (PlexID, QuantBlock, ReporterName,
            ReporterAlias, MeasurementName).
        references : pd.DataFrame
            References study design (PlexID, QuantBlock, Reference).

        Returns
        -------
        CrosstabResult
            The log2 ratio matrix and the mismatch notices.
        """
        config = self.config
        level = config.aggregation_level
        notices: List[Notice] = []
        logger.info("Building crosstab at the %s level", "+".join(level))

        check_measurement_names(samples)

        identifications, intensities, fractions, dataset_notices = reconcile_datasets(
            identifications, intensities, fractions
        )
        notices.extend(dataset_notices)

        if config.remove_decoys:
            identifications = remove_decoys(identifications)

        quant_data = link_identifications_and_intensities(
            identifications,
            intensities,
            level,
            reporter_ion_pattern=config.reporter_ion_pattern,
        )
        quant_data = aggregate_reporters(
            quant_data,
            fractions,
            level,
            separator=config.species_separator,
            reporter_ion_pattern=config.reporter_ion_pattern,
        )

        quant_data, samples, references, plex_notices = reconcile_plexes(
            quant_data, samples, references
        )
        notices.extend(plex_notices)

        blocks = resolve_references(
            quant_data,
            samples,
            references,
            converters=self.converters,
            reporter_ion_pattern=config.reporter_ion_pattern,
        )
        normalized = normalize_to_reference(blocks)
        matrix = assemble_matrix(normalized)

        return CrosstabResult(matrix=matrix, notices=notices)


def create_crosstab(
    identifications: pd.DataFrame,
    intensities: pd.DataFrame,
    aggregation_level: Union[str, List[str]],
    fractions: pd.DataFrame,
    samples: pd.DataFrame,
    references: pd.DataFrame,
    converters: Optional[Sequence[ReporterConverter]] = None,
    **config_options,
) -> CrosstabResult:
    """
    Link identifications with reporter intensities and return the crosstab.

    Rows of the matrix are species (e.g. proteins in global, phosphosites
    in phosphoproteomic experiments), columns are measurement names.

    Parameters
    ----------
    identifications : pd.DataFrame
        Filtered MS/MS identifications.
    intensities : pd.DataFrame
        Reporter ion intensities.
    aggregation_level : str or list[str]
        Identification columns defining a species, or a preset name such as
        "accession", "peptide" or "SiteID".
    fractions, samples, references : pd.DataFrame
        Study design tables.
    converters : Sequence[ReporterConverter], optional
        Reporter converter tables to search.
    **config_options
        Further CrosstabConfig fields, e.g. ``remove_decoys=True``.

    Returns
    -------
    CrosstabResult
        The log2 ratio matrix and the mismatch notices.
    """
    config = CrosstabConfig(name="", aggregation_level=aggregation_level, **config_options)
    pipeline = CrosstabPipeline(config, converters=converters)
    return pipeline.run(identifications, intensities, fractions, samples, references)
