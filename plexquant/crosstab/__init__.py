"""
Crosstab construction for isobaric labeling experiments.

The stages run in this order: dataset reconciliation, identification
linking, level aggregation, reference resolution, ratio normalization
and matrix assembly.
"""

from plexquant.crosstab.reconcile import (
    reconcile_datasets,
    reconcile_plexes,
    check_measurement_names,
)
from plexquant.crosstab.link import link_identifications_and_intensities
from plexquant.crosstab.aggregate import aggregate_reporters
from plexquant.crosstab.expression import ReferenceExpression
from plexquant.crosstab.reference import QuantBlockData, resolve_references
from plexquant.crosstab.normalize import normalize_to_reference
from plexquant.crosstab.assemble import assemble_matrix
from plexquant.crosstab.pipeline import CrosstabPipeline, create_crosstab

__all__ = [
    "reconcile_datasets",
    "reconcile_plexes",
    "check_measurement_names",
    "link_identifications_and_intensities",
    "aggregate_reporters",
    "ReferenceExpression",
    "QuantBlockData",
    "resolve_references",
    "normalize_to_reference",
    "assemble_matrix",
    "CrosstabPipeline",
    "create_crosstab",
]
