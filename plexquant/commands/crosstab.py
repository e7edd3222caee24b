"""
CLI command for building a crosstab from identifications and reporter intensities.
"""

import logging
from typing import Optional

import click

from plexquant.crosstab.pipeline import CrosstabPipeline
from plexquant.io.config import load_crosstab_config
from plexquant.io.tables import read_table, write_crosstab
from plexquant.model.config import CrosstabConfig
from plexquant.model.notices import CrosstabResult

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def run_crosstab(
    identifications: str,
    reporter_intensities: str,
    fractions: str,
    samples: str,
    references: str,
    output: str,
    level: Optional[str] = None,
    config: Optional[str] = None,
    remove_decoys: bool = False,
) -> CrosstabResult:
    """Read the input tables, build the crosstab and write it to ``output``."""
    crosstab_config = load_crosstab_config(config) if config else CrosstabConfig(name="cli")
    overrides = {}
    if level:
        overrides["aggregation_level"] = level
    if remove_decoys:
        overrides["remove_decoys"] = True
    if overrides:
        crosstab_config = CrosstabConfig.from_dict({**crosstab_config.to_dict(), **overrides})

    logger.info("Loading identifications from %s", identifications)
    msms = read_table(identifications)
    logger.info("Loading reporter intensities from %s", reporter_intensities)
    masic = read_table(reporter_intensities)

    result = CrosstabPipeline(crosstab_config).run(
        msms,
        masic,
        read_table(fractions),
        read_table(samples),
        read_table(references),
    )

    write_crosstab(result.matrix, output)
    logger.info("Crosstab completed with %d notices", len(result.notices))
    return result


@click.command("crosstab", short_help="Build a crosstab of log2 reporter ion ratios.")
@click.option(
    "-i",
    "--identifications",
    help="Filtered MS/MS identifications with Dataset, Scan and level-key columns",
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "-r",
    "--reporter-intensities",
    help="Reporter ion intensities with Dataset, Scan and Ion_* columns",
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "-f",
    "--fractions",
    help="Fractions study design table (Dataset, PlexID)",
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "-s",
    "--samples",
    help="Samples study design table (PlexID, QuantBlock, ReporterName, ReporterAlias, MeasurementName)",
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "-R",
    "--references",
    help="References study design table (PlexID, QuantBlock, Reference)",
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "-l",
    "--level",
    help="Aggregation level: accession, peptide, SiteID, or columns joined by '+'",
    required=False,
    default=None,
)
@click.option(
    "-c",
    "--config",
    help="YAML or JSON file with crosstab options",
    required=False,
    type=click.Path(exists=True),
)
@click.option(
    "--remove-decoys",
    help="Drop identifications flagged in the isDecoy column",
    is_flag=True,
)
@click.option(
    "-o",
    "--output",
    help="Output file for the crosstab (.tsv, .csv or .parquet)",
    required=True,
)
@click.pass_context
def crosstab(
    ctx,
    identifications: str,
    reporter_intensities: str,
    fractions: str,
    samples: str,
    references: str,
    level: Optional[str],
    config: Optional[str],
    remove_decoys: bool,
    output: str,
):
    """Link identifications with reporter intensities and write the crosstab."""
    run_crosstab(
        identifications=identifications,
        reporter_intensities=reporter_intensities,
        fractions=fractions,
        samples=samples,
        references=references,
        output=output,
        level=level,
        config=config,
        remove_decoys=remove_decoys,
    )
