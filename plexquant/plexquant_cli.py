"""
CLI entry point for the plexquant package.
"""

import logging
from pathlib import Path

import click

from plexquant.commands.crosstab import crosstab
from plexquant.core.logger import configure_logging

import plexquant

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LOG_LEVELS = ["debug", "info", "warn"]
LOG_LEVELS_TO_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARN,
}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(
    version=plexquant.__version__,
    package_name="plexquant",
    message="%(package)s %(version)s",
)
@click.option(
    "-v",
    "--log-level",
    type=click.Choice(LOG_LEVELS, False),
    default="info",
    help="Set the logging level.",
)
@click.option(
    "--log-file",
    type=click.Path(writable=True, path_type=Path),
    required=False,
    help="Write log to this file.",
)
def cli(log_level: str, log_file: Path):
    """
    plexquant - Crosstabs of isobaric reporter ion intensities.

    Link MS/MS identifications with TMT/iTRAQ reporter intensities and
    report log2 ratios to the reference channel of every plex.
    """
    configure_logging(level=LOG_LEVELS_TO_LEVELS[log_level.lower()], log_file=log_file)


cli.add_command(crosstab)


def main():
    """
    Main function to run the CLI.
    """
    try:
        cli()
    except SystemExit as e:
        if e.code != 0:
            raise


if __name__ == "__main__":
    main()
