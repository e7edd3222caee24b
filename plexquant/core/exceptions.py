"""
Errors and warnings raised while building a crosstab.
"""


class CrosstabError(ValueError):
    """Base class for fatal errors of the crosstab pipeline."""


class ConfigurationError(CrosstabError):
    """
    The study design or the inputs cannot be reconciled.

    Raised when there are no common datasets, measurement names are
    duplicated, no reporter converter matches the observed reporter ions,
    or a reference expression cannot be evaluated.
    """


class SchemaError(CrosstabError):
    """An input table is missing a required column or has unexpected columns."""


class PartialMismatchWarning(UserWarning):
    """Inputs only partially overlap and were subset to their common part."""
