"""
Result of a crosstab run and the advisory notices collected along the way.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple

import pandas as pd


class MismatchKind(Enum):
    """Kinds of partial overlap that are recovered by subsetting."""

    DATASET = auto()
    PLEX = auto()

    @classmethod
    def from_str(cls, name: str) -> "MismatchKind":
        """Convert string to enum value (case-insensitive)."""
        name_ = name.lower()
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise KeyError(f"Unknown mismatch kind: {name}")


@dataclass(frozen=True)
class Notice:
    """
    A non-fatal mismatch between inputs.

    Attributes
    ----------
    kind : MismatchKind
        Whether datasets (runs) or plexes were dropped.
    table : str
        Name of the input table that lost entities.
    dropped : tuple
        The dropped run or plex identifiers, sorted.
    message : str
        Human readable description.
    """

    kind: MismatchKind
    table: str
    dropped: Tuple = ()
    message: str = ""

    @property
    def count(self) -> int:
        return len(self.dropped)

    def __str__(self) -> str:
        return self.message


@dataclass
class CrosstabResult:
    """
    A crosstab together with the notices raised while building it.

    Attributes
    ----------
    matrix : pd.DataFrame
        Log2 ratios, species as rows and measurement names as columns.
    notices : list[Notice]
        Mismatches that were recovered by subsetting the inputs.
    """

    matrix: pd.DataFrame
    notices: List[Notice] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [notice.message for notice in self.notices]

    @property
    def n_species(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_samples(self) -> int:
        return self.matrix.shape[1]

    def __repr__(self) -> str:
        return (
            f"CrosstabResult({self.n_species} species x {self.n_samples} samples, "
            f"{len(self.notices)} notices)"
        )
