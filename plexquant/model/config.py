"""
Configuration model for building crosstabs.

This module provides the dataclass holding the options of the crosstab
pipeline and the preset aggregation levels.
"""

import re
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import ClassVar, List, Optional, Union

import plexquant.core.constants as c
from plexquant.core.constants import (
    ACCESSION,
    PEPTIDE,
    SITE_ID,
    REPORTER_ION_REGEX,
    SPECIES_SEPARATOR,
)


class AggregationLevel(Enum):
    """Preset reporting levels and the identification columns they group by."""

    ACCESSION = (ACCESSION,)
    PEPTIDE = (PEPTIDE,)
    SITE_ID = (SITE_ID,)
    ACCESSION_PEPTIDE = (c.ACCESSION, c.PEPTIDE)

    @property
    def columns(self) -> List[str]:
        return list(self.value)

    @classmethod
    def from_str(cls, name: str) -> "AggregationLevel":
        """
        Convert a string to an aggregation level (case-insensitive).

        Accepts the member name ("site_id") or the joined column names
        ("SiteID", "accession+peptide").
        """
        name_ = name.lower().replace("-", "_")
        for k, v in cls._member_map_.items():
            if k.lower() == name_ or "+".join(v.value).lower() == name_:
                return v
        raise KeyError(f"Unknown aggregation level: {name}")


def parse_aggregation_level(level: Union[str, List[str]]) -> List[str]:
    """
    Resolve an aggregation level into the list of level-key columns.

    A preset name maps to its columns; any other string is split on "+"
    or "," into column names; a list is taken as is.
    """
    if isinstance(level, str):
        try:
            return AggregationLevel.from_str(level).columns
        except KeyError:
            return [col.strip() for col in re.split(r"[+,]", level) if col.strip()]
    return list(level)


@dataclass
class CrosstabConfig:
    """
    Configuration of the crosstab pipeline.

    Attributes
    ----------
    name : str
        Name of the configuration.
    aggregation_level : list[str]
        Identification columns whose values define a species, in order.
    species_separator : str
        Separator used to join level-key values into the species id.
    reporter_ion_pattern : str
        Regex that every reporter ion intensity column must match.
    remove_decoys : bool
        Drop identifications flagged as decoy before linking.
    """

    registry: ClassVar[dict[str, "CrosstabConfig"]] = {}

    name: str = "default"
    aggregation_level: List[str] = field(default_factory=lambda: [ACCESSION])
    species_separator: str = SPECIES_SEPARATOR
    reporter_ion_pattern: str = REPORTER_ION_REGEX
    remove_decoys: bool = False

    @classmethod
    def get(cls, name: str, default=None) -> "Optional[CrosstabConfig]":
        """Retrieve a configuration from the registry."""
        return cls.registry.get(name.lower(), default)

    def __post_init__(self):
        """Validate the options and register this configuration."""
        self.aggregation_level = parse_aggregation_level(self.aggregation_level)
        if not self.aggregation_level:
            raise ValueError("aggregation_level must name at least one column")
        if len(set(self.aggregation_level)) != len(self.aggregation_level):
            raise ValueError(f"Duplicate columns in aggregation_level: {self.aggregation_level}")
        if not self.species_separator:
            raise ValueError("species_separator must not be empty")
        try:
            re.compile(self.reporter_ion_pattern)
        except re.error as e:
            raise ValueError(f"Invalid reporter_ion_pattern {self.reporter_ion_pattern!r}: {e}")
        if self.name:
            self.registry[self.name.lower()] = self

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "CrosstabConfig":
        """Create a configuration from a dictionary, ignoring unknown keys."""
        data = data or {}
        names = {f.name for f in fields(cls)}
        known = {k: v for k, v in data.items() if k in names}
        return cls(**known)

    def to_dict(self) -> dict:
        """Convert to dictionary, excluding registry."""
        d = asdict(self)
        return d
