"""
Reporter ion converter tables for isobaric labeling experiments.

Each supported multiplex cardinality (TMT 6/10/11/16/18-plex, iTRAQ 4/8-plex)
has one converter that maps reporter ion intensity columns, as written by
MASIC (e.g. "Ion_126.128"), to the reporter names used in study design
tables (e.g. "126C").
"""

from enum import Enum, auto
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Iterator, Optional, Sequence

import pandas as pd

from plexquant.core.constants import REPORTER_ION, REPORTER_NAME
from plexquant.core.exceptions import ConfigurationError


class IsobaricLabel(Enum):
    """
    An enumeration for the supported isobaric labeling schemes.

    Attributes
    ----------
    TMT6plex : auto
        Represents the TMT 6-plex labeling scheme.
    TMT10plex : auto
        Represents the TMT 10-plex labeling scheme.
    TMT11plex : auto
        Represents the TMT 11-plex labeling scheme.
    TMT16plex : auto
        Represents the TMTpro 16-plex labeling scheme.
    TMT18plex : auto
        Represents the TMTpro 18-plex labeling scheme.
    ITRAQ4plex : auto
        Represents the iTRAQ 4-plex labeling scheme.
    ITRAQ8plex : auto
        Represents the iTRAQ 8-plex labeling scheme.
    """

    TMT6plex = auto()
    TMT10plex = auto()
    TMT11plex = auto()
    TMT16plex = auto()
    TMT18plex = auto()

    ITRAQ4plex = auto()
    ITRAQ8plex = auto()

    @classmethod
    def from_str(cls, name: str) -> "IsobaricLabel":
        """
        Convert a string representation to an IsobaricLabel enum member.

        Parameters
        ----------
        name : str
            The name of the isobaric label.

        Returns
        -------
        IsobaricLabel
            The corresponding enum member.

        Raises
        ------
        KeyError
            If the provided name does not match any isobaric label.
        """
        name_ = name.lower()
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise KeyError(name)

    def converter(self) -> "ReporterConverter":
        """Retrieve the reporter converter table for the isobaric label."""
        return ReporterConverter.registry[self.name]


@dataclass
class ReporterConverter(Mapping[str, str]):
    """
    A reporter ion converter table.

    Provides dictionary-like access from reporter ion column to reporter
    name. The predefined tables form an ordered registry.

    Attributes
    ----------
    registry : ClassVar[dict[str, ReporterConverter]]
        A class-level registry of the predefined converters, in definition order.
    name : str
        The name of the labeling scheme.
    reporters : dict[str, str]
        A mapping of reporter ion columns to reporter names.
    register : bool
        Add the converter to the registry searched by default. Only the
        predefined tables below are registered; converters built by callers
        are passed explicitly through ``converters=``.
    """

    registry: ClassVar[dict[str, "ReporterConverter"]] = {}

    name: str
    reporters: dict[str, str] = field(default_factory=dict)
    register: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self):
        if self.register:
            self.registry[self.name] = self

    @property
    def id(self) -> Optional[IsobaricLabel]:
        """Get the corresponding IsobaricLabel enum member."""
        try:
            return IsobaricLabel[self.name]
        except KeyError:
            return None

    @property
    def ions(self) -> frozenset:
        return frozenset(self.reporters)

    def matches(self, ions: Iterable[str]) -> bool:
        """Whether the set of observed reporter ions equals this converter's ions."""
        return self.ions == frozenset(str(ion) for ion in ions)

    def to_frame(self) -> pd.DataFrame:
        """Return the converter as a two column table (ReporterName, ReporterIon)."""
        return pd.DataFrame(
            {
                REPORTER_NAME: list(self.reporters.values()),
                REPORTER_ION: list(self.reporters.keys()),
            }
        )

    @classmethod
    def registered(cls) -> list["ReporterConverter"]:
        return list(cls.registry.values())

    def __getitem__(self, key: str) -> str:
        return self.reporters[key]

    def __iter__(self) -> Iterator[str]:
        yield from self.reporters

    def __len__(self) -> int:
        return len(self.reporters)

    def __contains__(self, key) -> bool:
        return key in self.reporters


def find_reporter_converter(
    ions: Iterable[str], converters: Optional[Sequence[ReporterConverter]] = None
) -> ReporterConverter:
    """
    Find the converter table whose reporter ions are exactly the observed ones.

    Parameters
    ----------
    ions : Iterable[str]
        Reporter ion columns observed in the intensity data.
    converters : Sequence[ReporterConverter], optional
        Converters to search, in order. Defaults to the registered ones.

    Returns
    -------
    ReporterConverter
        The first converter matching by set equality.

    Raises
    ------
    ConfigurationError
        If no converter matches.
    """
    ions = sorted(set(str(ion) for ion in ions))
    if converters is None:
        converters = ReporterConverter.registered()
    for converter in converters:
        if converter.matches(ions):
            return converter
    raise ConfigurationError(
        "No reporter ion converter tables match the reporter ions in the intensity data: "
        f"{ions} (checked {[c.name for c in converters]})"
    )


# Pre-defined converter tables, searched in this order
TMT6plex = ReporterConverter(
    "TMT6plex",
    {
        "Ion_126.128": "126",
        "Ion_127.125": "127",
        "Ion_128.134": "128",
        "Ion_129.131": "129",
        "Ion_130.141": "130",
        "Ion_131.138": "131",
    },
    register=True,
)

TMT10plex = ReporterConverter(
    "TMT10plex",
    {
        "Ion_126.128": "126",
        "Ion_127.125": "127N",
        "Ion_127.131": "127C",
        "Ion_128.128": "128N",
        "Ion_128.134": "128C",
        "Ion_129.131": "129N",
        "Ion_129.138": "129C",
        "Ion_130.135": "130N",
        "Ion_130.141": "130C",
        "Ion_131.138": "131",
    },
    register=True,
)

TMT11plex = ReporterConverter(
    "TMT11plex",
    {
        "Ion_126.128": "126",
        "Ion_127.125": "127N",
        "Ion_127.131": "127C",
        "Ion_128.128": "128N",
        "Ion_128.134": "128C",
        "Ion_129.131": "129N",
        "Ion_129.138": "129C",
        "Ion_130.135": "130N",
        "Ion_130.141": "130C",
        "Ion_131.138": "131N",
        "Ion_131.144": "131C",
    },
    register=True,
)

TMT16plex = ReporterConverter(
    "TMT16plex",
    {
        "Ion_126.128": "126C",
        "Ion_127.125": "127N",
        "Ion_127.131": "127C",
        "Ion_128.128": "128N",
        "Ion_128.134": "128C",
        "Ion_129.131": "129N",
        "Ion_129.138": "129C",
        "Ion_130.135": "130N",
        "Ion_130.141": "130C",
        "Ion_131.138": "131N",
        "Ion_131.144": "131C",
        "Ion_132.142": "132N",
        "Ion_132.148": "132C",
        "Ion_133.145": "133N",
        "Ion_133.151": "133C",
        "Ion_134.148": "134N",
    },
    register=True,
)

TMT18plex = ReporterConverter(
    "TMT18plex",
    {
        "Ion_126.128": "126C",
        "Ion_127.125": "127N",
        "Ion_127.131": "127C",
        "Ion_128.128": "128N",
        "Ion_128.134": "128C",
        "Ion_129.131": "129N",
        "Ion_129.138": "129C",
        "Ion_130.135": "130N",
        "Ion_130.141": "130C",
        "Ion_131.138": "131N",
        "Ion_131.144": "131C",
        "Ion_132.142": "132N",
        "Ion_132.148": "132C",
        "Ion_133.145": "133N",
        "Ion_133.151": "133C",
        "Ion_134.148": "134N",
        "Ion_134.155": "134C",
        "Ion_135.152": "135N",
    },
    register=True,
)

ITRAQ4plex = ReporterConverter(
    "ITRAQ4plex",
    {
        "Ion_114.111": "114",
        "Ion_115.108": "115",
        "Ion_116.112": "116",
        "Ion_117.115": "117",
    },
    register=True,
)

ITRAQ8plex = ReporterConverter(
    "ITRAQ8plex",
    {
        "Ion_113.107": "113",
        "Ion_114.111": "114",
        "Ion_115.108": "115",
        "Ion_116.112": "116",
        "Ion_117.115": "117",
        "Ion_118.112": "118",
        "Ion_119.115": "119",
        "Ion_121.122": "121",
    },
    register=True,
)
