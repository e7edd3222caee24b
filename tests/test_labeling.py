"""
Tests for the reporter ion converter tables.
"""

import pytest

from plexquant.core.exceptions import ConfigurationError
from plexquant.model.labeling import (
    IsobaricLabel,
    ReporterConverter,
    find_reporter_converter,
    TMT6plex,
    TMT10plex,
    TMT11plex,
    TMT16plex,
    TMT18plex,
    ITRAQ4plex,
    ITRAQ8plex,
)


class TestIsobaricLabel:
    """Tests for IsobaricLabel enum."""

    def test_from_str(self):
        assert IsobaricLabel.from_str("tmt10plex") == IsobaricLabel.TMT10plex
        assert IsobaricLabel.from_str("ITRAQ4PLEX") == IsobaricLabel.ITRAQ4plex

    def test_from_str_invalid(self):
        with pytest.raises(KeyError):
            IsobaricLabel.from_str("tmt7plex")

    def test_converter_lookup(self):
        assert IsobaricLabel.TMT16plex.converter() is TMT16plex
        assert TMT11plex.id == IsobaricLabel.TMT11plex


class TestReporterConverter:
    """Tests for the predefined converters and the registry."""

    @pytest.mark.parametrize(
        "converter,size",
        [
            (TMT6plex, 6),
            (TMT10plex, 10),
            (TMT11plex, 11),
            (TMT16plex, 16),
            (TMT18plex, 18),
            (ITRAQ4plex, 4),
            (ITRAQ8plex, 8),
        ],
        ids=lambda v: getattr(v, "name", str(v)),
    )
    def test_cardinality(self, converter, size):
        assert len(converter) == size
        assert len(set(converter.reporters.values())) == size

    def test_mapping_access(self):
        assert TMT10plex["Ion_131.138"] == "131"
        assert TMT11plex["Ion_131.138"] == "131N"
        assert "Ion_131.144" in TMT11plex
        assert "Ion_131.144" not in TMT10plex

    def test_to_frame(self):
        frame = TMT6plex.to_frame()
        assert list(frame.columns) == ["ReporterName", "ReporterIon"]
        assert len(frame) == 6
        assert frame.loc[frame["ReporterIon"] == "Ion_126.128", "ReporterName"].item() == "126"

    def test_caller_converter_is_not_registered(self, converter3):
        assert "Test3plex" not in ReporterConverter.registry
        assert len(ReporterConverter.registered()) == 7
        assert converter3.id is None


class TestFindReporterConverter:
    """Tests for converter selection by exact set equality."""

    def test_tmt10_vs_tmt11(self):
        assert find_reporter_converter(list(TMT10plex)) is TMT10plex
        assert find_reporter_converter(list(TMT11plex)) is TMT11plex

    def test_order_does_not_matter(self):
        assert find_reporter_converter(sorted(ITRAQ8plex, reverse=True)) is ITRAQ8plex

    def test_subset_does_not_match(self):
        with pytest.raises(ConfigurationError, match="No reporter ion converter tables match"):
            find_reporter_converter(list(TMT16plex)[:15])

    def test_five_channels_with_four_and_eight_plex_converters(self):
        ions = list(ITRAQ8plex)[:5]
        with pytest.raises(ConfigurationError, match="ITRAQ4plex"):
            find_reporter_converter(ions, converters=[ITRAQ4plex, ITRAQ8plex])

    def test_explicit_converters(self, converter3):
        found = find_reporter_converter(list(converter3), converters=[TMT6plex, converter3])
        assert found is converter3

    @pytest.mark.parametrize(
        "ions,expected",
        [
            (
                [
                    "Ion_126.128", "Ion_127.125", "Ion_127.131", "Ion_128.128",
                    "Ion_128.134", "Ion_129.131", "Ion_129.138", "Ion_130.135",
                    "Ion_130.141", "Ion_131.138", "Ion_131.144", "Ion_132.142",
                    "Ion_132.148", "Ion_133.145", "Ion_133.151", "Ion_134.148",
                ],
                TMT16plex,
            ),
            (
                [
                    "Ion_126.128", "Ion_127.125", "Ion_127.131", "Ion_128.128",
                    "Ion_128.134", "Ion_129.131", "Ion_129.138", "Ion_130.135",
                    "Ion_130.141", "Ion_131.138", "Ion_131.144", "Ion_132.142",
                    "Ion_132.148", "Ion_133.145", "Ion_133.151", "Ion_134.148",
                    "Ion_134.155", "Ion_135.152",
                ],
                TMT18plex,
            ),
        ],
        ids=["TMT16plex", "TMT18plex"],
    )
    def test_tmtpro_masic_columns(self, ions, expected):
        assert find_reporter_converter(ions) is expected
        assert expected["Ion_134.148"] == "134N"

    def test_caller_converters_stay_out_of_the_default_search(self, converter3):
        assert converter3 not in ReporterConverter.registered()
        with pytest.raises(ConfigurationError):
            find_reporter_converter(list(converter3))
