"""
Tests for dataset and plex reconciliation.
"""

import numpy as np
import pandas as pd
import pytest

from plexquant.core.exceptions import ConfigurationError, PartialMismatchWarning, SchemaError
from plexquant.crosstab.reconcile import (
    check_measurement_names,
    reconcile_datasets,
    reconcile_plexes,
)
from plexquant.model.notices import MismatchKind


class TestReconcileDatasets:
    """Tests for reconcile_datasets."""

    def test_matching_inputs_have_no_notices(self, identifications, intensities, fractions):
        ids, ints, fracs, notices = reconcile_datasets(identifications, intensities, fractions)
        assert notices == []
        assert len(ids) == len(identifications)
        assert len(ints) == len(intensities)
        assert len(fracs) == len(fractions)

    def test_fraction_without_intensities(self, identifications, intensities, fractions):
        fractions = pd.concat(
            [fractions, pd.DataFrame({"Dataset": ["d4"], "PlexID": ["P2"]})], ignore_index=True
        )
        with pytest.warns(PartialMismatchWarning, match="Subsetting to 3 common datasets"):
            _, _, fracs, notices = reconcile_datasets(identifications, intensities, fractions)

        assert set(fracs["Dataset"]) == {"d1", "d2", "d3"}
        assert len(notices) == 1
        assert notices[0].kind == MismatchKind.DATASET
        assert notices[0].table == "fractions"
        assert notices[0].dropped == ("d4",)
        assert notices[0].count == 1

    def test_used_datasets_are_the_intersection(self, identifications, intensities, fractions):
        identifications = identifications[identifications["Dataset"] != "d2"]
        intensities = intensities[intensities["Dataset"] != "d3"]
        with pytest.warns(PartialMismatchWarning):
            ids, ints, fracs, notices = reconcile_datasets(identifications, intensities, fractions)

        for df in (ids, ints, fracs):
            assert set(df["Dataset"]) == {"d1"}
        assert {notice.table for notice in notices} == {
            "identifications",
            "reporter intensities",
            "fractions",
        }

    def test_no_common_datasets(self, identifications, intensities):
        fractions = pd.DataFrame({"Dataset": ["x1", "x2"], "PlexID": ["P1", "P1"]})
        with pytest.raises(ConfigurationError, match="no common datasets"):
            reconcile_datasets(identifications, intensities, fractions)

    def test_inputs_are_not_mutated(self, identifications, intensities, fractions):
        fractions.loc[len(fractions)] = ["d9", "P9"]
        expected = fractions.copy()
        with pytest.warns(PartialMismatchWarning):
            reconcile_datasets(identifications, intensities, fractions)
        pd.testing.assert_frame_equal(fractions, expected)

    def test_missing_dataset_column(self, identifications, intensities, fractions):
        with pytest.raises(SchemaError, match="Dataset"):
            reconcile_datasets(identifications, intensities, fractions.rename(columns={"Dataset": "Run"}))


class TestCheckMeasurementNames:
    """Tests for the MeasurementName uniqueness check."""

    def test_missing_names_are_ignored(self, samples):
        check_measurement_names(samples)

    def test_duplicates_raise(self, samples):
        samples = samples.copy()
        samples.loc[5, "MeasurementName"] = "S_A1"
        with pytest.raises(ConfigurationError, match="duplicate MeasurementName"):
            check_measurement_names(samples)


class TestReconcilePlexes:
    """Tests for reconcile_plexes."""

    @pytest.fixture
    def aggregated(self):
        return pd.DataFrame(
            {
                "PlexID": ["P1", "P2"],
                "Specie": ["ProtA", "ProtA"],
                "Ion_126.128": [1.0, 2.0],
            }
        )

    def test_extra_plex_in_design(self, aggregated, samples, references):
        references = pd.concat(
            [references, pd.DataFrame({"PlexID": ["P3"], "QuantBlock": [1], "Reference": ["ref"]})],
            ignore_index=True,
        )
        with pytest.warns(PartialMismatchWarning):
            quant, samp, refs, notices = reconcile_plexes(aggregated, samples, references)

        assert set(refs["PlexID"]) == {"P1", "P2"}
        assert len(notices) == 1
        assert notices[0].kind == MismatchKind.PLEX
        assert notices[0].dropped == ("P3",)

    def test_plex_missing_from_design(self, aggregated, samples, references):
        samples = samples[samples["PlexID"] == "P1"]
        with pytest.warns(PartialMismatchWarning):
            quant, samp, refs, notices = reconcile_plexes(aggregated, samples, references)
        assert set(quant["PlexID"]) == {"P1"}
        assert set(refs["PlexID"]) == {"P1"}

    def test_no_common_plexes(self, aggregated, samples):
        references = pd.DataFrame({"PlexID": ["P9"], "Reference": ["ref"]})
        with pytest.raises(ConfigurationError, match="no common plexes"):
            reconcile_plexes(aggregated, samples, references)

    def test_nan_plex_is_ignored(self, aggregated, samples, references):
        samples = samples.copy()
        samples.loc[len(samples)] = [np.nan, 1, "126", "ref", np.nan]
        quant, samp, refs, notices = reconcile_plexes(aggregated, samples, references)
        assert notices == []
        assert samp["PlexID"].notna().all()
