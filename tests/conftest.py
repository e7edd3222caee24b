"""
Shared fixtures: a small two-plex experiment with three reporter channels.

Plex P1 has datasets d1 and d2, plex P2 has dataset d3. Channel 126 is the
reference ("ref") of both plexes and has no measurement name.
"""

import numpy as np
import pandas as pd
import pytest

from plexquant.model.labeling import ReporterConverter

ION_126 = "Ion_126.128"
ION_127 = "Ion_127.125"
ION_128 = "Ion_128.134"
IONS = [ION_126, ION_127, ION_128]


@pytest.fixture
def converter3():
    """A three channel converter that is not one of the predefined tables."""
    return ReporterConverter(
        "Test3plex",
        {ION_126: "126", ION_127: "127", ION_128: "128"},
    )


@pytest.fixture
def identifications():
    return pd.DataFrame(
        {
            "Dataset": ["d1", "d1", "d1", "d2", "d3", "d3", "d3"],
            "Scan": [1, 1, 2, 5, 7, 8, 9],
            "accession": ["ProtA", "ProtA", "ProtB", "ProtA", "ProtA", "ProtB", "ProtC"],
            "peptide": ["K.PEPA.R", "K.PEPA.R", "K.PEPB.R", "K.PEPAA.R", "K.PEPA.R", "K.PEPB.R", "K.PEPC.R"],
            "isDecoy": [False] * 7,
        }
    )


@pytest.fixture
def intensities():
    return pd.DataFrame(
        {
            "Dataset": ["d1", "d1", "d2", "d3", "d3", "d3"],
            "ScanNumber": [1, 2, 5, 7, 8, 9],
            ION_126: [60.0, 10.0, 40.0, 50.0, 0.0, 0.0],
            ION_127: [120.0, 10.0, 80.0, 25.0, 5.0, 3.0],
            ION_128: [30.0, 0.0, 20.0, 100.0, 5.0, 3.0],
        }
    )


@pytest.fixture
def fractions():
    return pd.DataFrame({"Dataset": ["d1", "d2", "d3"], "PlexID": ["P1", "P1", "P2"]})


@pytest.fixture
def samples():
    return pd.DataFrame(
        {
            "PlexID": ["P1", "P1", "P1", "P2", "P2", "P2"],
            "QuantBlock": [1, 1, 1, 1, 1, 1],
            "ReporterName": ["126", "127", "128", "126", "127", "128"],
            "ReporterAlias": ["ref", "a", "b", "ref", "a", "b"],
            "MeasurementName": [np.nan, "S_A1", "S_B1", np.nan, "S_A2", "S_B2"],
        }
    )


@pytest.fixture
def references():
    return pd.DataFrame({"PlexID": ["P1", "P2"], "QuantBlock": [1, 1], "Reference": ["ref", "ref"]})
