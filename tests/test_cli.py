"""
Tests for the command line interface and table I/O.
"""

import numpy as np
import pandas as pd
import pytest
from click.testing import CliRunner

from plexquant.commands.crosstab import run_crosstab
from plexquant.io.tables import read_crosstab, read_table, write_crosstab
from plexquant.plexquant_cli import cli

TMT6_IONS = [
    "Ion_126.128",
    "Ion_127.125",
    "Ion_128.134",
    "Ion_129.131",
    "Ion_130.141",
    "Ion_131.138",
]


@pytest.fixture
def input_files(tmp_path):
    """A single TMT6 plex with two fractions, written as tab separated files."""
    paths = {}

    ids = pd.DataFrame(
        {
            "Dataset": ["f1", "f1", "f2"],
            "Scan": [10, 11, 10],
            "accession": ["ProtA", "ProtB", "ProtA"],
            "isDecoy": [False, True, False],
        }
    )
    masic = pd.DataFrame(
        {
            "Dataset": ["f1", "f1", "f2"],
            "ScanNumber": [10, 11, 10],
            **{ion: [50.0, 4.0, 50.0] for ion in TMT6_IONS},
        }
    )
    masic["Ion_127.125"] = [100.0, 8.0, 100.0]
    fractions = pd.DataFrame({"Dataset": ["f1", "f2"], "PlexID": ["P1", "P1"]})
    samples = pd.DataFrame(
        {
            "PlexID": ["P1"] * 6,
            "QuantBlock": [1] * 6,
            "ReporterName": [126, 127, 128, 129, 130, 131],
            "ReporterAlias": ["ref", "s1", "s2", "s3", "s4", "s5"],
            "MeasurementName": [np.nan, "S1", "S2", "S3", "S4", "S5"],
        }
    )
    references = pd.DataFrame({"PlexID": ["P1"], "QuantBlock": [1], "Reference": ["ref"]})

    for name, df in [
        ("ids", ids),
        ("masic", masic),
        ("fractions", fractions),
        ("samples", samples),
        ("references", references),
    ]:
        path = tmp_path / f"{name}.tsv"
        df.to_csv(path, sep="\t", index=False)
        paths[name] = str(path)
    return paths


def _args(paths, output):
    return [
        "crosstab",
        "-i",
        paths["ids"],
        "-r",
        paths["masic"],
        "-f",
        paths["fractions"],
        "-s",
        paths["samples"],
        "-R",
        paths["references"],
        "-o",
        str(output),
    ]


class TestCli:
    """Tests for the plexquant command group."""

    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "crosstab" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "plexquant" in result.output

    def test_crosstab(self, input_files, tmp_path):
        output = tmp_path / "out" / "crosstab.tsv"
        result = CliRunner().invoke(cli, _args(input_files, output))

        assert result.exit_code == 0, result.output
        matrix = read_crosstab(output)
        assert list(matrix.index) == ["ProtA", "ProtB"]
        assert list(matrix.columns) == ["S1", "S2", "S3", "S4", "S5"]
        assert matrix.loc["ProtA", "S1"] == 1.0
        assert matrix.loc["ProtA", "S5"] == 0.0

    def test_remove_decoys(self, input_files, tmp_path):
        output = tmp_path / "crosstab.csv"
        result = CliRunner().invoke(cli, _args(input_files, output) + ["--remove-decoys"])

        assert result.exit_code == 0, result.output
        assert list(read_crosstab(output).index) == ["ProtA"]

    def test_config_file(self, input_files, tmp_path):
        config = tmp_path / "crosstab.yaml"
        config.write_text("name: ''\nremove_decoys: true\n")
        output = tmp_path / "crosstab.tsv"
        result = CliRunner().invoke(cli, _args(input_files, output) + ["-c", str(config)])

        assert result.exit_code == 0, result.output
        assert list(read_crosstab(output).index) == ["ProtA"]

    def test_missing_level_column(self, input_files, tmp_path):
        output = tmp_path / "crosstab.tsv"
        result = CliRunner().invoke(cli, _args(input_files, output) + ["-l", "SiteID"])

        assert result.exit_code != 0
        assert not output.exists()

    def test_missing_input_file(self, input_files, tmp_path):
        args = _args(input_files, tmp_path / "crosstab.tsv")
        args[args.index("-f") + 1] = str(tmp_path / "absent.tsv")
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 2


class TestRunCrosstab:
    """Tests for run_crosstab, the function behind the crosstab command."""

    def test_returns_result(self, input_files, tmp_path):
        output = tmp_path / "crosstab.parquet"
        result = run_crosstab(
            identifications=input_files["ids"],
            reporter_intensities=input_files["masic"],
            fractions=input_files["fractions"],
            samples=input_files["samples"],
            references=input_files["references"],
            output=str(output),
            level="accession",
        )
        assert result.n_species == 2
        pd.testing.assert_frame_equal(
            read_crosstab(output),
            result.matrix,
            check_names=False,
            check_index_type=False,
            check_column_type=False,
        )

    @pytest.mark.parametrize("level", ["accession+accession", ","])
    def test_invalid_level_is_rejected(self, input_files, tmp_path, level):
        output = tmp_path / "crosstab.tsv"
        with pytest.raises(ValueError, match="aggregation_level"):
            run_crosstab(
                identifications=input_files["ids"],
                reporter_intensities=input_files["masic"],
                fractions=input_files["fractions"],
                samples=input_files["samples"],
                references=input_files["references"],
                output=str(output),
                level=level,
            )
        assert not output.exists()


class TestTables:
    """Tests for table reading and writing."""

    def test_read_table_formats(self, tmp_path):
        df = pd.DataFrame({"Dataset": ["d1"], "PlexID": ["P1"]})
        df.to_csv(tmp_path / "a.csv", index=False)
        df.to_csv(tmp_path / "a.txt", sep="\t", index=False)
        df.to_csv(tmp_path / "a.tsv.gz", sep="\t", index=False)

        for name in ["a.csv", "a.txt", "a.tsv.gz"]:
            pd.testing.assert_frame_equal(read_table(tmp_path / name), df)

    def test_read_table_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "absent.tsv")

    def test_read_table_unsupported(self, tmp_path):
        path = tmp_path / "a.xlsx"
        path.write_text("")
        with pytest.raises(ValueError, match="not allowed"):
            read_table(path)

    def test_write_crosstab_missing_values(self, tmp_path):
        matrix = pd.DataFrame(
            {"S1": [1.0, np.nan]}, index=pd.Index(["ProtA", "ProtB"], name="Specie")
        )
        path = tmp_path / "crosstab.tsv"
        write_crosstab(matrix, path)

        lines = path.read_text().splitlines()
        assert lines[0] == "Specie\tS1"
        assert lines[2] == "ProtB\tNA"
