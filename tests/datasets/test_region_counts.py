from __future__ import annotations

import h5py
import numpy as np
import pandas as pd
import pytest

from riboreader import (
    Ribo,
    ValidationError,
    get_length_distribution,
    get_region_counts,
)


def test_totals(ribo, reads):
    df = get_region_counts(ribo)

    assert list(df.columns) == ["experiment", "region", "count"]
    assert len(df) == 4 * 5
    assert len(reads) == 4

    hela_cds = df[(df["experiment"] == "Hela_1") & (df["region"] == "CDS")]
    assert hela_cds["count"].tolist() == [4340]


def test_totals_wide(ribo, layout):
    df = get_region_counts(ribo, regions=["CDS", "UTR5"], tidy=False)

    assert list(df.columns) == ["experiment", "CDS", "UTR5"]
    assert df["experiment"].tolist() == layout.experiments
    for i in range(4):
        expected = layout.region_counts(i)[:, [2, 0]].sum(axis=0)
        assert np.array_equal(df.loc[i, ["CDS", "UTR5"]].to_numpy(dtype=int), expected)


def test_per_length(ribo, layout):
    df = get_region_counts(
        ribo,
        experiments=["Hela_2"],
        regions="UTR5",
        range_lower=29,
        range_upper=30,
        sum_lengths=False,
        tidy=False,
    )

    assert list(df.columns) == ["experiment", "length", "UTR5"]
    assert df["length"].tolist() == [29, 30]
    assert df["UTR5"].tolist() == [4460, 4860]


def test_per_transcript(ribo, layout):
    df = get_region_counts(
        ribo, experiments=["WT_1", "Hela_1"], sum_references=False, tidy=False
    )

    assert list(df.columns)[:2] == ["experiment", "transcript"]
    assert df["transcript"].tolist() == layout.references * 2
    for block, i in ((slice(0, 4), 2), (slice(4, 8), 0)):
        expected = layout.region_counts(i).reshape(5, 4, 5).sum(axis=0)
        assert np.array_equal(df.iloc[block, 2:].to_numpy(dtype=int), expected)


def test_per_transcript_and_length(ribo, layout):
    df = get_region_counts(
        ribo,
        experiments="Hela_2",
        regions=["CDS"],
        range_lower=31,
        sum_lengths=False,
        sum_references=False,
        tidy=False,
    )

    assert list(df.columns) == ["experiment", "transcript", "length", "CDS"]
    assert len(df) == 4 * 2
    # transcripts in file order, lengths varying fastest
    assert df["transcript"].tolist() == [r for r in layout.references for _ in range(2)]
    assert df["length"].tolist() == [31, 32] * 4

    counts = layout.region_counts(1)
    rows = [l * 4 + t for t in range(4) for l in (3, 4)]
    assert df["CDS"].tolist() == counts[rows, 2].tolist()


def test_tidy_per_transcript_and_length(ribo):
    df = get_region_counts(
        ribo, experiments="Hela_1", sum_lengths=False, sum_references=False
    )
    assert list(df.columns) == ["experiment", "transcript", "length", "region", "count"]
    assert len(df) == 4 * 5 * 5
    assert isinstance(df["transcript"].dtype, pd.CategoricalDtype)
    assert df["length"].dtype.kind == "i"


def test_alias(ribo_alias, layout):
    df = get_region_counts(
        ribo_alias, experiments="Hela_1", sum_references=False, alias=True
    )
    assert list(df["transcript"].cat.categories) == layout.aliases

    # no transcript column, alias has no effect
    df = get_region_counts(ribo_alias, experiments="Hela_1", alias=True)
    assert "transcript" not in df.columns


def test_normalize(ribo):
    raw = get_region_counts(ribo, experiments=["Hela_1", "Hela_2"], tidy=False)
    norm = get_region_counts(
        ribo, experiments=["Hela_1", "Hela_2"], tidy=False, normalize=True
    )

    # 1M and 2M total reads
    assert np.allclose(norm.loc[0, "CDS"], raw.loc[0, "CDS"])
    assert np.allclose(norm.loc[1, "CDS"], raw.loc[1, "CDS"] / 2)


def test_invalid_lengths(ribo, reads):
    with pytest.raises(ValidationError):
        get_region_counts(ribo, range_lower=20)
    with pytest.raises(ValidationError):
        get_region_counts(ribo, range_lower=31, range_upper=30)
    assert reads == []


def test_length_distribution(ribo, layout):
    df = get_length_distribution(ribo, experiments=["Hela_1", "WT_1"])

    assert list(df.columns) == ["experiment", "length", "count"]
    assert len(df) == 2 * 5
    assert df["experiment"].tolist() == ["Hela_1"] * 5 + ["WT_1"] * 5
    assert df["length"].tolist() == [28, 29, 30, 31, 32] * 2
    assert df["count"].iloc[0] == 68
    assert isinstance(df["experiment"].dtype, pd.CategoricalDtype)

    expected = layout.region_counts(2).reshape(5, 4, 5).sum(axis=1)[:, 2]
    assert df["count"].iloc[5:].tolist() == expected.tolist()


def test_length_distribution_wide(ribo, layout):
    df = get_length_distribution(
        ribo, region="UTR3", range_lower=30, tidy=False, compact=False
    )

    assert list(df.columns) == ["experiment", 30, 31, 32]
    assert df["experiment"].tolist() == layout.experiments
    for i in range(4):
        expected = layout.region_counts(i).reshape(5, 4, 5).sum(axis=1)[2:, 4]
        assert df.iloc[i, 1:].tolist() == expected.tolist()


def test_length_distribution_single_region(ribo):
    with pytest.raises(ValidationError):
        get_length_distribution(ribo, region=["CDS", "UTR5"])
    with pytest.raises(ValidationError):
        get_length_distribution(ribo, region="INTRON")


@pytest.mark.parametrize("total_reads", [0, -5])
def test_normalize_non_positive_total_reads(layout, tmptestdir, total_reads):
    path = layout.make_ribo_file(tmptestdir / f"total-reads-{total_reads}.ribo")
    with h5py.File(path, "a") as f:
        f["experiments/Hela_1"].attrs["total_reads"] = total_reads

    with Ribo(path) as ribo:
        with pytest.raises(ValidationError, match="Hela_1"):
            get_region_counts(ribo, experiments=["Hela_1", "Hela_2"], normalize=True)

        # raw counts do not need total reads
        df = get_region_counts(ribo, experiments="Hela_1")
        assert (df["count"] >= 0).all()


def test_length_subrange(ribo, layout):
    df = get_region_counts(
        ribo, regions="CDS", range_lower=29, range_upper=31, sum_lengths=False
    )
    assert df["length"].unique().tolist() == [29, 30, 31]
