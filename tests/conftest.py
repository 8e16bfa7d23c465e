from __future__ import annotations

import shutil
import uuid
from getpass import getuser
from pathlib import Path
from tempfile import gettempdir
from types import SimpleNamespace

import h5py
import numpy as np
import pytest

from riboreader import Ribo, apris_human_alias

_tmptestdir = Path(gettempdir()) / f"riboreader-tests-{getuser()}-{uuid.uuid4()!s}"

EXPERIMENTS = ["Hela_1", "Hela_2", "WT_1", "WT_2"]
RNASEQ_EXPERIMENTS = ["Hela_1", "Hela_2", "WT_1"]
REFERENCES = [
    "ENST00000229239.10|ENSG00000111640.15|-|-|GAPDH-201|GAPDH|1875|UTR5:1-76|CDS:77-1084|UTR3:1085-1875|",
    "ENST00000331789.10|ENSG00000075624.17|-|-|ACTB-201|ACTB|1852|UTR5:1-84|CDS:85-1212|UTR3:1213-1852|",
    "ENST00000377970.6|ENSG00000136997.21|-|-|MYC-206|MYC|2379|UTR5:1-45|CDS:46-1410|UTR3:1411-2379|",
    "ENST00000269305.9|ENSG00000141510.18|-|-|TP53-201|TP53|2512|UTR5:1-142|CDS:143-1324|UTR3:1325-2512|",
]
ALIASES = ["GAPDH-201", "ACTB-201", "MYC-206", "TP53-201"]
REFERENCE_LENGTHS = [1875, 1852, 2379, 2512]
LENGTH_MIN = 28
LENGTH_MAX = 32
METAGENE_RADIUS = 2


def region_counts(exp_index: int) -> np.ndarray:
    """Region counts of an experiment, row ``l * n_refs + t``."""
    n_lengths = LENGTH_MAX - LENGTH_MIN + 1
    rows = np.arange(n_lengths * len(REFERENCES))
    lengths, refs = np.divmod(rows, len(REFERENCES))
    cols = np.arange(5)
    return (
        exp_index * 1000 + lengths[:, None] * 100 + refs[:, None] * 10 + cols[None, :]
    ).astype(np.uint32)


def metagene(exp_index: int, site: str) -> np.ndarray:
    n_lengths = LENGTH_MAX - LENGTH_MIN + 1
    n_positions = 2 * METAGENE_RADIUS + 1
    offset = 0 if site == "start" else 50000
    return (
        offset
        + exp_index * 10000
        + np.arange(n_lengths * len(REFERENCES) * n_positions).reshape(
            n_lengths * len(REFERENCES), n_positions
        )
    ).astype(np.uint32)


def rnaseq(exp_index: int) -> np.ndarray:
    refs = np.arange(len(REFERENCES))
    cols = np.arange(5)
    return (exp_index * 100 + refs[:, None] * 10 + cols[None, :]).astype(np.float64)


def make_ribo_file(path: str | Path, with_rnaseq=RNASEQ_EXPERIMENTS) -> str:
    with h5py.File(path, "w") as f:
        f.attrs.update(
            {
                "format_version": 0,
                "ribopy_version": "0.1.0",
                "time": "2026-10-18 10:00:00",
                "reference": "appris-human-v1",
                "length_min": LENGTH_MIN,
                "length_max": LENGTH_MAX,
                "left_span": 35,
                "right_span": 10,
                "metagene_radius": METAGENE_RADIUS,
            }
        )
        f.create_dataset(
            "reference/reference_names", data=np.array(REFERENCES, dtype="S")
        )
        f.create_dataset(
            "reference/reference_lengths", data=np.array(REFERENCE_LENGTHS)
        )

        for i, name in enumerate(EXPERIMENTS):
            group = f.create_group(f"experiments/{name}")
            group.attrs["total_reads"] = 1_000_000 * (i + 1)
            group.create_dataset("region_counts/region_counts", data=region_counts(i))
            for site in ("start", "stop"):
                group.create_dataset(f"metagene/{site}", data=metagene(i, site))
            if name in with_rnaseq:
                group.create_dataset("rnaseq/rnaseq", data=rnaseq(i))
            if name == "WT_2":
                group.create_dataset("coverage/coverage", data=np.zeros(10, dtype=int))
            if name == "Hela_1":
                group.attrs["metadata"] = "cell_line: HeLa\n"

    return str(path)


@pytest.fixture(scope="session")
def tmptestdir():
    Path(_tmptestdir).mkdir(parents=True, exist_ok=True)
    return _tmptestdir


def pytest_sessionfinish(session, exitstatus):  # noqa: ARG001
    if exitstatus == 0:
        shutil.rmtree(_tmptestdir, ignore_errors=True)


@pytest.fixture(scope="session")
def ribo_file(tmptestdir):
    return make_ribo_file(tmptestdir / "sample.ribo")


@pytest.fixture
def ribo(ribo_file):
    with Ribo(ribo_file) as handle:
        yield handle


@pytest.fixture
def ribo_alias(ribo_file):
    with Ribo(ribo_file, alias=apris_human_alias) as handle:
        yield handle


@pytest.fixture(scope="session")
def layout():
    """Contents of the sample ribo file."""
    return SimpleNamespace(
        experiments=EXPERIMENTS,
        rnaseq_experiments=RNASEQ_EXPERIMENTS,
        references=REFERENCES,
        aliases=ALIASES,
        reference_lengths=REFERENCE_LENGTHS,
        length_min=LENGTH_MIN,
        length_max=LENGTH_MAX,
        metagene_radius=METAGENE_RADIUS,
        region_counts=region_counts,
        metagene=metagene,
        rnaseq=rnaseq,
        make_ribo_file=make_ribo_file,
    )
