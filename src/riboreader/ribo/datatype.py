"""Layout of the datasets inside a ribo file."""

from __future__ import annotations

from collections import OrderedDict

REGIONS = OrderedDict(
    [
        ("UTR5", 0),
        ("UTR5J", 1),
        ("CDS", 2),
        ("UTR3J", 3),
        ("UTR3", 4),
    ]
)
"""Region names mapped to their column in region count and RNA-seq datasets."""

METAGENE_SITES = ("start", "stop")

EXPERIMENTS_GROUP = "experiments"
REFERENCE_NAMES = "reference/reference_names"
REFERENCE_LENGTHS = "reference/reference_lengths"

# capability flag -> group that must exist inside the experiment group
CAPABILITIES = {
    "coverage": "coverage",
    "rnaseq": "rnaseq",
}


def experiment_path(experiment: str) -> str:
    return f"/{EXPERIMENTS_GROUP}/{experiment}"


def rnaseq_path(experiment: str) -> str:
    return f"{experiment_path(experiment)}/rnaseq/rnaseq"


def region_counts_path(experiment: str) -> str:
    return f"{experiment_path(experiment)}/region_counts/region_counts"


def metagene_path(experiment: str, site: str) -> str:
    return f"{experiment_path(experiment)}/metagene/{site}"


def region_columns(regions: list[str]) -> list[int]:
    """Translate region names into dataset column indices, keeping order."""
    return [REGIONS[r] for r in regions]
