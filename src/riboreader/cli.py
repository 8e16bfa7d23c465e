"""riboreader's command line interface utilities."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__, datasets, ribo
from . import logging as ribologging

log = logging.getLogger(__name__)


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        action="store_true",
        help="""Print riboreader version and exit""",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="""Increase the program verbosity""",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="""Increase the program verbosity to maximum""",
    )


def _setup(args: argparse.Namespace) -> None:
    if args.verbose:
        ribologging.setup(logging.DEBUG, logging.getLogger("riboreader"))
    elif args.debug:
        ribologging.setup(logging.DEBUG, logging.root)
    else:
        ribologging.setup()

    if args.version:
        print(__version__)  # noqa: T201
        sys.exit()


def ribols(args=None):
    """:func:`.ribo.show` command line interface."""
    parser = argparse.ArgumentParser(
        prog="ribols", description="Inspect the contents of a ribo file"
    )
    _add_global_options(parser)

    parser.add_argument(
        "ribo_file",
        help="""Input ribo file""",
    )
    parser.add_argument(
        "--detail",
        action="store_true",
        help="""Print the shape of the datasets of each experiment""",
    )

    args = parser.parse_args(args)
    _setup(args)

    ribo.show(args.ribo_file, detail=args.detail)


DATASETS = ("rnaseq", "region_counts", "length_distribution", "metagene")


def ribodump(args=None):
    """Command line interface writing ribo datasets as tab-separated tables."""
    parser = argparse.ArgumentParser(
        prog="ribodump",
        description="""
Write a dataset of a ribo file as a tab-separated table.

Examples
--------

RNA-Seq CDS counts of two experiments, one row per transcript:

  $ ribodump sample.ribo rnaseq -e Hela_1 -e WT_1 -r CDS --wide

Length distribution of CDS reads between 28 and 32 nt:

  $ ribodump sample.ribo length_distribution --lower 28 --upper 32 -o lengths.tsv
        """,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_global_options(parser)

    parser.add_argument("ribo_file", help="""Input ribo file""")
    parser.add_argument(
        "dataset", choices=DATASETS, help="""Dataset to write"""
    )
    parser.add_argument(
        "--experiment",
        "-e",
        action="append",
        default=None,
        help="""Experiment to include. Can be passed multiple times; defaults to
        all experiments""",
    )
    parser.add_argument(
        "--region",
        "-r",
        action="append",
        default=None,
        help="""Region to include. Can be passed multiple times; defaults to all
        regions (CDS for length_distribution)""",
    )
    parser.add_argument("--lower", type=int, default=None, help="""Minimum read length""")
    parser.add_argument("--upper", type=int, default=None, help="""Maximum read length""")
    parser.add_argument(
        "--site",
        choices=ribo.METAGENE_SITES,
        default="start",
        help="""Metagene site""",
    )
    parser.add_argument(
        "--per-transcript",
        action="store_true",
        help="""Do not sum region counts and metagene coverage over transcripts""",
    )
    parser.add_argument(
        "--apris-alias",
        action="store_true",
        help="""Report transcripts by the alias found in APPRIS transcript names""",
    )
    parser.add_argument(
        "--wide",
        action="store_true",
        help="""Write one column per region, length or position""",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="""Output file, standard output if not given""",
    )

    args = parser.parse_args(args)
    _setup(args)

    alias = ribo.apris_human_alias if args.apris_alias else None
    with ribo.Ribo(args.ribo_file, alias=alias) as handle:
        table = _get_table(handle, args)

    log.info(f"writing {len(table)} rows")
    table.to_csv(args.output if args.output else sys.stdout, sep="\t", index=False)


def _get_table(handle: ribo.Ribo, args: argparse.Namespace):
    common = {"experiments": args.experiment, "tidy": not args.wide}
    lengths = {"range_lower": args.lower, "range_upper": args.upper}
    alias = args.apris_alias

    if args.dataset == "rnaseq":
        return datasets.get_rnaseq(handle, regions=args.region, alias=alias, **common)
    if args.dataset == "region_counts":
        return datasets.get_region_counts(
            handle,
            regions=args.region,
            sum_references=not args.per_transcript,
            alias=alias,
            **common,
            **lengths,
        )
    if args.dataset == "length_distribution":
        region = args.region if args.region else "CDS"
        return datasets.get_length_distribution(handle, region=region, **common, **lengths)

    return datasets.get_metagene(
        handle,
        site=args.site,
        sum_references=not args.per_transcript,
        alias=alias,
        **common,
        **lengths,
    )
