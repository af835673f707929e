"""Command-line entry point for signal SNP scanning."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from signalscan.config import UNSET_THRESHOLD, ScanSettings
from signalscan.errors import SignalScanError
from signalscan.pipeline import SignalScanPipeline


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Filter GEMMA association output to significant SNPs and join them "
            "with a snpEff annotation file."
        )
    )
    parser.add_argument(
        "-g",
        "--gemma",
        required=True,
        help="GEMMA association result (.assoc.txt)",
    )
    parser.add_argument(
        "-s",
        "--snp-ann",
        "--snpAnn",
        required=True,
        help="snpEff annotation file",
    )
    parser.add_argument(
        "-n",
        "--number",
        type=int,
        required=True,
        help="Sample number in the GEMMA model",
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=UNSET_THRESHOLD,
        help="-log10 p-value threshold. Default: 0.05 / total snps",
    )
    parser.add_argument(
        "-pre",
        "--prefix",
        default=None,
        help="Output prefix. Default: GEMMA file name without extension",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory. Default: directory of the GEMMA file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("signalscan.cli")

    try:
        settings = ScanSettings.build(
            association_path=args.gemma,
            annotation_path=args.snp_ann,
            sample_count=args.number,
            threshold=args.threshold,
            prefix=args.prefix,
            output_dir=args.output,
        )
        settings.validate()

        logger.info("Gemma file: %s", settings.association_path)
        logger.info("SnpEff annotation file: %s", settings.annotation_path)
        logger.info("Prefix: %s", settings.prefix)
        logger.info("Output file: %s", settings.output_path)
        logger.info("Sample number: %d", settings.sample_count)

        SignalScanPipeline(settings).run()
    except SignalScanError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
