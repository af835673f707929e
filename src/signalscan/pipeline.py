"""Sequential signal SNP scanning pipeline."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from signalscan.annotation import AnnotationJoiner
from signalscan.association import AssociationFilter
from signalscan.config import ScanSettings
from signalscan.errors import NoSignalFoundError
from signalscan.models import SignificantSet
from signalscan.summary import format_summary
from signalscan.threshold import compute_threshold, count_lines

_LOGGER = logging.getLogger(__name__)


@dataclass
class SignalScanReport:
    """Execution summary for a scan run."""

    total_lines: int
    log_threshold: float
    p_threshold: float
    skipped_lines: int
    rows_written: int
    output_path: Path
    significant: SignificantSet = field(default_factory=list)


class SignalScanPipeline:
    """Count, threshold, filter, summarize and join, in that order.

    Every failure is fatal; the report file only exists when the whole run
    succeeds.
    """

    def __init__(
        self,
        settings: ScanSettings,
        *,
        logger: logging.Logger | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or _LOGGER
        self.stdout = stdout or sys.stdout

    def run(self) -> SignalScanReport:
        settings = self.settings

        total_lines = count_lines(settings.association_path)
        self.logger.info("Total snps: %d", total_lines)

        threshold = compute_threshold(total_lines, settings.threshold)

        filtered = AssociationFilter(
            p_threshold=threshold.p_threshold,
            sample_count=settings.sample_count,
        ).filter(settings.association_path)
        significant = filtered.records

        if not significant:
            raise NoSignalFoundError(
                f"No signal snps found in {settings.association_path} "
                f"at p <= {threshold.p_threshold:e}"
            )

        self.logger.info("The number of signal snps found is %d", len(significant))
        self.stdout.write(format_summary(significant))
        self.stdout.flush()

        self.logger.info("getting the annotation of signal snps from SnpEff annotation file ...")
        joined = AnnotationJoiner(significant).join(
            settings.annotation_path,
            settings.output_path,
        )
        self.logger.info("The result file is %s", joined.output_path)

        return SignalScanReport(
            total_lines=total_lines,
            log_threshold=threshold.log_threshold,
            p_threshold=threshold.p_threshold,
            skipped_lines=filtered.skipped_lines,
            rows_written=joined.rows_written,
            output_path=joined.output_path,
            significant=significant,
        )
