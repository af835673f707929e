"""Significant SNP scanning for GEMMA association output.

This package filters association results by a Bonferroni or user supplied
threshold and joins the surviving SNPs against snpEff annotations.
"""

from .annotation import AnnotationJoiner, JoinResult, join_annotations
from .association import AssociationFilter, FilterResult, compute_pve, filter_associations
from .config import REPORT_HEADER, ScanSettings
from .errors import (
    InvalidInputError,
    NoSignalFoundError,
    ScanIOError,
    SignalScanError,
)
from .models import AnnotationRow, SignificantSet, SnpRecord
from .pipeline import SignalScanPipeline, SignalScanReport
from .threshold import ThresholdResult, compute_threshold, count_lines

__all__ = [
    "AnnotationJoiner",
    "AnnotationRow",
    "AssociationFilter",
    "FilterResult",
    "InvalidInputError",
    "JoinResult",
    "NoSignalFoundError",
    "REPORT_HEADER",
    "ScanIOError",
    "ScanSettings",
    "SignalScanError",
    "SignalScanPipeline",
    "SignalScanReport",
    "SignificantSet",
    "SnpRecord",
    "ThresholdResult",
    "compute_pve",
    "compute_threshold",
    "count_lines",
    "filter_associations",
    "join_annotations",
]
