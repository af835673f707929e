"""Significance threshold derivation for association scans."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from signalscan.config import DEFAULT_ALPHA, TEXT_ENCODING, UNSET_THRESHOLD
from signalscan.errors import InvalidInputError, ScanIOError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdResult:
    """Cutoff used to decide which association lines are significant."""

    total_records: int
    log_threshold: float
    p_threshold: float
    automatic: bool


def count_lines(path: str | Path) -> int:
    """Return the number of physical lines in ``path``, header included."""

    input_path = Path(path)
    try:
        with input_path.open("r", encoding=TEXT_ENCODING) as handle:
            return sum(1 for _ in handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise ScanIOError(f"Failed to read file {input_path}: {exc}") from exc


def compute_threshold(
    total_records: int,
    user_threshold: float = UNSET_THRESHOLD,
    *,
    alpha: float = DEFAULT_ALPHA,
    logger: logging.Logger | None = None,
) -> ThresholdResult:
    """Derive the ``-log10`` and raw p-value cutoffs.

    An unset ``user_threshold`` (``0.0``) selects a Bonferroni cutoff of
    ``alpha / total_records``. Any other value is taken as the ``-log10``
    threshold directly.
    """

    log = logger or _LOGGER

    if not math.isfinite(user_threshold) or user_threshold < 0:
        raise InvalidInputError(
            f"Threshold must be a finite, non-negative -log10 p-value, got {user_threshold}"
        )

    automatic = user_threshold == UNSET_THRESHOLD
    if automatic:
        if total_records <= 0:
            raise InvalidInputError(
                "Cannot derive a threshold from an association file with no lines"
            )
        log_threshold = -math.log10(alpha / total_records)
        log.info(
            "The threshold (%s / total snps) for p-value (-log10) is: %f",
            alpha,
            log_threshold,
        )
    else:
        log_threshold = float(user_threshold)
        log.info("The threshold for p-value (-log10) is: %f", log_threshold)

    return ThresholdResult(
        total_records=total_records,
        log_threshold=log_threshold,
        p_threshold=10 ** (-log_threshold),
        automatic=automatic,
    )
