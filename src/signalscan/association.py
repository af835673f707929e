"""Streaming filter over GEMMA association output."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

from signalscan.config import TEXT_ENCODING
from signalscan.errors import ScanIOError
from signalscan.models import SignificantSet, SnpRecord

_LOGGER = logging.getLogger(__name__)

HEADER_TOKEN = "p_wald"

# Zero-based token positions in a GEMMA ``.assoc.txt`` line:
# chr rs ps n_miss allele1 allele0 af beta se logl_H1 l_remle p_wald
CHROMOSOME_FIELD = 0
SNP_ID_FIELD = 1
N_MISS_FIELD = 3
ALLELE_FREQUENCY_FIELD = 6
BETA_FIELD = 7
STANDARD_ERROR_FIELD = 8
P_WALD_FIELD = 11
MIN_ASSOCIATION_FIELDS = P_WALD_FIELD + 1


@dataclass(frozen=True)
class AssociationLine:
    """Fields consumed from one association data line."""

    chromosome: str
    snp_id: str
    n_miss: int
    af: float
    beta: float
    se: float
    p_wald: float


@dataclass
class FilterResult:
    """Significant records plus line accounting for one filter pass."""

    records: SignificantSet = field(default_factory=list)
    total_lines: int = 0
    header_lines: int = 0
    skipped_lines: int = 0


def is_header_line(line: str) -> bool:
    """Header detection is a substring match, so it applies to any line."""

    return HEADER_TOKEN in line


def parse_association_line(line: str) -> AssociationLine | None:
    """Tokenize one data line; return ``None`` when required fields are unusable."""

    tokens = line.split()
    if len(tokens) < MIN_ASSOCIATION_FIELDS:
        return None

    try:
        parsed = AssociationLine(
            chromosome=tokens[CHROMOSOME_FIELD],
            snp_id=tokens[SNP_ID_FIELD],
            n_miss=int(tokens[N_MISS_FIELD]),
            af=float(tokens[ALLELE_FREQUENCY_FIELD]),
            beta=float(tokens[BETA_FIELD]),
            se=float(tokens[STANDARD_ERROR_FIELD]),
            p_wald=float(tokens[P_WALD_FIELD]),
        )
    except ValueError:
        return None

    if math.isnan(parsed.p_wald) or parsed.p_wald < 0:
        return None
    return parsed


def compute_pve(beta: float, af: float, se: float, sample_count: int, n_miss: int) -> float:
    """Proportion of phenotypic variance explained by one variant.

    A zero denominator (for example ``af`` of 0 or 1) yields NaN, or a signed
    infinity when only the numerator is non-zero.
    """

    heterozygosity = af * (1 - af)
    explained = 2 * beta * beta * heterozygosity
    residual = se * se * 2 * (sample_count - n_miss) * heterozygosity
    try:
        return explained / (explained + residual)
    except ZeroDivisionError:
        if explained == 0:
            return math.nan
        return math.copysign(math.inf, explained)


def negative_log10(p_value: float) -> float:
    if p_value == 0:
        return math.inf
    return -math.log10(p_value)


class AssociationFilter:
    """Collect association lines whose Wald p-value is within the cutoff."""

    def __init__(
        self,
        *,
        p_threshold: float,
        sample_count: int,
        logger: logging.Logger | None = None,
    ) -> None:
        self.p_threshold = p_threshold
        self.sample_count = sample_count
        self.logger = logger or _LOGGER

    def filter(self, path: str | Path) -> FilterResult:
        input_path = Path(path)
        result = FilterResult()

        try:
            with input_path.open("r", encoding=TEXT_ENCODING) as handle:
                for line_number, line in enumerate(handle, start=1):
                    result.total_lines += 1
                    if is_header_line(line):
                        result.header_lines += 1
                        continue

                    parsed = parse_association_line(line)
                    if parsed is None:
                        result.skipped_lines += 1
                        self.logger.debug(
                            "Skipping malformed association line %d in %s",
                            line_number,
                            input_path,
                        )
                        continue

                    if parsed.p_wald > self.p_threshold:
                        continue

                    result.records.append(self._to_record(parsed))
        except (OSError, UnicodeDecodeError) as exc:
            raise ScanIOError(f"Failed to read file {input_path}: {exc}") from exc

        if result.skipped_lines:
            self.logger.warning(
                "Skipped %d malformed association lines in %s",
                result.skipped_lines,
                input_path,
            )
        return result

    def _to_record(self, parsed: AssociationLine) -> SnpRecord:
        return SnpRecord(
            snp_id=parsed.snp_id,
            chromosome=parsed.chromosome,
            p_wald=parsed.p_wald,
            pve=compute_pve(
                beta=parsed.beta,
                af=parsed.af,
                se=parsed.se,
                sample_count=self.sample_count,
                n_miss=parsed.n_miss,
            ),
            log_p_value=negative_log10(parsed.p_wald),
        )


def filter_associations(
    path: str | Path,
    p_threshold: float,
    sample_count: int,
    logger: logging.Logger | None = None,
) -> SignificantSet:
    """Return significant records from ``path`` in file order."""

    association_filter = AssociationFilter(
        p_threshold=p_threshold,
        sample_count=sample_count,
        logger=logger,
    )
    return association_filter.filter(path).records
