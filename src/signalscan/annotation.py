"""Join significant SNPs against a snpEff annotation table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from signalscan.config import REPORT_HEADER, TEXT_ENCODING
from signalscan.errors import ScanIOError
from signalscan.models import AnnotationRow, SignificantSet, SnpRecord

_LOGGER = logging.getLogger(__name__)

COMMENT_TOKEN = "##"

# Zero-based token positions in a VCF-like annotation line:
# CHROM POS ID REF ALT QUAL FILTER INFO
CHROMOSOME_FIELD = 0
POSITION_FIELD = 1
SNP_ID_FIELD = 2
REF_FIELD = 3
ALT_FIELD = 4
ANNOTATION_FIELD = 7
MIN_ANNOTATION_FIELDS = ANNOTATION_FIELD + 1


@dataclass
class JoinResult:
    """Summary of one annotation join pass."""

    rows_written: int
    annotation_lines: int
    comment_lines: int
    skipped_lines: int
    output_path: Path


def is_comment_line(line: str) -> bool:
    return COMMENT_TOKEN in line


def parse_annotation_line(line: str) -> AnnotationRow | None:
    """Tokenize one annotation line; ``None`` for short or non-numeric-position lines."""

    tokens = line.split()
    if len(tokens) < MIN_ANNOTATION_FIELDS:
        return None

    try:
        position = int(tokens[POSITION_FIELD])
    except ValueError:
        return None

    return AnnotationRow(
        chromosome=tokens[CHROMOSOME_FIELD],
        position=position,
        snp_id=tokens[SNP_ID_FIELD],
        ref=tokens[REF_FIELD],
        alt=tokens[ALT_FIELD],
        annotation=tokens[ANNOTATION_FIELD],
    )


def format_report_line(record: SnpRecord, row: AnnotationRow) -> str:
    """Render one report row. The chromosome comes from the association record."""

    return (
        f"{record.chromosome}\t{row.position}\t{row.snp_id}\t{row.ref}\t{row.alt}\t"
        f"{record.pve:f}\t{record.p_wald:e}\t{record.log_p_value:f}\t{row.annotation}\n"
    )


class AnnotationJoiner:
    """Stream an annotation file and emit one report row per identifier match.

    Lookups scan the significant set linearly, so every duplicate identifier
    in the set produces its own row, in set order.
    """

    def __init__(
        self,
        significant: SignificantSet,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.significant = significant
        self.logger = logger or _LOGGER

    def matches(self, snp_id: str) -> list[SnpRecord]:
        return [record for record in self.significant if record.snp_id == snp_id]

    def join(self, annotation_path: str | Path, output_path: str | Path) -> JoinResult:
        """Write the joined report to ``output_path``.

        The partial report is removed if the join fails after the output file
        has been created.
        """

        annotation_path = Path(annotation_path)
        output_path = Path(output_path)

        try:
            reader = annotation_path.open("r", encoding=TEXT_ENCODING)
        except OSError as exc:
            raise ScanIOError(f"Failed to open file {annotation_path}: {exc}") from exc

        with reader:
            try:
                writer = output_path.open("w", encoding=TEXT_ENCODING)
            except OSError as exc:
                raise ScanIOError(f"Failed to open file {output_path}: {exc}") from exc

            try:
                with writer:
                    result = self._stream(reader, writer, output_path)
            except (OSError, UnicodeDecodeError) as exc:
                output_path.unlink(missing_ok=True)
                raise ScanIOError(
                    f"Failed to join {annotation_path} into {output_path}: {exc}"
                ) from exc

        return result

    def _stream(self, reader: TextIO, writer: TextIO, output_path: Path) -> JoinResult:
        rows_written = 0
        annotation_lines = 0
        comment_lines = 0
        skipped_lines = 0

        writer.write(REPORT_HEADER + "\n")
        for line in reader:
            if is_comment_line(line):
                comment_lines += 1
                continue

            row = parse_annotation_line(line)
            if row is None:
                skipped_lines += 1
                continue

            annotation_lines += 1
            for record in self.matches(row.snp_id):
                writer.write(format_report_line(record, row))
                rows_written += 1

        self.logger.debug(
            "Annotation join: %d data lines, %d comment lines, %d skipped, %d rows written",
            annotation_lines,
            comment_lines,
            skipped_lines,
            rows_written,
        )
        return JoinResult(
            rows_written=rows_written,
            annotation_lines=annotation_lines,
            comment_lines=comment_lines,
            skipped_lines=skipped_lines,
            output_path=output_path,
        )


def join_annotations(
    path: str | Path,
    significant: SignificantSet,
    output_path: str | Path,
    logger: logging.Logger | None = None,
) -> int:
    """Join ``significant`` against the annotation file and return rows written."""

    return AnnotationJoiner(significant, logger=logger).join(path, output_path).rows_written
