import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "tests"))
sys.path.insert(0, str(ROOT / "src"))

from gemma_fixtures import annotation_line, write_annotation  # noqa: E402
from signalscan import (  # noqa: E402
    REPORT_HEADER,
    AnnotationJoiner,
    ScanIOError,
    SnpRecord,
    join_annotations,
)
from signalscan.annotation import parse_annotation_line  # noqa: E402

EXPECTED_HEADER = "Chr\tPos\tID\tRef\tAlt\tPve\tP_wald\t-log(10)\tAnn"


def _record(snp_id: str, chromosome: str = "1") -> SnpRecord:
    return SnpRecord(
        snp_id=snp_id,
        chromosome=chromosome,
        p_wald=1e-6,
        pve=0.2,
        log_p_value=6.0,
    )


def test_report_header_constant_is_fixed() -> None:
    assert REPORT_HEADER == EXPECTED_HEADER


def test_join_emits_only_matching_identifiers(tmp_path: Path) -> None:
    annotation = tmp_path / "ann.vcf"
    annotation.write_text(
        "##fileformat=VCFv4.2\n"
        + annotation_line("rs1", chromosome="chr1", position=1500)
        + "\n"
        + annotation_line("rs3", position=2500)
        + "\n"
    )
    output = tmp_path / "out.scanning_signalsnp.txt"

    written = join_annotations(annotation, [_record("rs1"), _record("rs2")], output)

    lines = output.read_text().splitlines()
    assert written == 1
    assert lines[0] == EXPECTED_HEADER
    assert lines[1:] == [
        "1\t1500\trs1\tA\tG\t0.200000\t1.000000e-06\t6.000000\t"
        "ANN=G|missense_variant|MODERATE|GENE1"
    ]


def test_duplicate_significant_records_each_produce_a_row(tmp_path: Path) -> None:
    annotation = write_annotation(tmp_path / "ann.vcf", [annotation_line("rs1")])
    output = tmp_path / "out.txt"

    significant = [_record("rs1", chromosome="1"), _record("rs5"), _record("rs1", chromosome="7")]
    result = AnnotationJoiner(significant).join(annotation, output)

    rows = [line.split("\t") for line in output.read_text().splitlines()[1:]]
    assert result.rows_written == 2
    assert [row[0] for row in rows] == ["1", "7"]


def test_comment_and_column_header_lines_are_not_joined(tmp_path: Path) -> None:
    annotation = write_annotation(
        tmp_path / "ann.vcf",
        [
            annotation_line("rs1"),
            "1\t2000\trs1\tA",
            annotation_line("rs1", info="KEY=##weird"),
        ],
    )
    output = tmp_path / "out.txt"

    result = AnnotationJoiner([_record("rs1")]).join(annotation, output)

    assert result.rows_written == 1
    assert result.comment_lines == 3
    assert result.skipped_lines == 2
    assert result.annotation_lines == 1


def test_header_written_when_nothing_matches(tmp_path: Path) -> None:
    annotation = write_annotation(tmp_path / "ann.vcf", [annotation_line("rs8")])
    output = tmp_path / "out.txt"

    assert join_annotations(annotation, [_record("rs1")], output) == 0
    assert output.read_text() == EXPECTED_HEADER + "\n"


def test_missing_annotation_file_leaves_no_output(tmp_path: Path) -> None:
    output = tmp_path / "out.txt"

    with pytest.raises(ScanIOError):
        join_annotations(tmp_path / "absent.vcf", [_record("rs1")], output)

    assert not output.exists()


def test_unwritable_output_raises_io_error(tmp_path: Path) -> None:
    annotation = write_annotation(tmp_path / "ann.vcf", [annotation_line("rs1")])

    with pytest.raises(ScanIOError):
        join_annotations(annotation, [_record("rs1")], tmp_path / "missing_dir" / "out.txt")


def test_parse_annotation_line_reads_positional_fields() -> None:
    row = parse_annotation_line("chr2\t321\trs4\tC\tT\t.\tPASS\tANN=T|intron_variant\n")

    assert row is not None
    assert row.chromosome == "chr2"
    assert row.position == 321
    assert row.snp_id == "rs4"
    assert row.ref == "C"
    assert row.alt == "T"
    assert row.annotation == "ANN=T|intron_variant"
    assert parse_annotation_line("#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO") is None


def test_read_failure_after_header_removes_partial_report(tmp_path: Path) -> None:
    annotation = tmp_path / "ann.vcf"
    valid_rows = "".join(annotation_line("rs1") + "\n" for _ in range(500))
    annotation.write_bytes(
        valid_rows.encode() + b"1\t2000\trs2\tA\tG\t60\tPASS\tANN=caf\xe9\n"
    )
    output = tmp_path / "out.txt"

    with pytest.raises(ScanIOError):
        join_annotations(annotation, [_record("rs1")], output)

    assert not output.exists()
