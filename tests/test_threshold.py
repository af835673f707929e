import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from signalscan import InvalidInputError, ScanIOError, compute_threshold, count_lines  # noqa: E402


def test_count_lines_includes_header(tmp_path: Path) -> None:
    path = tmp_path / "run.assoc.txt"
    path.write_text("chr rs p_wald\n1 rs1 0.1\n1 rs2 0.2\n")

    assert count_lines(path) == 3


def test_count_lines_missing_file_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(ScanIOError):
        count_lines(tmp_path / "absent.assoc.txt")


@pytest.mark.parametrize("total_records", [1, 7, 20, 1_000_000])
def test_unset_threshold_is_bonferroni(total_records: int) -> None:
    result = compute_threshold(total_records, 0.0)

    assert result.automatic is True
    assert result.p_threshold == pytest.approx(0.05 / total_records)
    assert result.log_threshold == pytest.approx(-math.log10(0.05 / total_records))


def test_user_threshold_is_used_as_log_value() -> None:
    result = compute_threshold(500, 5.0)

    assert result.automatic is False
    assert result.log_threshold == 5.0
    assert result.p_threshold == pytest.approx(1e-5)


def test_zero_records_with_unset_threshold_is_invalid() -> None:
    with pytest.raises(InvalidInputError):
        compute_threshold(0, 0.0)


def test_negative_threshold_is_invalid() -> None:
    with pytest.raises(InvalidInputError):
        compute_threshold(10, -2.0)


def test_count_lines_undecodable_file_raises_io_error(tmp_path: Path) -> None:
    path = tmp_path / "run.assoc.txt"
    path.write_bytes(b"chr rs p_wald\n1 rs\xff1 0.1\n")

    with pytest.raises(ScanIOError):
        count_lines(path)


@pytest.mark.parametrize("user_threshold", [math.nan, math.inf])
def test_non_finite_threshold_is_invalid(user_threshold: float) -> None:
    with pytest.raises(InvalidInputError):
        compute_threshold(10, user_threshold)
