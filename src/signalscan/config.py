"""Run settings and fixed constants for signal SNP scanning."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from signalscan.errors import InvalidInputError

DEFAULT_ALPHA = 0.05
UNSET_THRESHOLD = 0.0
ASSOCIATION_EXTENSION = ".txt"
OUTPUT_SUFFIX = ".scanning_signalsnp.txt"
TEXT_ENCODING = "utf-8"

REPORT_COLUMNS: tuple[str, ...] = (
    "Chr",
    "Pos",
    "ID",
    "Ref",
    "Alt",
    "Pve",
    "P_wald",
    "-log(10)",
    "Ann",
)
REPORT_HEADER = "\t".join(REPORT_COLUMNS)


@dataclass(frozen=True)
class ScanSettings:
    """Resolved inputs for one scan run."""

    association_path: Path
    annotation_path: Path
    sample_count: int
    threshold: float
    prefix: str
    output_dir: Path

    @property
    def output_path(self) -> Path:
        return self.output_dir / f"{self.prefix}{OUTPUT_SUFFIX}"

    @classmethod
    def build(
        cls,
        *,
        association_path: str | Path | None,
        annotation_path: str | Path | None,
        sample_count: int | None,
        threshold: float = UNSET_THRESHOLD,
        prefix: str | None = None,
        output_dir: str | Path | None = None,
    ) -> ScanSettings:
        """Apply defaults for prefix and output directory.

        ``prefix`` defaults to the association file name without its final
        extension and ``output_dir`` to the directory holding it.
        """

        if not association_path or not annotation_path or not sample_count:
            raise InvalidInputError("Please provide all required arguments")

        association = Path(association_path)
        if association.suffix != ASSOCIATION_EXTENSION:
            raise InvalidInputError(
                f"gemma output file must have a {ASSOCIATION_EXTENSION} extension "
                f"(assoc.txt), got {association.name}"
            )

        return cls(
            association_path=association,
            annotation_path=Path(annotation_path),
            sample_count=int(sample_count),
            threshold=float(threshold),
            prefix=prefix or association.stem,
            output_dir=Path(output_dir) if output_dir else association.parent,
        )

    def validate(self) -> None:
        """Check that inputs exist and numeric settings are usable."""

        if self.sample_count <= 0:
            raise InvalidInputError(f"Sample number must be positive, got {self.sample_count}")
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise InvalidInputError(f"Threshold must be finite and non-negative, got {self.threshold}")
        if not self.association_path.is_file():
            raise InvalidInputError(f"{self.association_path} does not exist!")
        if not self.annotation_path.is_file():
            raise InvalidInputError(f"{self.annotation_path} does not exist!")
        if not self.output_dir.is_dir():
            raise InvalidInputError(f"Output path {self.output_dir} does not exist!")
