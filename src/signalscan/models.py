"""In-memory records passed between the scan stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

SignificantSet = list["SnpRecord"]


@dataclass(frozen=True)
class SnpRecord:
    """One association line that passed the significance threshold.

    ``pve`` and ``log_p_value`` are derived while filtering; the record is
    never modified after it is appended to the significant set.
    """

    snp_id: str
    chromosome: str
    p_wald: float
    pve: float
    log_p_value: float

    def to_row(self) -> dict[str, Any]:
        """Serialize into a plain dict for tabular rendering."""

        return {
            "snp_id": self.snp_id,
            "chromosome": self.chromosome,
            "p_wald": self.p_wald,
            "pve": self.pve,
            "log_p_value": self.log_p_value,
        }


@dataclass(frozen=True)
class AnnotationRow:
    """One parsed annotation data line. Consumed immediately by the joiner."""

    chromosome: str
    position: int
    snp_id: str
    ref: str
    alt: str
    annotation: str
