"""Console summary of significant SNPs."""

from __future__ import annotations

import pandas as pd

from signalscan.models import SignificantSet

SEPARATOR = " -------------  ------------  ------------  ---------"

SUMMARY_COLUMNS: dict[str, str] = {
    "snp_id": "SNP",
    "p_wald": "P-value",
    "pve": "Pve",
    "log_p_value": "-Log",
}


def summary_frame(records: SignificantSet) -> pd.DataFrame:
    """Tabulate records in set order with display column names."""

    frame = pd.DataFrame(
        [record.to_row() for record in records],
        columns=["snp_id", "chromosome", "p_wald", "pve", "log_p_value"],
    )
    return frame[list(SUMMARY_COLUMNS)].rename(columns=SUMMARY_COLUMNS)


def format_summary(records: SignificantSet) -> str:
    """Render the summary table between fixed separator lines."""

    body = summary_frame(records).to_string(
        index=False,
        justify="left",
        formatters={
            "P-value": "{:e}".format,
            "Pve": "{:f}".format,
            "-Log": "{:f}".format,
        },
    )
    header, *rows = body.splitlines()
    return "\n".join([SEPARATOR, header, SEPARATOR, *rows, SEPARATOR]) + "\n"
