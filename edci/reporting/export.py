from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from edci.scoring.batch import to_frame, ScoredHospital
from edci.utils.logger import get_logger

log = get_logger("export")

EXPORT_FORMATS = ("csv", "xlsx", "pdf")

PDF_COLUMNS = [
    "hospital_code",
    "hospital_name",
    "total_patients",
    "adjusted_pbr",
    "nbr",
    "waiting_for_admission",
    "over_stay_hours_24",
    "edci",
    "status",
]

STATUS_COLORS = {
    "normal": HexColor("#DCFCE7"),
    "warning": HexColor("#FEF9C3"),
    "critical": HexColor("#FEE2E2"),
}

HEADER_BG = HexColor("#E5E7EB")
BORDER = HexColor("#9CA3AF")


# =====================================================
# FRAME PREPARATION
# =====================================================

def export_frame(
    scored: Iterable[ScoredHospital],
    hospital_codes: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    df = to_frame(scored)

    if hospital_codes is not None:
        df = df[df["hospital_code"].isin(list(hospital_codes))]

    return df.reset_index(drop=True)


# =====================================================
# WRITERS
# =====================================================

def _write_pdf(df: pd.DataFrame, output_path: Path, title: str) -> None:
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        rightMargin=30,
        leftMargin=30,
        topMargin=30,
        bottomMargin=30,
    )
    styles = getSampleStyleSheet()

    rows: List[list] = [PDF_COLUMNS]
    for record in df[PDF_COLUMNS].to_dict(orient="records"):
        rows.append(["" if pd.isna(v) else str(v) for v in record.values()])

    table = Table(rows, repeatRows=1)
    style = [
        ("GRID", (0, 0), (-1, -1), 0.5, BORDER),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("PADDING", (0, 0), (-1, -1), 4),
    ]
    status_idx = PDF_COLUMNS.index("status")
    for row_idx, row in enumerate(rows[1:], start=1):
        color = STATUS_COLORS.get(row[status_idx])
        if color is not None:
            style.append(("BACKGROUND", (status_idx, row_idx), (status_idx, row_idx), color))
    table.setStyle(TableStyle(style))

    doc.build([
        Paragraph(title, styles["Title"]),
        Spacer(1, 12),
        table,
    ])


def export_results(
    scored: Iterable[ScoredHospital],
    output_path,
    fmt: str = "csv",
    hospital_codes: Optional[Iterable[str]] = None,
    title: str = "EDCI Hospital Snapshot",
) -> Path:
    """
    Write scored hospitals to CSV, Excel or PDF.

    CSV is written with a BOM so spreadsheet tools pick up UTF-8.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = export_frame(scored, hospital_codes)

    if fmt == "csv":
        df.to_csv(output_path, index=False, encoding="utf-8-sig")
    elif fmt == "xlsx":
        out = df.copy()
        out["report_datetime"] = out["report_datetime"].astype(str)
        out.to_excel(output_path, index=False, sheet_name="EDCI", engine="openpyxl")
    else:
        _write_pdf(df, output_path, title)

    log.info("Exported %d rows to %s", len(df), output_path)
    return output_path
