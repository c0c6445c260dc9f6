from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from edci.access.allow_list import filter_hospitals, find_user, load_users
from edci.acquisition.records import records_from_frame
from edci.config.loader import load_weight_config
from edci.reporting.export import export_results
from edci.reporting.overview import status_overview
from edci.scoring.batch import score_records
from edci.utils.logger import get_logger

log = get_logger("batch-runner")

SUPPORTED_EXT = (".csv", ".xlsx")


def read_census_file(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".xlsx":
        return pd.read_excel(path, engine="openpyxl")
    raise ValueError(f"Unsupported census file type: {path.suffix}")


def run_dir_for(output_root, now: Optional[datetime] = None) -> Path:
    now = now or datetime.now(timezone.utc)
    return Path(output_root) / now.strftime("%Y-%m-%d_%H-%M-%S")


# =====================================================
# SCORE A SINGLE CENSUS FILE
# =====================================================

def score_census_file(
    file_path,
    config: Dict[str, Any],
    run_dir: Path,
    fmt: Optional[str] = None,
    legacy: bool = False,
    username: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Read a census snapshot, score every hospital, export the result.

    Returns:
        {
            "file": <name>,
            "export": <path>,
            "overview": <status overview dict>,
        }
    """
    src = Path(file_path)
    log.info("Processing file: %s", src.name)

    # -------------------------------------------------
    # 1. Snapshot configuration for this file
    # -------------------------------------------------
    weight_config = load_weight_config(config)
    validate = bool(config.get("edci", {}).get("validate", False))

    # -------------------------------------------------
    # 2. Read + score
    # -------------------------------------------------
    records = records_from_frame(read_census_file(src))
    scored = score_records(records, weight_config, validate=validate, legacy=legacy)

    if username is not None:
        user = find_user(load_users(config.get("users", [])), username)
        scored = filter_hospitals(scored, user)

    # -------------------------------------------------
    # 3. Export
    # -------------------------------------------------
    fmt = fmt or config.get("export", {}).get("format", "csv")
    run_dir = Path(run_dir)
    export_path = export_results(scored, run_dir / f"{src.stem}_edci.{fmt}", fmt=fmt)

    overview = status_overview(scored)
    log.info(
        "Scored %d hospitals from %s (normal=%d warning=%d critical=%d)",
        overview["hospitals"],
        src.name,
        overview["normal"],
        overview["warning"],
        overview["critical"],
    )

    return {
        "file": src.name,
        "export": str(export_path),
        "overview": overview,
    }
