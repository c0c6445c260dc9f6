from pathlib import Path
from typing import Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from edci.config.weight_config import Thresholds


STATUS_COLORS = {
    "normal": "#16A34A",
    "warning": "#CA8A04",
    "critical": "#DC2626",
}


def plot_edci_trend(
    series: List[Dict],
    output_path,
    thresholds: Thresholds = Thresholds(),
    title: str = "",
):
    """
    Line chart of an EDCI series with the tier thresholds drawn in.

    `series` items need `time`, `edci` and `status` keys (the shape
    produced by generate_trend_data). Returns None for an empty series.
    """
    df = pd.DataFrame(series)
    if df.empty:
        return None

    df["time"] = pd.to_datetime(df["time"], errors="coerce")
    df = df.dropna(subset=["time"]).sort_values("time")

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.plot(df["time"], df["edci"], color="#2563EB", linewidth=2)
    ax.scatter(
        df["time"],
        df["edci"],
        c=[STATUS_COLORS.get(s, "#6B7280") for s in df["status"]],
        zorder=3,
        s=18,
    )

    ax.axhline(thresholds.normal, color=STATUS_COLORS["warning"], linestyle="--", linewidth=1,
               label=f"Warning ≥ {thresholds.normal:g}")
    ax.axhline(thresholds.warning, color=STATUS_COLORS["critical"], linestyle="--", linewidth=1,
               label=f"Critical ≥ {thresholds.warning:g}")

    ax.set_ylabel("EDCI")
    ax.set_title(title or "EDCI Trend")
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    ax.legend(loc="upper left", fontsize=8)

    fig.autofmt_xdate()
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return out
