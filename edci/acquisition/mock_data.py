"""
Synthetic census used when the upstream API is unreachable or not
configured, and for demos and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

import numpy as np

from edci.acquisition.hospitals import HOSPITALS, HospitalLocation
from edci.acquisition.records import HospitalRecord
from edci.config.weight_config import Thresholds
from edci.core.calculator import classify_status, round_metric
from edci.core.models import FlowCounts, SeverityCounts, StaffingCounts


# Inclusive (low, high) bounds per generated field
MOCK_RANGES = {
    "level1": (5, 24),
    "level2": (10, 39),
    "level3": (15, 54),
    "level4": (8, 32),
    "level5": (3, 17),
    "attending_physicians": (3, 10),
    "resident_physicians": (5, 16),
    "nurses": (8, 23),
    "waiting_for_admission": (0, 9),
    "over_stay_hours_24": (0, 4),
}

TREND_EDCI_RANGE = (5.0, 35.0)


def _draw(rng: np.random.Generator, name: str) -> int:
    low, high = MOCK_RANGES[name]
    return int(rng.integers(low, high + 1))


def generate_mock_hospital_data(
    hospitals: Sequence[HospitalLocation] = HOSPITALS,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[HospitalRecord]:
    rng = np.random.default_rng(seed)
    now = now or datetime.now(timezone.utc)

    records = []
    for hospital in hospitals:
        severity = SeverityCounts(
            level1=_draw(rng, "level1"),
            level2=_draw(rng, "level2"),
            level3=_draw(rng, "level3"),
            level4=_draw(rng, "level4"),
            level5=_draw(rng, "level5"),
        )
        records.append(
            HospitalRecord(
                hospital_code=hospital.code,
                hospital_name=hospital.name,
                severity=severity,
                staffing=StaffingCounts(
                    attending_physicians=_draw(rng, "attending_physicians"),
                    resident_physicians=_draw(rng, "resident_physicians"),
                    nurses=_draw(rng, "nurses"),
                ),
                flow=FlowCounts(
                    waiting_for_admission=_draw(rng, "waiting_for_admission"),
                    over_stay_hours_24=_draw(rng, "over_stay_hours_24"),
                ),
                report_datetime=now,
                total_patients=severity.total,
                latitude=hospital.latitude,
                longitude=hospital.longitude,
            )
        )

    return records


def generate_trend_data(
    hospital_code: str,
    hours: int = 24,
    thresholds: Thresholds = Thresholds(),
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Dict]:
    """
    Hourly synthetic EDCI history for one hospital, oldest first.
    """
    rng = np.random.default_rng(seed)
    now = now or datetime.now(timezone.utc)
    low, high = TREND_EDCI_RANGE

    series = []
    for offset in range(hours - 1, -1, -1):
        edci = round_metric(float(rng.uniform(low, high)))
        series.append({
            "hospital_code": hospital_code,
            "time": now - timedelta(hours=offset),
            "edci": edci,
            "status": classify_status(edci, thresholds).value,
        })

    return series
