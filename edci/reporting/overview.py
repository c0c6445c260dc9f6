from typing import Any, Dict, Iterable

from edci.core.calculator import round_metric
from edci.core.models import EDCIStatus
from edci.scoring.batch import ScoredHospital


def status_overview(scored: Iterable[ScoredHospital]) -> Dict[str, Any]:
    """
    Dashboard headline figures for one snapshot.
    """
    scored = list(scored)

    counts = {status.value: 0 for status in EDCIStatus}
    for item in scored:
        counts[item.status] += 1

    total_patients = sum(item.record.patient_total for item in scored)

    if scored:
        average = round_metric(sum(item.result.edci for item in scored) / len(scored))
    else:
        average = 0.0

    return {
        "hospitals": len(scored),
        "normal": counts[EDCIStatus.NORMAL.value],
        "warning": counts[EDCIStatus.WARNING.value],
        "critical": counts[EDCIStatus.CRITICAL.value],
        "total_patients": total_patients,
        "average_edci": average,
    }
