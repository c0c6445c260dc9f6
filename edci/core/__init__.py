from .calculator import compute_edci, compute_legacy_edci, classify_status, round_metric
from .models import SeverityCounts, StaffingCounts, FlowCounts, EDCIResult, EDCIStatus
from .validator import validate_inputs, blend_weight_drift

__all__ = [
    "compute_edci",
    "compute_legacy_edci",
    "classify_status",
    "round_metric",
    "SeverityCounts",
    "StaffingCounts",
    "FlowCounts",
    "EDCIResult",
    "EDCIStatus",
    "validate_inputs",
    "blend_weight_drift",
]
