import math
from numbers import Integral, Real
from typing import Optional

from edci.config.weight_config import WeightConfig
from edci.core.errors import InvalidInputError
from edci.core.models import FlowCounts, SeverityCounts, StaffingCounts


def _check_count(field: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidInputError(field, value, "count must be an integer")
    if value < 0:
        raise InvalidInputError(field, value, "count must be non-negative")


def _check_weight(field: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(field, value, "weight must be a real number")
    if not math.isfinite(value):
        raise InvalidInputError(field, value, "weight must be finite")
    if value < 0:
        raise InvalidInputError(field, value, "weight must be non-negative")


def validate_inputs(
    severity: SeverityCounts,
    staffing: StaffingCounts,
    flow: Optional[FlowCounts] = None,
    config: Optional[WeightConfig] = None,
) -> None:
    """
    Opt-in input check for callers that do not trust their source.

    compute_edci never calls this itself. Raises InvalidInputError on the
    first offending field.
    """
    for level, count in enumerate(severity.as_tuple(), start=1):
        _check_count(f"severity.level{level}", count)

    _check_count("staffing.attending_physicians", staffing.attending_physicians)
    _check_count("staffing.resident_physicians", staffing.resident_physicians)
    _check_count("staffing.nurses", staffing.nurses)

    if flow is not None:
        _check_count("flow.waiting_for_admission", flow.waiting_for_admission)
        _check_count("flow.over_stay_hours_24", flow.over_stay_hours_24)

    if config is None:
        return

    for name, weights in (("doctor_weights", config.doctor_weights),
                          ("nurse_weights", config.nurse_weights)):
        for key, value in weights.as_dict().items():
            _check_weight(f"{name}.{key}", value)

    _check_weight("resident_fte_factor", config.resident_fte_factor)

    blend = config.blend_weights
    _check_weight("blend_weights.pbr_weight", blend.pbr_weight)
    _check_weight("blend_weights.nbr_weight", blend.nbr_weight)
    _check_weight("blend_weights.waiting_weight", blend.waiting_weight)
    _check_weight("blend_weights.overstay_weight", blend.overstay_weight)

    thresholds = config.thresholds
    for name in ("normal", "warning"):
        value = getattr(thresholds, name)
        if not math.isfinite(value):
            raise InvalidInputError(f"thresholds.{name}", value, "threshold must be finite")
    if thresholds.normal >= thresholds.warning:
        raise InvalidInputError(
            "thresholds.normal",
            thresholds.normal,
            f"must be below thresholds.warning ({thresholds.warning})",
        )


def blend_weight_drift(config: WeightConfig) -> float:
    """Signed distance of the blend weights' sum from 1.0."""
    return config.blend_weights.total - 1.0
