"""
EDCI calculator.

Pure, stateless scoring of one hospital's census, staffing and patient
flow into an Emergency Department Congestion Index.

    doctor load   = sum(census[l] * doctor_weights[l])
    doctor FTE    = attending + resident * resident_fte_factor
    adjusted PBR  = doctor load / doctor FTE          (0 when FTE is 0)
    nurse load    = sum(census[l] * nurse_weights[l])
    NBR           = nurse load / nurses               (0 when no nurses)
    EDCI          = PBR * w_pbr + NBR * w_nbr
                    + waiting * w_waiting + overstay * w_overstay

The blend uses the unrounded PBR and NBR. Reported EDCI, PBR, NBR and
nurse load are each rounded half away from zero to `precision` places,
and the status tier is taken from the rounded EDCI.
"""

from dataclasses import replace
from decimal import Context, Decimal, ROUND_HALF_UP
import math

from edci.config.weight_config import DEFAULT_WEIGHT_CONFIG, Thresholds, WeightConfig
from edci.core.models import (
    DEFAULT_NURSE_COUNT,
    SEVERITY_LEVELS,
    EDCIResult,
    EDCIStatus,
    FlowCounts,
    SeverityCounts,
    StaffingCounts,
)

_NO_FLOW = FlowCounts(waiting_for_admission=0, over_stay_hours_24=0)


def round_metric(value: float, precision: int = 2) -> float:
    """
    Round half away from zero on the value's shortest decimal form,
    so 2.675 becomes 2.68 rather than binary-float 2.67.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(str(value))
    # Enough digits for the integer part plus the kept decimals
    context = Context(prec=max(exact.adjusted(), 0) + precision + 2)
    quantum = Decimal(1).scaleb(-precision)
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP, context=context))


def classify_status(edci: float, thresholds: Thresholds) -> EDCIStatus:
    if edci < thresholds.normal:
        return EDCIStatus.NORMAL
    if edci < thresholds.warning:
        return EDCIStatus.WARNING
    return EDCIStatus.CRITICAL


def _ratio(numerator: float, denominator: float) -> float:
    # An empty channel exerts no load pressure
    if denominator > 0:
        return numerator / denominator
    return 0.0


def compute_edci(
    severity: SeverityCounts,
    staffing: StaffingCounts,
    flow: FlowCounts,
    config: WeightConfig = DEFAULT_WEIGHT_CONFIG,
) -> EDCIResult:
    doctor_weighted_load = 0.0
    nurse_weighted_load = 0.0
    for level in SEVERITY_LEVELS:
        doctor_weighted_load += severity[level] * config.doctor_weights[level]
    for level in SEVERITY_LEVELS:
        nurse_weighted_load += severity[level] * config.nurse_weights[level]

    effective_doctor_fte = (
        staffing.attending_physicians
        + staffing.resident_physicians * config.resident_fte_factor
    )

    adjusted_pbr = _ratio(doctor_weighted_load, effective_doctor_fte)
    nbr = _ratio(nurse_weighted_load, staffing.nurses)

    blend = config.blend_weights
    edci = (
        adjusted_pbr * blend.pbr_weight
        + nbr * blend.nbr_weight
        + flow.waiting_for_admission * blend.waiting_weight
        + flow.over_stay_hours_24 * blend.overstay_weight
    )

    rounded_edci = round_metric(edci, config.precision)

    return EDCIResult(
        doctor_weighted_load=doctor_weighted_load,
        effective_doctor_fte=effective_doctor_fte,
        adjusted_pbr=round_metric(adjusted_pbr, config.precision),
        nurse_weighted_load=round_metric(nurse_weighted_load, config.precision),
        nbr=round_metric(nbr, config.precision),
        edci=rounded_edci,
        status=classify_status(rounded_edci, config.thresholds),
    )


def compute_legacy_edci(
    severity: SeverityCounts,
    staffing: StaffingCounts,
    config: WeightConfig = DEFAULT_WEIGHT_CONFIG,
) -> EDCIResult:
    """
    Score a record that predates nurse and flow reporting.

    Runs the regular formula with one nurse and no flow counts. The
    single nurse is a historical placeholder kept for compatibility
    with old callers only.
    """
    return compute_edci(
        severity,
        replace(staffing, nurses=DEFAULT_NURSE_COUNT),
        _NO_FLOW,
        config,
    )
