"""
Score a snapshot of hospitals under a single configuration.

The WeightConfig is taken once per batch and is frozen, so every
hospital in one displayed snapshot is classified with the same weights
and thresholds.
"""

from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from edci.acquisition.records import HospitalRecord, record_to_dict
from edci.config.weight_config import WeightConfig
from edci.core.calculator import compute_edci, compute_legacy_edci
from edci.core.models import EDCIResult
from edci.core.validator import validate_inputs


@dataclass(frozen=True)
class ScoredHospital:
    record: HospitalRecord
    result: EDCIResult

    @property
    def hospital_code(self) -> str:
        return self.record.hospital_code

    @property
    def status(self) -> str:
        return self.result.status.value

    def to_row(self) -> dict:
        row = record_to_dict(self.record)
        row.update(self.result.to_dict())
        return row


def score_record(
    record: HospitalRecord,
    config: WeightConfig,
    validate: bool = False,
    legacy: bool = False,
) -> ScoredHospital:
    if validate:
        validate_inputs(record.severity, record.staffing, record.flow, config)

    if legacy:
        result = compute_legacy_edci(record.severity, record.staffing, config)
    else:
        result = compute_edci(record.severity, record.staffing, record.flow, config)

    return ScoredHospital(record=record, result=result)


def score_records(
    records: Iterable[HospitalRecord],
    config: WeightConfig,
    validate: bool = False,
    legacy: bool = False,
) -> List[ScoredHospital]:
    return [
        score_record(record, config, validate=validate, legacy=legacy)
        for record in records
    ]


SCORED_COLUMNS = [
    "hospital_code",
    "hospital_name",
    "report_datetime",
    "total_patients",
    "level1",
    "level2",
    "level3",
    "level4",
    "level5",
    "attending_physicians",
    "resident_physicians",
    "nurses",
    "waiting_for_admission",
    "over_stay_hours_24",
    "doctor_weighted_load",
    "effective_doctor_fte",
    "adjusted_pbr",
    "nurse_weighted_load",
    "nbr",
    "edci",
    "status",
    "latitude",
    "longitude",
]


def to_frame(scored: Iterable[ScoredHospital]) -> pd.DataFrame:
    rows = [item.to_row() for item in scored]
    return pd.DataFrame(rows, columns=SCORED_COLUMNS)
