"""
Per-hospital census records and the layouts they arrive in.

Upstream payloads come in two shapes:

    {"bodyDetails": [{"hospitaL_CODE": ..., "patienT_LVL1": ...}, ...]}
    [{"hospitalCode": ..., "patientLvl1": ...}, ...]

Tabular census files use snake_case columns (see CENSUS_COLUMNS).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
from dateutil import parser as date_parser

from edci.acquisition.hospitals import get_hospital_by_code
from edci.core.errors import InvalidPayloadError, UpstreamError
from edci.core.models import FlowCounts, SeverityCounts, StaffingCounts


# =====================================================
# RECORD
# =====================================================

@dataclass(frozen=True)
class HospitalRecord:
    hospital_code: str
    hospital_name: str
    severity: SeverityCounts
    staffing: StaffingCounts
    flow: FlowCounts = field(default_factory=FlowCounts)
    report_datetime: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    total_patients: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def patient_total(self) -> int:
        if self.total_patients is not None:
            return self.total_patients
        return self.severity.total


# =====================================================
# FIELD MAPS
# =====================================================

UPSTREAM_FIELDS = {
    "hospital_code": "hospitaL_CODE",
    "hospital_name": "hospitalNickName",
    "total_patients": "patientS_TN",
    "level1": "patienT_LVL1",
    "level2": "patienT_LVL2",
    "level3": "patienT_LVL3",
    "level4": "patienT_LVL4",
    "level5": "patienT_LVL5",
    "attending_physicians": "attphysiciaN_NUM",
    "resident_physicians": "resiphysiciaN_NUM",
    "nurses": "nursE_NUM",
    "waiting_for_admission": "waitinG_ADMISSION_NUM",
    "over_stay_hours_24": "oveR_24HOUR_NUM",
}

LEGACY_FIELDS = {
    "hospital_code": "hospitalCode",
    "hospital_name": "hospitalName",
    "report_datetime": "reportDatetime",
    "total_patients": "patientTn",
    "level1": "patientLvl1",
    "level2": "patientLvl2",
    "level3": "patientLvl3",
    "level4": "patientLvl4",
    "level5": "patientLvl5",
    "attending_physicians": "attphysicianNum",
    "resident_physicians": "resiphysicianNum",
    "nurses": "nurseNum",
    "waiting_for_admission": "waitingAdmissionNum",
    "over_stay_hours_24": "over24HourNum",
    "latitude": "latitude",
    "longitude": "longitude",
}

CENSUS_COLUMNS = [
    "hospital_code",
    "hospital_name",
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
]

REQUIRED_CENSUS_COLUMNS = CENSUS_COLUMNS[:9]


# =====================================================
# HELPERS
# =====================================================

def _count(item: Mapping[str, Any], key: str) -> int:
    value = item.get(key)
    if value is None:
        return 0
    if isinstance(value, float) and math.isnan(value):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidPayloadError(f"Field {key!r} is not a count: {value!r}") from None


def _optional_float(item: Mapping[str, Any], key: str) -> Optional[float]:
    value = item.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidPayloadError(f"Field {key!r} is not a coordinate: {value!r}") from None


def _timestamp(value: Any, default: datetime) -> datetime:
    if not value:
        return default
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.isoparse(str(value))
    except ValueError:
        raise InvalidPayloadError(f"Unreadable report datetime: {value!r}") from None


def _build_record(
    item: Mapping[str, Any],
    fields: Mapping[str, str],
    fetched_at: datetime,
) -> HospitalRecord:
    if not isinstance(item, Mapping):
        raise InvalidPayloadError(f"Hospital entry must be an object, got {type(item).__name__}")

    code = str(item.get(fields["hospital_code"]) or "")
    name = str(item.get(fields["hospital_name"]) or "")

    total_key = fields.get("total_patients")
    total = _count(item, total_key) if item.get(total_key) is not None else None

    location = get_hospital_by_code(code)
    latitude = _optional_float(item, fields["latitude"]) if "latitude" in fields else None
    longitude = _optional_float(item, fields["longitude"]) if "longitude" in fields else None
    if location and latitude is None and longitude is None:
        latitude, longitude = location.latitude, location.longitude

    return HospitalRecord(
        hospital_code=code,
        hospital_name=name,
        severity=SeverityCounts(
            level1=_count(item, fields["level1"]),
            level2=_count(item, fields["level2"]),
            level3=_count(item, fields["level3"]),
            level4=_count(item, fields["level4"]),
            level5=_count(item, fields["level5"]),
        ),
        staffing=StaffingCounts(
            attending_physicians=_count(item, fields["attending_physicians"]),
            resident_physicians=_count(item, fields["resident_physicians"]),
            nurses=_count(item, fields["nurses"]),
        ),
        flow=FlowCounts(
            waiting_for_admission=_count(item, fields["waiting_for_admission"]),
            over_stay_hours_24=_count(item, fields["over_stay_hours_24"]),
        ),
        report_datetime=_timestamp(
            item.get(fields["report_datetime"]) if "report_datetime" in fields else None,
            fetched_at,
        ),
        total_patients=total,
        latitude=latitude,
        longitude=longitude,
    )


# =====================================================
# PUBLIC PARSERS
# =====================================================

def parse_api_payload(data: Any, fetched_at: Optional[datetime] = None) -> List[HospitalRecord]:
    """
    Turn a decoded upstream JSON body into HospitalRecords.

    Missing or null counts become 0. An upstream `error` field raises
    UpstreamError; an unknown layout raises InvalidPayloadError.
    """
    fetched_at = fetched_at or datetime.now(timezone.utc)

    if isinstance(data, Mapping):
        if data.get("error"):
            raise UpstreamError(str(data["error"]))

        details = data.get("bodyDetails")
        if isinstance(details, list):
            return [_build_record(item, UPSTREAM_FIELDS, fetched_at) for item in details]

    if isinstance(data, list):
        return [_build_record(item, LEGACY_FIELDS, fetched_at) for item in data]

    raise InvalidPayloadError("Invalid API response format")


def records_from_frame(df: pd.DataFrame, fetched_at: Optional[datetime] = None) -> List[HospitalRecord]:
    """
    Read a census table (one row per hospital) into HospitalRecords.
    """
    missing = [col for col in REQUIRED_CENSUS_COLUMNS if col not in df.columns]
    if missing:
        raise InvalidPayloadError(f"Census file is missing columns: {', '.join(missing)}")

    fetched_at = fetched_at or datetime.now(timezone.utc)
    fields = {col: col for col in CENSUS_COLUMNS}
    fields.update({
        "report_datetime": "report_datetime",
        "total_patients": "total_patients",
        "latitude": "latitude",
        "longitude": "longitude",
    })

    frame = df.astype(object).where(pd.notna(df), None)
    return [
        _build_record(row, fields, fetched_at)
        for row in frame.to_dict(orient="records")
    ]


def record_to_dict(record: HospitalRecord) -> Dict[str, Any]:
    return {
        "hospital_code": record.hospital_code,
        "hospital_name": record.hospital_name,
        "report_datetime": record.report_datetime.isoformat(),
        "total_patients": record.patient_total,
        "level1": record.severity.level1,
        "level2": record.severity.level2,
        "level3": record.severity.level3,
        "level4": record.severity.level4,
        "level5": record.severity.level5,
        "attending_physicians": record.staffing.attending_physicians,
        "resident_physicians": record.staffing.resident_physicians,
        "nurses": record.staffing.nurses,
        "waiting_for_admission": record.flow.waiting_for_admission,
        "over_stay_hours_24": record.flow.over_stay_hours_24,
        "latitude": record.latitude,
        "longitude": record.longitude,
    }
