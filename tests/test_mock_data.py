from datetime import datetime, timedelta, timezone

from edci.acquisition.hospitals import HOSPITALS, get_hospital_by_code
from edci.acquisition.mock_data import (
    MOCK_RANGES,
    generate_mock_hospital_data,
    generate_trend_data,
)
from edci.config.weight_config import Thresholds
from edci.core.calculator import classify_status

NOW = datetime(2025, 7, 21, 12, 0, tzinfo=timezone.utc)


def test_one_record_per_registered_hospital():
    records = generate_mock_hospital_data(seed=1, now=NOW)
    assert [r.hospital_code for r in records] == [h.code for h in HOSPITALS]
    assert all(r.report_datetime == NOW for r in records)


def test_mock_data_is_seeded():
    a = generate_mock_hospital_data(seed=7, now=NOW)
    b = generate_mock_hospital_data(seed=7, now=NOW)
    assert a == b


def test_mock_counts_stay_in_range():
    for record in generate_mock_hospital_data(seed=3, now=NOW):
        values = {
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
        }
        for name, value in values.items():
            low, high = MOCK_RANGES[name]
            assert low <= value <= high, name
        assert record.patient_total == record.severity.total


def test_trend_series_is_hourly_and_classified():
    thresholds = Thresholds(normal=15.0, warning=25.0)
    series = generate_trend_data("H001", thresholds=thresholds, seed=5, now=NOW)

    assert len(series) == 24
    assert series[0]["time"] == NOW - timedelta(hours=23)
    assert series[-1]["time"] == NOW
    for point in series:
        assert 5.0 <= point["edci"] <= 35.0
        assert point["status"] == classify_status(point["edci"], thresholds).value


def test_hospital_lookup():
    assert get_hospital_by_code("H003").code == "H003"
    assert get_hospital_by_code("X999") is None
