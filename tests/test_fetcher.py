from edci.acquisition.fetcher import (
    SOURCE_API,
    SOURCE_MOCK,
    check_api_connection,
    fetch_hospital_data,
)
from edci.acquisition.hospitals import HOSPITALS
from edci.acquisition.records import parse_api_payload
from edci.config.settings import ApiSettings
from edci.core.errors import UpstreamError

CONFIGURED = ApiSettings(
    base_url="http://upstream.local",
    endpoint="/api/dash",
    retry_count=3,
    backoff_seconds=1.0,
)

PAYLOAD = [{"hospitalCode": "H001", "hospitalName": "Linkou", "patientLvl1": 4}]


class FlakyClient:
    """Fails a fixed number of times before answering."""

    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0

    def fetch_records(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise UpstreamError(f"API request failed: 503 (call {self.calls})")
        return parse_api_payload(PAYLOAD)


def test_unconfigured_api_uses_mock_data():
    result = fetch_hospital_data(ApiSettings(), mock_seed=1)

    assert result.source == SOURCE_MOCK
    assert result.error is None
    assert not result.is_fallback
    assert len(result.records) == len(HOSPITALS)


def test_success_first_time():
    client = FlakyClient(failures=0)
    sleeps = []

    result = fetch_hospital_data(CONFIGURED, client=client, sleep=sleeps.append)

    assert result.source == SOURCE_API
    assert [r.hospital_code for r in result.records] == ["H001"]
    assert client.calls == 1
    assert sleeps == []


def test_recovers_within_retry_budget():
    client = FlakyClient(failures=2)
    sleeps = []

    result = fetch_hospital_data(CONFIGURED, client=client, sleep=sleeps.append)

    assert result.source == SOURCE_API
    assert client.calls == 3
    assert sleeps == [1.0, 2.0]


def test_falls_back_to_mock_after_retries():
    client = FlakyClient(failures=100)
    sleeps = []

    result = fetch_hospital_data(CONFIGURED, client=client, mock_seed=2, sleep=sleeps.append)

    assert client.calls == 4  # first attempt + 3 retries
    assert sleeps == [1.0, 2.0, 3.0]
    assert result.source == SOURCE_MOCK
    assert result.is_fallback
    assert "call 4" in result.error
    assert len(result.records) == len(HOSPITALS)


def test_zero_retries_means_single_attempt():
    client = FlakyClient(failures=100)
    settings = ApiSettings(base_url="http://upstream.local", endpoint="/api", retry_count=0)

    result = fetch_hospital_data(settings, client=client, sleep=lambda _: None)

    assert client.calls == 1
    assert result.source == SOURCE_MOCK


def test_check_api_connection_reports_success_and_failure():
    ok = check_api_connection(CONFIGURED, client=FlakyClient(failures=0))
    assert ok["success"] is True
    assert len(ok["data"]) == 1

    failed = check_api_connection(CONFIGURED, client=FlakyClient(failures=1))
    assert failed["success"] is False
    assert failed["data"] is None


def test_check_api_connection_without_configuration():
    status = check_api_connection(ApiSettings())
    assert status["success"] is False
    assert "not configured" in status["message"]


class BadCoordinateClient:
    """Answers with a coordinate that is not a number."""

    def __init__(self):
        self.calls = 0

    def fetch_records(self):
        self.calls += 1
        return parse_api_payload([{"hospitalCode": "H001", "latitude": "n/a"}])


def test_unreadable_coordinates_fall_back_to_mock():
    client = BadCoordinateClient()

    result = fetch_hospital_data(CONFIGURED, client=client, mock_seed=3, sleep=lambda _: None)

    assert client.calls == 4
    assert result.source == SOURCE_MOCK
    assert "latitude" in result.error
    assert len(result.records) == len(HOSPITALS)
