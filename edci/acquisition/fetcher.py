"""
Data acquisition with retry and synthetic fallback.

    not configured  ->  synthetic data, no error
    configured      ->  up to 1 + retry_count attempts, linear backoff
    all attempts fail -> synthetic data, error message kept
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from edci.acquisition.client import UpstreamClient
from edci.acquisition.mock_data import generate_mock_hospital_data
from edci.acquisition.records import HospitalRecord
from edci.automation.retry import retry
from edci.config.settings import ApiSettings
from edci.core.errors import AcquisitionError
from edci.utils.logger import get_logger

log = get_logger("fetcher")

SOURCE_API = "api"
SOURCE_MOCK = "mock"


@dataclass
class FetchResult:
    records: List[HospitalRecord]
    source: str
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_MOCK and self.error is not None


def fetch_hospital_data(
    settings: ApiSettings,
    client: Optional[UpstreamClient] = None,
    mock_seed: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    if not settings.is_configured:
        log.info("Using mock data - upstream API not configured")
        return FetchResult(
            records=generate_mock_hospital_data(seed=mock_seed),
            source=SOURCE_MOCK,
        )

    client = client or UpstreamClient(settings)

    fetch = retry(
        times=settings.retry_count + 1,
        delay=settings.backoff_seconds,
        backoff="linear",
        sleep=sleep,
    )(client.fetch_records)

    try:
        records = fetch()
    except AcquisitionError as exc:
        log.warning("API fetch failed after retries, using mock data: %s", exc)
        return FetchResult(
            records=generate_mock_hospital_data(seed=mock_seed),
            source=SOURCE_MOCK,
            error=f"API connection failed: {exc}; switched to mock data",
        )

    log.info("Fetched %d hospital records from upstream API", len(records))
    return FetchResult(records=records, source=SOURCE_API)


def check_api_connection(settings: ApiSettings, client: Optional[UpstreamClient] = None) -> dict:
    """
    Single attempt, no fallback. Returns a summary with up to three
    sample records.
    """
    if not settings.is_configured:
        return {
            "success": False,
            "message": "Upstream API not configured",
            "data": None,
        }

    client = client or UpstreamClient(settings)
    try:
        records = client.fetch_records()
    except AcquisitionError as exc:
        return {
            "success": False,
            "message": f"Connection failed: {exc}",
            "data": None,
        }

    return {
        "success": True,
        "message": f"Connected, received {len(records)} hospital records",
        "data": records[:3],
    }
