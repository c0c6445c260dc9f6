import logging
from datetime import date
from typing import Any, Callable, List, Optional

import requests

from edci.acquisition.records import HospitalRecord, parse_api_payload
from edci.config.settings import ApiSettings
from edci.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    Thin HTTP client for the hospital dashboard API.

    One GET per call; retries and fallbacks belong to the fetcher.
    """

    def __init__(self, settings: ApiSettings, session: Optional[requests.Session] = None,
                 today: Callable[[], date] = date.today):
        self.settings = settings
        self.session = session or requests.Session()
        self._today = today

    def build_url(self, start_date: Optional[date] = None) -> str:
        start_date = start_date or self._today()
        endpoint = self.settings.endpoint
        separator = "&" if "?" in endpoint else "?"
        return (
            f"{self.settings.base_url.rstrip('/')}{endpoint}"
            f"{separator}StartDate={start_date.isoformat()}"
        )

    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def fetch_raw(self, start_date: Optional[date] = None) -> Any:
        url = self.build_url(start_date)
        logger.info("Fetching data from: %s", url)

        try:
            response = self.session.get(
                url,
                headers=self.headers(),
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise UpstreamError(f"API request failed: {exc}") from exc

        if not response.ok:
            raise UpstreamError(
                f"API request failed: {response.status_code} {response.reason}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"API returned invalid JSON: {exc}") from exc

    def fetch_records(self, start_date: Optional[date] = None) -> List[HospitalRecord]:
        return parse_api_payload(self.fetch_raw(start_date))
