from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from edci.acquisition.client import UpstreamClient
from edci.config.settings import ApiSettings
from edci.core.errors import UpstreamError

PAYLOAD = {
    "bodyDetails": [
        {"hospitaL_CODE": "H001", "hospitalNickName": "Linkou", "patienT_LVL1": 3},
    ]
}


def _settings(**overrides):
    values = {
        "base_url": "http://upstream.local/",
        "endpoint": "/api/OverallDashboard/GetEDCIDashBoard",
        "api_key": "secret",
        "timeout": 12,
    }
    values.update(overrides)
    return ApiSettings(**values)


def _response(ok=True, status_code=200, reason="OK", payload=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


def test_build_url_appends_start_date():
    client = UpstreamClient(_settings(), session=MagicMock())
    assert client.build_url(date(2025, 7, 21)) == (
        "http://upstream.local/api/OverallDashboard/GetEDCIDashBoard?StartDate=2025-07-21"
    )


def test_build_url_extends_existing_query():
    client = UpstreamClient(
        _settings(endpoint="/api/dash?Region=TY"),
        session=MagicMock(),
        today=lambda: date(2025, 1, 2),
    )
    assert client.build_url().endswith("/api/dash?Region=TY&StartDate=2025-01-02")


def test_bearer_header_only_with_api_key():
    assert UpstreamClient(_settings(), session=MagicMock()).headers()["Authorization"] == "Bearer secret"
    assert "Authorization" not in UpstreamClient(_settings(api_key=""), session=MagicMock()).headers()


def test_fetch_records_success():
    session = MagicMock()
    session.get.return_value = _response(payload=PAYLOAD)
    client = UpstreamClient(_settings(), session=session, today=lambda: date(2025, 7, 21))

    records = client.fetch_records()

    assert [r.hospital_code for r in records] == ["H001"]
    _, kwargs = session.get.call_args
    assert kwargs["timeout"] == 12
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


def test_http_error_raises_upstream_error():
    session = MagicMock()
    session.get.return_value = _response(ok=False, status_code=503, reason="Service Unavailable")

    with pytest.raises(UpstreamError, match="503"):
        UpstreamClient(_settings(), session=session).fetch_raw()


def test_connection_error_raises_upstream_error():
    session = MagicMock()
    session.get.side_effect = requests.exceptions.ConnectTimeout("timed out")

    with pytest.raises(UpstreamError, match="timed out"):
        UpstreamClient(_settings(), session=session).fetch_raw()


def test_invalid_json_raises_upstream_error():
    session = MagicMock()
    response = _response()
    response.json.side_effect = ValueError("Expecting value")
    session.get.return_value = response

    with pytest.raises(UpstreamError, match="invalid JSON"):
        UpstreamClient(_settings(), session=session).fetch_raw()
