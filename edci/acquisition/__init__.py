from .records import HospitalRecord, parse_api_payload, records_from_frame
from .fetcher import FetchResult, fetch_hospital_data
from .mock_data import generate_mock_hospital_data, generate_trend_data

__all__ = [
    "HospitalRecord",
    "parse_api_payload",
    "records_from_frame",
    "FetchResult",
    "fetch_hospital_data",
    "generate_mock_hospital_data",
    "generate_trend_data",
]
