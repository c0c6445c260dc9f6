import pandas as pd
import pytest

from edci.config.weight_config import BlendWeights, WeightConfig
from edci.core.models import FlowCounts, SeverityCounts, StaffingCounts
from edci.acquisition.records import HospitalRecord
from edci.scoring.batch import score_record


@pytest.fixture
def severity():
    return SeverityCounts(level1=12, level2=20, level3=15, level4=5, level5=2)


@pytest.fixture
def staffing():
    return StaffingCounts(attending_physicians=4, resident_physicians=6, nurses=10)


@pytest.fixture
def flow():
    return FlowCounts(waiting_for_admission=3, over_stay_hours_24=1)


@pytest.fixture
def waiting_only_config():
    """
    Config whose EDCI equals the waiting-for-admission count, which makes
    the index easy to steer in threshold tests.
    """
    return WeightConfig(
        blend_weights=BlendWeights(
            pbr_weight=0.0, nbr_weight=0.0, waiting_weight=1.0, overstay_weight=0.0
        )
    )


@pytest.fixture
def make_scored(waiting_only_config):
    def _make(code: str, edci: int, name: str = ""):
        record = HospitalRecord(
            hospital_code=code,
            hospital_name=name or f"Hospital {code}",
            severity=SeverityCounts(),
            staffing=StaffingCounts(),
            flow=FlowCounts(waiting_for_admission=edci),
        )
        return score_record(record, waiting_only_config)

    return _make


@pytest.fixture
def census_df():
    return pd.DataFrame({
        "hospital_code": ["H001", "H002", "H003"],
        "hospital_name": ["Alpha", "Beta", "Gamma"],
        "level1": [12, 20, 0],
        "level2": [20, 30, 0],
        "level3": [15, 40, 0],
        "level4": [5, 20, 0],
        "level5": [2, 10, 0],
        "attending_physicians": [4, 3, 0],
        "resident_physicians": [6, 5, 0],
        "nurses": [10, 8, 0],
        "waiting_for_admission": [3, 12, 0],
        "over_stay_hours_24": [1, 4, 0],
    })


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
