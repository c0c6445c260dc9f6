from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class HospitalLocation:
    code: str
    name: str
    latitude: float
    longitude: float


# Eleven responsible emergency hospitals in Taoyuan City
HOSPITALS: List[HospitalLocation] = [
    HospitalLocation("H001", "Linkou Chang Gung Memorial Hospital", 25.0841, 121.3424),
    HospitalLocation("H002", "Taoyuan Chang Gung Memorial Hospital", 25.0056, 121.3105),
    HospitalLocation("H003", "St. Paul's Hospital", 25.0141, 121.3023),
    HospitalLocation("H004", "Min-Sheng General Hospital", 24.9857, 121.3068),
    HospitalLocation("H005", "Landseed International Hospital", 24.9536, 121.2478),
    HospitalLocation("H006", "Taoyuan Armed Forces General Hospital", 24.9893, 121.3148),
    HospitalLocation("H007", "Taoyuan General Hospital, MOHW", 24.9893, 121.3148),
    HospitalLocation("H008", "Tian-Sheng Memorial Hospital", 24.9535, 121.2278),
    HospitalLocation("H009", "Chung-Li Tian-Sheng Hospital", 24.9536, 121.2278),
    HospitalLocation("H010", "E-Da Ren General Hospital", 25.0689, 121.2336),
    HospitalLocation("H011", "Taoyuan Veterans Hospital", 25.0689, 121.2336),
]


def get_hospital_by_code(code: str) -> Optional[HospitalLocation]:
    for hospital in HOSPITALS:
        if hospital.code == code:
            return hospital
    return None
