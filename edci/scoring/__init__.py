from .batch import ScoredHospital, score_record, score_records, to_frame

__all__ = ["ScoredHospital", "score_record", "score_records", "to_frame"]
