from .overview import status_overview
from .export import export_results, EXPORT_FORMATS

__all__ = ["status_overview", "export_results", "EXPORT_FORMATS"]
