from .engine import Alert, AlertEngine

__all__ = ["Alert", "AlertEngine"]
