import time
import os

import psutil


class MetricsCollector:
    """
    Wall-clock and memory figures for one refresh cycle.
    """

    def __init__(self):
        self.start_time = time.time()
        self.counters = {}

    def incr(self, name: str, amount: int = 1):
        self.counters[name] = self.counters.get(name, 0) + amount

    def collect(self):
        process = psutil.Process(os.getpid())

        metrics = {
            "duration_sec": round(time.time() - self.start_time, 2),
            "memory_mb": round(process.memory_info().rss / 1024 / 1024, 2),
        }
        metrics.update(self.counters)

        return metrics
