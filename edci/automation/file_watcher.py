"""
Census inbox.

Scores CSV/Excel census files as they appear in a watched folder. Files
that still fail after retries are copied to `<run_dir>/failed/`.
"""

import shutil
import time
from pathlib import Path
from typing import Dict, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from edci.automation.batch_runner import SUPPORTED_EXT, run_dir_for, score_census_file
from edci.automation.retry import retry
from edci.config.loader import load_config
from edci.utils.logger import get_logger

log = get_logger("file-watcher")

# A file name seen again within this window is a duplicate event
COOLDOWN_SECONDS = 10

SCORE_ATTEMPTS = 3
SCORE_RETRY_DELAY = 5


class CensusFileHandler(FileSystemEventHandler):
    def __init__(
        self,
        watch_dir: Path,
        config: dict,
        output_root: str = "runs",
        settle_seconds: float = 2,
    ) -> None:
        self.watch_dir = Path(watch_dir)
        self.config = config
        self.output_root = Path(output_root)
        self.settle_seconds = settle_seconds
        self._seen: Dict[str, float] = {}

    # Editors and copy tools often write to a temp name and rename
    def on_moved(self, event) -> None:
        if not event.is_directory:
            self._handle(Path(event.dest_path))

    def on_created(self, event) -> None:
        if not event.is_directory:
            self._handle(Path(event.src_path))

    def _is_duplicate(self, name: str, now: float) -> bool:
        for seen_name, seen_at in list(self._seen.items()):
            if now - seen_at >= COOLDOWN_SECONDS:
                del self._seen[seen_name]

        if name in self._seen:
            return True
        self._seen[name] = now
        return False

    def _handle(self, path: Path) -> Optional[dict]:
        if path.suffix.lower() not in SUPPORTED_EXT:
            return None
        if self._is_duplicate(path.name, time.time()):
            log.debug("Duplicate event for %s ignored", path.name)
            return None

        log.info("New census file detected: %s", path.name)
        time.sleep(self.settle_seconds)

        run_dir = run_dir_for(self.output_root)
        run_dir.mkdir(parents=True, exist_ok=True)

        scorer = retry(times=SCORE_ATTEMPTS, delay=SCORE_RETRY_DELAY)(score_census_file)
        try:
            result = scorer(path, self.config, run_dir)
        except Exception as e:
            self._quarantine(path, run_dir, e)
            return None

        log.info(
            "Scored %s: %s hospitals -> %s",
            path.name,
            result["overview"]["hospitals"],
            result["export"],
        )
        return result

    def _quarantine(self, path: Path, run_dir: Path, error: Exception) -> None:
        failed_dir = run_dir / "failed"
        failed_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, failed_dir / path.name)
        log.error("Census file %s failed after retries: %s", path.name, error)


def start_watcher(
    watch_dir: str,
    config_path: Optional[str] = None,
) -> None:
    watch_dir = Path(watch_dir)
    if not watch_dir.exists():
        raise FileNotFoundError(f"Watch directory not found: {watch_dir}")

    config = load_config(config_path)
    handler = CensusFileHandler(
        watch_dir=watch_dir,
        config=config,
        output_root=config.get("output_dir", "runs"),
    )

    observer = Observer()
    observer.schedule(handler, str(watch_dir), recursive=False)
    observer.start()
    log.info("Watching %s for census files (CTRL+C to stop)", watch_dir)

    try:
        while observer.is_alive():
            observer.join(1)
    except KeyboardInterrupt:
        log.info("File watcher stopped")
    finally:
        observer.stop()
        observer.join()
