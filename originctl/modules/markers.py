"""Marker files recording which provisioning stages have completed.

A stage whose marker exists is considered done and is skipped on later
runs. Markers are only written after every command of the stage succeeded.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Union

from originctl.modules.models import Stage

logger = logging.getLogger("originctl.markers")

MARKER_SUFFIX = ".done"


class MarkerStore:
    """Marker files kept in a single directory, one per stage."""

    def __init__(self, marker_dir: Union[str, Path], dry_run: bool = False):
        self.marker_dir = Path(marker_dir)
        self.dry_run = dry_run

    def path(self, stage: Stage) -> Path:
        return self.marker_dir / f"{Stage(stage).value}{MARKER_SUFFIX}"

    def is_complete(self, stage: Stage) -> bool:
        return self.path(stage).exists()

    def mark_complete(self, stage: Stage) -> None:
        if self.dry_run:
            logger.info(f"[dry-run] would write marker {self.path(stage)}")
            return
        self.marker_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        self.path(stage).write_text(stamp + "\n")
        logger.debug(f"Wrote marker {self.path(stage)}")

    def clear(self, stage: Stage) -> bool:
        """Remove a stage marker. Returns True if one was removed."""
        path = self.path(stage)
        if not path.exists():
            return False
        if self.dry_run:
            logger.info(f"[dry-run] would remove marker {path}")
            return False
        path.unlink()
        logger.debug(f"Removed marker {path}")
        return True

    def clear_all(self) -> int:
        return sum(1 for stage in Stage.ordered() if self.clear(stage))

    def completed(self) -> Dict[Stage, str]:
        """Map each completed stage to the timestamp stored in its marker."""
        done = {}
        for stage in Stage.ordered():
            path = self.path(stage)
            if path.exists():
                done[stage] = path.read_text().strip()
        return done
