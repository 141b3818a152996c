"""
Pause Service - Cross-process pause flag for the monitoring daemon

The flag is a marker file. Only one daemon is expected to read it; races
between several daemon instances are not handled.
"""
import logging
from pathlib import Path

from clippie.exceptions import ConfigError

logger = logging.getLogger(__name__)


class PauseService:
    """Boolean resource backed by the presence of a marker file"""

    def __init__(self, marker_path: Path):
        self.marker_path = Path(marker_path)

    def is_paused(self) -> bool:
        return self.marker_path.exists()

    def pause(self) -> None:
        """Create the marker; the daemon stops recording on its next cycle"""
        try:
            self.marker_path.parent.mkdir(parents=True, exist_ok=True)
            self.marker_path.touch(exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot create pause marker at {self.marker_path}", e) from e
        logger.info(f"Monitoring paused (marker: {self.marker_path})")

    def resume(self) -> None:
        try:
            self.marker_path.unlink(missing_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot remove pause marker at {self.marker_path}", e) from e
        logger.info("Monitoring resumed")
