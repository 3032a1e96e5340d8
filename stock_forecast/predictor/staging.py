# stock_forecast/predictor/staging.py
"""
Temporary executable staging.

A bundled predictor payload is written to a uniquely named file, made
executable, and removed again once the caller is done with it. Use
``TemporaryExecutableManager.staged`` so removal happens on every exit path.
"""

import logging
import os
import stat
import sys
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from stock_forecast.errors import StagingError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "predictor_"
DEFAULT_SUFFIX = ".exe" if sys.platform.startswith("win") else ""


@dataclass
class StagedExecutable:
    """Handle to one staged artifact. Owned by exactly one invocation."""

    path: Path
    released: bool = False


class TemporaryExecutableManager:
    """
    Writes executable payloads into a scoped temporary area.

    Attributes:
        staging_dir (str, optional): Directory for artifacts. None means the
            platform temporary directory.
        prefix (str): File name prefix.
        suffix (str): File name suffix.
    """

    def __init__(self, staging_dir: Optional[str] = None, prefix: str = DEFAULT_PREFIX, suffix: str = DEFAULT_SUFFIX):
        self.staging_dir = staging_dir
        self.prefix = prefix
        self.suffix = suffix

    def stage(self, payload: bytes) -> StagedExecutable:
        """
        Write the payload to a fresh, collision-free file and mark it executable.

        Args:
            payload (bytes): Executable content.

        Returns:
            StagedExecutable: Handle referencing the staged file.

        Raises:
            StagingError: If the file cannot be created, written or made executable.
        """
        try:
            if self.staging_dir:
                os.makedirs(self.staging_dir, exist_ok=True)
            fd, name = tempfile.mkstemp(prefix=self.prefix, suffix=self.suffix, dir=self.staging_dir)
        except OSError as exc:
            logger.error(f"Could not create staging file: {exc}")
            raise StagingError(f"Could not create staging file for predictor: {exc}") from exc

        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.chmod(path, stat.S_IRWXU)
        except OSError as exc:
            logger.error(f"Could not stage predictor at {path}: {exc}")
            self._remove(path)
            raise StagingError(f"Could not stage predictor at {path}: {exc}") from exc

        logger.debug(f"Staged predictor ({len(payload)} bytes) at {path}")
        return StagedExecutable(path=path)

    def release(self, handle: StagedExecutable) -> None:
        """
        Delete the staged artifact. Releasing twice is a no-op.
        """
        if handle.released:
            return
        handle.released = True
        self._remove(handle.path)
        logger.debug(f"Released staged predictor {handle.path}")

    @contextmanager
    def staged(self, payload: bytes) -> Iterator[StagedExecutable]:
        """
        Stage the payload for the duration of a ``with`` block.

        Example:
            with manager.staged(payload) as exe:
                subprocess.run([str(exe.path)])
        """
        handle = self.stage(payload)
        try:
            yield handle
        finally:
            self.release(handle)

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            # never raises: release runs inside finally blocks
            logger.warning(f"Could not remove staged predictor {path}: {exc}")
