from __future__ import annotations

import logging
import threading
from pathlib import Path

from lessbuild.core.pipeline import StylesheetPipeline

logger = logging.getLogger(__name__)

PER_REQUEST_ENVIRONMENTS = frozenset({"development"})

_build_lock = threading.Lock()


class BuildTrigger:
    """Decide when a host application regenerates its stylesheets.

    Development rebuilds before every request so edits show up on reload;
    every other environment builds once at startup. All builds go through
    one process-wide lock.
    """

    def __init__(self, pipeline: StylesheetPipeline) -> None:
        self.pipeline = pipeline

    @property
    def per_request(self) -> bool:
        return self.pipeline.config.environment in PER_REQUEST_ENVIRONMENTS

    def startup(self) -> list[Path]:
        if self.per_request:
            return []
        return self._build()

    def before_request(self) -> list[Path]:
        if not self.per_request:
            return []
        return self._build()

    def _build(self) -> list[Path]:
        with _build_lock:
            logger.debug("Regenerating stylesheets (%s)", self.pipeline.config.environment)
            return self.pipeline.generate_all()
