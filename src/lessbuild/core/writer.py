import logging
from pathlib import Path

from lessbuild.core.config import header_for
from lessbuild.models import EffectiveConfig

logger = logging.getLogger(__name__)

_LINE_BREAKS = str.maketrans("", "", "\r\n")


def compress(css: str) -> str:
    """Drop every line break. Not a minifier, just a compaction."""
    return css.translate(_LINE_BREAKS)


def render(css: str, source: Path, config: EffectiveConfig) -> str:
    header = header_for(config, source)
    text = f"{header}\n{css}" if header else css
    if config.compression:
        text = compress(text)
    return text


def write(destination: Path, text: str) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(text.encode("utf-8"))
    logger.info("Wrote %s", destination)


def remove(destination: Path) -> bool:
    """Delete ``destination``; return False when it was already gone."""
    try:
        destination.unlink()
    except FileNotFoundError:
        return False
    logger.info("Removed %s", destination)
    return True


def prune_empty_dirs(start: Path, stop: Path) -> None:
    """Remove empty directories from ``start`` upwards, never touching ``stop``."""
    current = start
    while current != stop and stop in current.parents:
        try:
            current.rmdir()
        except OSError:
            return
        logger.debug("Removed empty directory %s", current)
        current = current.parent
