import logging
from collections.abc import Iterator
from pathlib import Path

from lessbuild.models import EffectiveConfig

logger = logging.getLogger(__name__)


def is_partial(path: Path, prefix: str = "_") -> bool:
    return path.name.startswith(prefix)


def is_source_file(path: Path, extensions: tuple[str, ...]) -> bool:
    return path.suffix in extensions and path.is_file()


def iter_sources(config: EffectiveConfig) -> Iterator[Path]:
    """Yield every stylesheet source under the source root, partials included.

    Each call walks the tree again; nothing is cached between calls.
    """
    root = config.source_path
    if not root.is_dir():
        logger.warning("Stylesheet source directory %s does not exist", root)
        return
    for path in root.rglob("*"):
        if is_source_file(path, config.source_extensions):
            yield path


def iter_compilable_sources(config: EffectiveConfig) -> Iterator[Path]:
    for path in iter_sources(config):
        if is_partial(path, config.partial_prefix):
            logger.debug("Skipping partial %s", path)
            continue
        yield path
