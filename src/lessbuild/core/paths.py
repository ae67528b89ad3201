import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from lessbuild.core.catalog import iter_compilable_sources
from lessbuild.errors import AmbiguousSourceError
from lessbuild.models import EffectiveConfig, Slug

logger = logging.getLogger(__name__)

CSS_EXTENSION = ".css"


def source_candidates(config: EffectiveConfig, slug: Slug) -> list[Path]:
    """Return the existing source files for ``slug`` in extension order."""
    directory = config.source_path.joinpath(*slug.parents)
    candidates = (directory / f"{slug.name}{ext}" for ext in config.source_extensions)
    return [path for path in candidates if path.is_file()]


def resolve_source(config: EffectiveConfig, slug: Slug) -> Path | None:
    """Map a slug to its source file, or ``None`` when nothing matches.

    When several extensions match, the first one in ``source_extensions``
    wins unless ``strict_sources`` is set.
    """
    found = source_candidates(config, slug)
    if not found:
        logger.debug("No source for %s under %s", slug, config.source_path)
        return None
    if len(found) > 1:
        if config.strict_sources:
            raise AmbiguousSourceError(slug, found)
        logger.warning("Slug %s matches %d sources, using %s", slug, len(found), found[0])
    return found[0]


def source_exists(config: EffectiveConfig, slug: Slug) -> bool:
    if slug.is_partial(config.partial_prefix):
        return False
    return resolve_source(config, slug) is not None


def destination_for(config: EffectiveConfig, slug: Slug) -> Path:
    return config.destination_root.joinpath(*slug.parents, f"{slug.name}{CSS_EXTENSION}")


def slug_for_source(config: EffectiveConfig, source: Path) -> Slug:
    relative = source.relative_to(config.source_path)
    return Slug(segments=(*relative.parent.parts, relative.stem))


def slugged_sources(config: EffectiveConfig, sources: Iterable[Path]) -> Iterator[tuple[Path, Slug]]:
    """Pair each source with its slug, skipping files whose names cannot form one."""
    for source in sources:
        try:
            yield source, slug_for_source(config, source)
        except ValueError as exc:
            logger.warning("Skipping %s: not a valid stylesheet name (%s)", source, exc)


def slugs_from_catalog(config: EffectiveConfig) -> Iterator[Slug]:
    """Yield each compilable slug once, even when several extensions share a stem."""
    seen: set[Slug] = set()
    for _, slug in slugged_sources(config, iter_compilable_sources(config)):
        if slug not in seen:
            seen.add(slug)
            yield slug
