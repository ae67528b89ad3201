import logging
from collections.abc import Sequence
from pathlib import Path

from lessbuild.core import writer
from lessbuild.core.catalog import iter_sources
from lessbuild.core.config import ConfigResolver
from lessbuild.core.paths import destination_for, resolve_source, slugged_sources, slugs_from_catalog, source_exists
from lessbuild.core.ports.compiler import StylesheetCompiler
from lessbuild.errors import CompileError, NotFoundError
from lessbuild.models import CompiledArtifact, EffectiveConfig, Slug

logger = logging.getLogger(__name__)

SlugLike = Slug | Sequence[str]


class StylesheetPipeline:
    """Compile stylesheet sources into CSS files under the destination root.

    Every public operation takes a single configuration snapshot from the
    resolver and uses it for the whole pass. Calls are not serialized here;
    hosts that may build concurrently must serialize them (see ``BuildTrigger``).
    """

    def __init__(self, resolver: ConfigResolver, compiler: StylesheetCompiler | None = None) -> None:
        if compiler is None:
            from lessbuild.compiler.lesscpy_adapter import LesscpyCompiler

            compiler = LesscpyCompiler()
        self.resolver = resolver
        self.compiler = compiler

    @property
    def config(self) -> EffectiveConfig:
        return self.resolver.resolve()

    def exists(self, slug: SlugLike) -> bool:
        try:
            resolved = Slug.coerce(slug)
        except ValueError:
            return False
        return source_exists(self.config, resolved)

    def generate_one(self, slug: SlugLike) -> str:
        """Return the rendered CSS for one slug without writing it."""
        return self._compile(self.config, slug).css

    def generate_all(self) -> list[Path]:
        config = self.config
        written: list[Path] = []
        for slug in slugs_from_catalog(config):
            artifact = self._compile(config, slug)
            destination = destination_for(config, slug)
            writer.write(destination, artifact.css)
            written.append(destination)
        logger.info("Generated %d stylesheet(s) into %s", len(written), config.destination_root)
        return written

    def clean(self) -> list[Path]:
        config = self.config
        removed: list[Path] = []
        for _, slug in slugged_sources(config, iter_sources(config)):
            destination = destination_for(config, slug)
            if writer.remove(destination):
                removed.append(destination)
                writer.prune_empty_dirs(destination.parent, config.destination_root)
        logger.info("Removed %d stylesheet(s) from %s", len(removed), config.destination_root)
        return removed

    def _compile(self, config: EffectiveConfig, slug: SlugLike) -> CompiledArtifact:
        try:
            resolved = Slug.coerce(slug)
        except ValueError as exc:
            raise NotFoundError(slug) from exc
        if resolved.is_partial(config.partial_prefix):
            raise NotFoundError(resolved)
        source = resolve_source(config, resolved)
        if source is None:
            raise NotFoundError(resolved)

        try:
            text = source.read_bytes().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CompileError(f"not valid UTF-8: {exc.reason} at byte {exc.start}", source=source) from exc
        css = self.compiler.compile(text, source)
        return CompiledArtifact(slug=resolved, source=source, css=writer.render(css, source, config))
