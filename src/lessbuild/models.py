from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

_FORBIDDEN_SEGMENTS = frozenset({".", ".."})


class Slug(BaseModel):
    """Extension-free identifier of one stylesheet, e.g. ``("admin", "forms")``."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...]

    @field_validator("segments")
    @classmethod
    def _check_segments(cls, segments: tuple[str, ...]) -> tuple[str, ...]:
        if not segments:
            raise ValueError("A slug needs at least one segment.")
        for segment in segments:
            if not segment:
                raise ValueError("Slug segments must not be empty.")
            if segment in _FORBIDDEN_SEGMENTS or "/" in segment or "\\" in segment:
                raise ValueError(f"Invalid slug segment '{segment}'.")
        return segments

    @classmethod
    def coerce(cls, value: "Slug | Sequence[str]") -> "Slug":
        if isinstance(value, Slug):
            return value
        if isinstance(value, str):
            value = [value]
        return cls(segments=tuple(value))

    @property
    def name(self) -> str:
        return self.segments[-1]

    @property
    def parents(self) -> tuple[str, ...]:
        return self.segments[:-1]

    def is_partial(self, prefix: str = "_") -> bool:
        return self.name.startswith(prefix)

    def __str__(self) -> str:
        return "/".join(self.segments)


class EffectiveConfig(BaseModel):
    """Fully resolved settings for one pipeline pass."""

    model_config = ConfigDict(frozen=True)

    environment: str
    compression: bool
    header: bool
    page_cache: bool
    destination_path: str
    source_path: Path
    project_root: Path
    output_dir: str = "public"
    source_extensions: tuple[str, ...] = (".less", ".lss")
    partial_prefix: str = "_"
    strict_sources: bool = False

    @field_validator("source_extensions")
    @classmethod
    def _normalize_extensions(cls, extensions: tuple[str, ...]) -> tuple[str, ...]:
        if not extensions:
            raise ValueError("At least one source extension is required.")
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions)

    @property
    def destination_root(self) -> Path:
        return self.project_root / self.output_dir / self.destination_path


class CompiledArtifact(BaseModel):
    slug: Slug
    source: Path
    css: str
