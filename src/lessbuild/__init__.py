from lessbuild.core.config import ConfigResolver
from lessbuild.core.hooks import BuildTrigger
from lessbuild.core.pipeline import StylesheetPipeline
from lessbuild.errors import AmbiguousSourceError, CompileError, LessBuildError, NotFoundError
from lessbuild.models import EffectiveConfig, Slug

__all__ = [
    "AmbiguousSourceError",
    "BuildTrigger",
    "CompileError",
    "ConfigResolver",
    "EffectiveConfig",
    "LessBuildError",
    "NotFoundError",
    "Slug",
    "StylesheetPipeline",
]
