import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from lessbuild.models import EffectiveConfig

logger = logging.getLogger(__name__)

ENVIRONMENT_VAR = "LESSBUILD_ENV"
RESTRICTED_FS_VAR = "HEROKU_ENV"
DEFAULT_ENVIRONMENT = "development"
FALLBACK_ENVIRONMENT = "production"

DEFAULTS: dict[str, dict[str, Any]] = {
    "production": {
        "compression": True,
        "header": False,
        "page_cache": True,
        "destination_path": "stylesheets",
    },
    "development": {
        "compression": False,
        "header": True,
        "page_cache": True,
        "destination_path": "stylesheets",
    },
}

HEADER_TEMPLATE = (
    "/*\n\n\n\n\n\tThis file was auto generated by Less (http://lesscss.org). "
    "To change the contents of this file, edit %s instead.\n\n\n\n\n*/"
)

# Settings a caller may override; everything else on EffectiveConfig is derived.
SETTINGS = frozenset(
    {
        "compression",
        "header",
        "page_cache",
        "destination_path",
        "source_path",
        "output_dir",
        "source_extensions",
        "partial_prefix",
        "strict_sources",
    }
)


def defaults_for(environment: str) -> dict[str, Any]:
    return dict(DEFAULTS.get(environment, DEFAULTS[FALLBACK_ENVIRONMENT]))


class ConfigResolver:
    """Merge explicit overrides with the defaults of the current environment.

    The effective configuration is resolved lazily and cached until the next
    ``set()``. A pipeline takes one snapshot per pass, so mutating the
    resolver while a pass runs has no effect on that pass.
    """

    def __init__(
        self,
        environment: str,
        project_root: str | Path,
        *,
        restricted_fs: bool = False,
        **overrides: Any,
    ) -> None:
        self.environment = environment
        self.project_root = Path(project_root)
        self.restricted_fs = restricted_fs
        self._overrides: dict[str, Any] = {}
        self._resolved: EffectiveConfig | None = None
        for setting, value in overrides.items():
            self.set(setting, value)

    @classmethod
    def from_environ(
        cls,
        project_root: str | Path,
        environ: Mapping[str, str] | None = None,
        environment: str | None = None,
        **overrides: Any,
    ) -> "ConfigResolver":
        env = os.environ if environ is None else environ
        return cls(
            environment or env.get(ENVIRONMENT_VAR) or DEFAULT_ENVIRONMENT,
            project_root,
            restricted_fs=RESTRICTED_FS_VAR in env,
            **overrides,
        )

    def set(self, setting: str, value: Any) -> None:
        _check_setting(setting)
        if value is None:
            self._overrides.pop(setting, None)
        else:
            self._overrides[setting] = value
        self._resolved = None

    def get(self, setting: str) -> Any:
        if setting not in EffectiveConfig.model_fields:
            raise ValueError(f"Unknown setting '{setting}'. Supported: {sorted(EffectiveConfig.model_fields)}")
        return getattr(self.resolve(), setting)

    def resolve(self) -> EffectiveConfig:
        if self._resolved is None:
            self._resolved = self._build()
        return self._resolved

    def _build(self) -> EffectiveConfig:
        values = defaults_for(self.environment)
        values.update(self._overrides)

        source_path = Path(values.pop("source_path", Path("app") / "stylesheets"))
        if not source_path.is_absolute():
            source_path = self.project_root / source_path

        if self.restricted_fs and values.get("page_cache"):
            logger.debug("Restricted filesystem detected, disabling page cache")
            values["page_cache"] = False

        config = EffectiveConfig(
            environment=self.environment,
            project_root=self.project_root,
            source_path=source_path,
            **values,
        )
        logger.debug("Resolved configuration for %s: %s", self.environment, config)
        return config


def _check_setting(setting: str) -> None:
    if setting not in SETTINGS:
        raise ValueError(f"Unknown setting '{setting}'. Supported: {sorted(SETTINGS)}")


def header_for(config: EffectiveConfig, source: Path) -> str:
    """Return the provenance comment for ``source``, or ``""`` when disabled."""
    if not config.header:
        return ""
    try:
        shown = source.relative_to(config.project_root)
    except ValueError:
        shown = source
    return HEADER_TEMPLATE % shown.as_posix()
