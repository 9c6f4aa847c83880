"""Project configuration read from ``.namelint.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import structlog
import yaml

from .errors import ConfigurationError
from .utils import read_yaml_file

logger = structlog.get_logger()

DEFAULT_CONFIG_FILENAME = ".namelint.yaml"
OUTPUT_FORMATS = ("text", "json", "yaml")
KNOWN_KEYS = frozenset({"catalog", "disable", "allow", "format"})


@dataclass(frozen=True)
class Settings:
    catalog: Optional[str] = None
    disable: Tuple[str, ...] = ()
    allow: Tuple[str, ...] = ()
    format: str = "text"

    def merged(
        self,
        catalog: Optional[str] = None,
        disable: Iterable[str] = (),
        allow: Iterable[str] = (),
        format: Optional[str] = None,
    ) -> "Settings":
        """Overlay command-line values; list values are appended."""

        return replace(
            self,
            catalog=catalog or self.catalog,
            disable=_unique(self.disable + tuple(disable)),
            allow=_unique(self.allow + tuple(allow)),
            format=format or self.format,
        )


def load_config(path: Optional[str | Path] = None) -> Settings:
    """Read project settings; a missing default file yields the defaults."""

    config_path = Path(path) if path is not None else Path(DEFAULT_CONFIG_FILENAME)
    try:
        data = read_yaml_file(config_path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"{config_path}: cannot read configuration: {exc}") from exc

    if data is None:
        if path is not None and not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        return Settings()
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path}: configuration must be a mapping")

    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"{config_path}: unknown configuration keys: {', '.join(unknown)}")

    catalog = data.get("catalog")
    if catalog is not None:
        catalog_path = Path(str(catalog))
        if not catalog_path.is_absolute():
            catalog_path = config_path.parent / catalog_path
        catalog = str(catalog_path)

    report_format = str(data.get("format") or "text").lower()
    if report_format not in OUTPUT_FORMATS:
        raise ConfigurationError(f"{config_path}: format must be one of {', '.join(OUTPUT_FORMATS)}")

    settings = Settings(
        catalog=catalog,
        disable=_string_list(data.get("disable"), "disable", config_path),
        allow=_string_list(data.get("allow"), "allow", config_path),
        format=report_format,
    )
    logger.debug("config_loaded", path=str(config_path), disabled=len(settings.disable), allowed=len(settings.allow))
    return settings


def _string_list(value: Any, key: str, config_path: Path) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    raise ConfigurationError(f"{config_path}: '{key}' must be a list of strings")


def _unique(values: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))
