"""
Skittle configuration (YAML, validated against a bundled JSON Schema).

Configuration sources (highest to lowest priority):
1. Environment variables: SKITTLE_*
2. The YAML file passed to ``load_config``
3. Built-in defaults

Recognised environment overrides:
- SKITTLE_PATHS, SKITTLE_PREPEND_PATHS, SKITTLE_APPEND_PATHS (split on os.pathsep)
- SKITTLE_DOT_PATH
- SKITTLE_SEARCH_PATH_ENV
- SKITTLE_LOG_LEVEL

Relative directories and ``.py`` helper modules are resolved against the
directory holding the configuration file.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from jsonschema import Draft202012Validator

from skittle.core.engine import RenderEngine
from skittle.data import read_yaml as read_data_yaml
from skittle.exceptions import ConfigError
from skittle.helpers.mappings import ModuleHelperMapping
from skittle.locators import ClasspathResourceLocator, PathResourceLocator, ResourceLocator
from skittle.locators.classpath import DEFAULT_ENV_VAR
from skittle.utils.io import read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "SKITTLE_"
_LIST_KEYS = ("paths", "prepend_paths", "append_paths")
_SCALAR_KEYS = ("dot_path", "search_path_env", "log_level")


@dataclass(frozen=True)
class SkittleConfig:
    """Validated configuration."""

    paths: Tuple[str, ...] = ()
    prepend_paths: Tuple[str, ...] = ()
    append_paths: Tuple[str, ...] = ()
    dot_path: Optional[str] = None
    search_path_env: str = DEFAULT_ENV_VAR
    helper_modules: Tuple[str, ...] = ()
    helpers: Dict[str, str] = field(default_factory=dict)
    log_level: str = "WARNING"
    source: Optional[Path] = None

    def build_locator(self) -> ResourceLocator:
        """Path locator over the configured directories, or the classpath locator when none."""
        if self.paths:
            return PathResourceLocator(
                self.dot_path, self.paths, self.prepend_paths, self.append_paths
            )
        return ClasspathResourceLocator(
            self.dot_path, self.prepend_paths, self.append_paths, env_var=self.search_path_env
        )


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for key in _LIST_KEYS:
        raw = env.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is not None:
            overrides[key] = [p for p in raw.split(os.pathsep) if p]
    for key in _SCALAR_KEYS:
        raw = env.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is not None:
            overrides[key] = raw.strip().upper() if key == "log_level" else raw.strip()
    return overrides


def validate_config(data: Mapping[str, Any]) -> None:
    """Validate raw configuration against the bundled schema.

    Raises:
        ConfigError: Listing every violation found.
    """
    schema = read_data_yaml("schemas", "config.schema.yaml")
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(dict(data)), key=lambda e: list(e.path))
    if errors:
        messages = []
        for err in errors:
            location = ".".join(str(p) for p in err.path) or "<root>"
            messages.append(f"{location}: {err.message}")
        raise ConfigError(
            "Invalid configuration: " + "; ".join(messages),
            context={"errors": messages},
        )


def _resolve(base: Optional[Path], value: str) -> str:
    if base is None or os.path.isabs(value):
        return value
    return str((base / value).resolve())


def _resolve_module(base: Optional[Path], value: str) -> str:
    return _resolve(base, value) if value.endswith(".py") else value


def load_config(
    path: Optional[Union[str, Path]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> SkittleConfig:
    """Load, merge and validate configuration.

    Args:
        path: YAML file to read (optional)
        env: Environment used for SKITTLE_* overrides (defaults to os.environ)

    Returns:
        A frozen SkittleConfig

    Raises:
        ConfigError: On unreadable YAML, a non-mapping document, or schema errors.
    """
    data: Dict[str, Any] = {}
    base: Optional[Path] = None
    source: Optional[Path] = None

    if path is not None:
        source = Path(path).resolve()
        base = source.parent
        try:
            # Fail closed: configuration must never silently ignore invalid YAML.
            loaded = read_yaml(source, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise ConfigError(str(exc), context={"path": str(source)}) from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {source}: {exc}", context={"path": str(source)}) from exc
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Configuration in {source} must be a mapping", context={"path": str(source)}
            )
        data.update(loaded)

    data.update(_env_overrides(os.environ if env is None else env))
    validate_config(data)

    cfg = SkittleConfig(
        paths=tuple(_resolve(base, p) for p in data.get("paths", [])),
        prepend_paths=tuple(_resolve(base, p) for p in data.get("prepend_paths", [])),
        append_paths=tuple(_resolve(base, p) for p in data.get("append_paths", [])),
        dot_path=_resolve(base, data["dot_path"]) if data.get("dot_path") else None,
        search_path_env=data.get("search_path_env", DEFAULT_ENV_VAR),
        helper_modules=tuple(_resolve_module(base, m) for m in data.get("helper_modules", [])),
        helpers=dict(data.get("helpers", {})),
        log_level=data.get("log_level", "WARNING"),
        source=source,
    )
    logger.debug("Loaded configuration from %s", source or "<defaults>")
    return cfg


def apply_config(config: SkittleConfig, **kwargs: Any) -> RenderEngine:
    """Create a RenderEngine from configuration.

    Helper modules are registered in order, then the configured helpers are
    bound eagerly so a missing helper fails at startup.
    """
    engine = RenderEngine(config.build_locator(), **kwargs)
    mappings: List[ModuleHelperMapping] = [
        ModuleHelperMapping.from_import(m) for m in config.helper_modules
    ]
    if mappings:
        engine.add_helper_mappings(mappings)
    for bound_name, helper_name in config.helpers.items():
        engine.add_helper(bound_name, helper_name)
    return engine


__all__ = ["SkittleConfig", "load_config", "validate_config", "apply_config", "ENV_PREFIX"]
