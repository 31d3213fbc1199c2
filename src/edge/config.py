"""Configuration for the edge server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def env_flag(value: Optional[str]) -> bool:
    """Interpret an environment string as a boolean flag."""
    return bool(value) and value.strip().lower() in _TRUE_VALUES


@dataclass
class EdgeConfig:
    """Configuration for the edge server.

    Attributes:
        volume_mount_path: Directory holding ``name@x.y.z`` asset directories.
        cors_all: Attach wildcard CORS headers to redirects.
        path_auto_resolve: Follow redirects internally instead of answering 302.
        serve_files: Serve complete URIs from the expander when no file was
            found up front.
        catalog_ttl: Seconds a catalog snapshot may be reused; 0 disables caching.
    """

    host: str = Constants.DEFAULT_HOST
    port: int = Constants.DEFAULT_PORT
    volume_mount_path: str = Constants.DEFAULT_VOLUME_MOUNT_PATH
    cors_all: bool = False
    path_auto_resolve: bool = False
    serve_files: bool = False
    catalog_ttl: int = 0
    allow_external: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EdgeConfig":
        """Create config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, base: Optional["EdgeConfig"] = None
    ) -> "EdgeConfig":
        """Create config from A7_* environment variables layered over ``base``."""
        env = os.environ if environ is None else environ
        config = base or cls()

        if env.get(Constants.ENV_VOLUME_MOUNT_PATH):
            config.volume_mount_path = env[Constants.ENV_VOLUME_MOUNT_PATH]
        if Constants.ENV_CORS_ALL in env:
            config.cors_all = env_flag(env[Constants.ENV_CORS_ALL])
        if Constants.ENV_PATH_AUTO_RESOLVE in env:
            config.path_auto_resolve = env_flag(env[Constants.ENV_PATH_AUTO_RESOLVE])
        if Constants.ENV_SERVE_FILES in env:
            config.serve_files = env_flag(env[Constants.ENV_SERVE_FILES])
        if env.get(Constants.ENV_HOST):
            config.host = env[Constants.ENV_HOST]
        config.port = _int_setting(env, Constants.ENV_PORT, config.port)
        config.catalog_ttl = _int_setting(env, Constants.ENV_CATALOG_TTL, config.catalog_ttl)
        return config

    @classmethod
    def from_args(cls, args: Any, environ: Optional[Mapping[str, str]] = None) -> "EdgeConfig":
        """Create config from a config file, the environment, then CLI arguments.

        Args:
            args: Parsed CLI arguments namespace.
            environ: Environment mapping; defaults to ``os.environ``.

        Returns:
            EdgeConfig instance.
        """
        base = cls.from_mapping(load_config_file(getattr(args, "CONFIG", None)))
        config = cls.from_env(environ, base=base)

        if getattr(args, "HOST", None):
            config.host = args.HOST
        if getattr(args, "PORT", None) is not None:
            config.port = args.PORT
        if getattr(args, "VOLUME", None):
            config.volume_mount_path = args.VOLUME
        if getattr(args, "CATALOG_TTL", None) is not None:
            config.catalog_ttl = args.CATALOG_TTL
        for flag in ("cors_all", "path_auto_resolve", "serve_files", "allow_external"):
            if getattr(args, flag.upper(), False) is True:
                setattr(config, flag, True)
        return config

    def as_dict(self) -> Dict[str, Any]:
        """Flags and paths, for the health endpoint and the startup log."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s: %r, using %s", key, raw, default)
        return default


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load edge configuration from a YAML file.

    Args:
        config_path: Path to a YAML config file.

    Returns:
        The ``edge`` section of the file (or the whole mapping), else {}.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}

    if not isinstance(data, dict):
        return {}
    section = data.get("edge", data)
    return section if isinstance(section, dict) else {}
