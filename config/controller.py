"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


class ConfigController:
    """Singleton controller for loading audit configuration."""

    _instance: "ConfigController | None" = None

    def __init__(self, config_dir: Path | None = None, config_file: str = "default.yaml") -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()
        ConfigController._instance = self

    @classmethod
    def get_instance(cls, config_dir: Path | None = None) -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls(config_dir=config_dir)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        config: dict[str, Any] = {}
        if self.paths.config_file.exists():
            config = self._read_yaml(self.paths.config_file)

        if self.paths.override_file.exists():
            override_config = self._read_yaml(self.paths.override_file)
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = self._normalize(config)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def get_section(self, name: str) -> dict[str, Any]:
        return dict(self.config.get(name) or {})

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as file:
            loaded = yaml.safe_load(file) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return loaded

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill in typed defaults for every known section."""

        normalized = dict(config)
        audit_cfg = dict(normalized.get("audit") or {})
        report_cfg = dict(normalized.get("report") or {})
        logging_cfg = dict(normalized.get("logging") or {})

        audit_cfg["title"] = str(audit_cfg.get("title", "EXECUTOR ENVIRONMENT CHECK"))
        audit_cfg["subtitle"] = str(
            audit_cfg.get("subtitle", "Testing executor capabilities with extreme thoroughness")
        )
        audit_cfg["host_module"] = str(audit_cfg.get("host_module", "host"))
        catalogs = audit_cfg.get("catalogs")
        if catalogs is None:
            catalogs = ["catalog.crypt", "catalog.filesystem", "catalog.misc"]
        elif isinstance(catalogs, str):
            catalogs = [catalogs]
        audit_cfg["catalogs"] = [str(name) for name in catalogs]
        audit_cfg["workspace_dir"] = str(audit_cfg.get("workspace_dir", "workspace"))
        audit_cfg["request_url"] = str(audit_cfg.get("request_url", "https://httpbin.org/get"))
        audit_cfg["request_timeout_s"] = float(audit_cfg.get("request_timeout_s", 10.0))

        report_cfg["max_successes_shown"] = int(report_cfg.get("max_successes_shown", 10))

        log_file = logging_cfg.get("file")
        logging_cfg["file"] = str(log_file) if log_file else None
        logging_cfg["level"] = str(logging_cfg.get("level", "INFO")).upper()

        normalized["audit"] = audit_cfg
        normalized["report"] = report_cfg
        normalized["logging"] = logging_cfg
        return normalized
