"""YAML configuration parser for composerkit.

This module parses composerkit.yaml, which holds installer settings and
Composer facade defaults:

    installer:
      install_path: /opt/composer
      use_sudo: true
    composer:
      working_dir: .
      env:
        COMPOSER_NO_INTERACTION: "1"
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from composerkit.composer import ComposerOptions
from composerkit.core.exceptions import ConfigError
from composerkit.installer.config import InstallerConfig, default_config
from composerkit.installer.installer import Installer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "composerkit.yaml"

_INSTALLER_TYPES = {
    "download_url": str,
    "install_path": str,
    "use_proxy": bool,
    "proxy_url": str,
    "timeout_seconds": int,
    "use_sudo": bool,
    "prefer_brew_on_mac": bool,
    "runtime": str,
    "phar_name": str,
    "expected_sha384": str,
}

_COMPOSER_TYPES = {
    "executable_path": str,
    "working_dir": str,
    "auto_install": bool,
    "default_timeout": (int, float),
    "env": dict,
}


@dataclass
class ComposerSection:
    """Defaults for the Composer facade."""

    executable_path: Optional[str] = None
    working_dir: Optional[str] = None
    auto_install: bool = True
    default_timeout: Optional[float] = 600
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class ComposerKitConfig:
    """Complete composerkit configuration."""

    installer: Dict[str, Any] = field(default_factory=dict)
    composer: ComposerSection = field(default_factory=ComposerSection)
    source: Optional[Path] = None

    def installer_config(self, os_name: Optional[str] = None) -> InstallerConfig:
        """Platform defaults overlaid with the installer section."""
        try:
            return default_config(os_name).with_changes(**self.installer)
        except ValueError as e:
            raise ConfigError(f"Invalid installer configuration: {e}") from e

    def composer_options(self) -> ComposerOptions:
        """
        Build ComposerOptions from the composer section.

        The installer is built from the installer section.
        """
        section = self.composer
        return ComposerOptions(
            executable_path=section.executable_path,
            working_dir=section.working_dir,
            auto_install=section.auto_install,
            installer=Installer(self.installer_config()),
            env=dict(section.env),
            default_timeout=section.default_timeout,
        )


def parse_config(config_path: Path) -> ComposerKitConfig:
    """
    Parse composerkit.yaml configuration file.

    Args:
        config_path: Path to composerkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        data = {}

    config = parse_config_data(data)
    config.source = config_path
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def load_config(
    config_path: Optional[Path] = None, required: bool = False
) -> ComposerKitConfig:
    """
    Load configuration, falling back to defaults.

    Args:
        config_path: File to load (./composerkit.yaml if None)
        required: Raise if the file does not exist

    Raises:
        ConfigError: If the file is invalid, or missing while required
    """
    path = Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_NAME
    if not path.exists() and not required:
        logger.debug(f"No configuration at {path}, using defaults")
        return ComposerKitConfig()
    return parse_config(path)


def parse_config_data(data: Any) -> ComposerKitConfig:
    """Validate an already-loaded YAML document."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = set(data) - {"installer", "composer"}
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {sorted(unknown)}")

    installer = _check_section("installer", data.get("installer"), _INSTALLER_TYPES)
    composer = _check_section("composer", data.get("composer"), _COMPOSER_TYPES)

    if "install_path" in installer:
        installer["install_path"] = Path(installer["install_path"])

    env = composer.get("env", {})
    for key, value in env.items():
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ConfigError(f"composer.env.{key} must be a string")
    composer["env"] = {str(k): str(v) for k, v in env.items()}

    known = {f.name for f in fields(ComposerSection)}
    return ComposerKitConfig(
        installer=installer,
        composer=ComposerSection(**{k: v for k, v in composer.items() if k in known}),
    )


def _check_section(name: str, section: Any, types: Dict[str, Any]) -> Dict[str, Any]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping")

    result = {}
    for key, value in section.items():
        if key not in types:
            raise ConfigError(f"Unknown option: {name}.{key}")
        if value is None:
            continue
        expected = types[key]
        # bool is an int subclass; keep it out of numeric fields
        if isinstance(value, bool) and expected is not bool:
            raise ConfigError(f"{name}.{key} has invalid type bool")
        if not isinstance(value, expected):
            raise ConfigError(
                f"{name}.{key} has invalid type {type(value).__name__}"
            )
        result[key] = value

    return result


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ComposerSection",
    "ComposerKitConfig",
    "parse_config",
    "load_config",
    "parse_config_data",
]
