"""
Thin Composer command helpers.

ComposerCommands is mixed into Composer. Each helper builds an argument
vector, calls self.run() and returns the output (or nothing). Parsing is
limited to what the helper's return value needs.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from composerkit import manifest
from composerkit.core.exceptions import ComposerKitError

logger = logging.getLogger(__name__)


def parse_config_list(output: str) -> Dict[str, str]:
    """
    Parse `composer config --list` output.

    Accepts both `[key] value` lines (what Composer prints) and `key: value`
    lines.

    Example:
        >>> parse_config_list("[vendor-dir] vendor\\n[process-timeout] 300")
        {'vendor-dir': 'vendor', 'process-timeout': '300'}
    """
    info: Dict[str, str] = {}
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue

        if line.startswith("[") and "]" in line:
            key, _, value = line[1:].partition("]")
            info[key.strip()] = value.strip()
        elif ":" in line:
            key, _, value = line.partition(":")
            info[key.strip()] = value.strip()

    return info


class ComposerCommands:
    """Command helpers built on run(); the host class provides run() and working_dir."""

    # Information

    def get_version(self) -> str:
        """
        Get the Composer version.

        Returns:
            Third whitespace-separated token of `composer --version`
            ("Composer version 2.5.0 2023-01-01" gives "2.5.0")

        Raises:
            ComposerKitError: If the output has fewer than three tokens
        """
        output = self.run("--version")
        parts = output.strip().split()
        if len(parts) < 3:
            raise ComposerKitError(f"Cannot parse version from output: {output!r}")
        return parts[2]

    def diagnose(self) -> str:
        return self.run("diagnose")

    def get_composer_home(self) -> str:
        return self.run("config", "--global", "home").strip()

    def get_environment_info(self) -> Dict[str, str]:
        """Composer configuration as reported by `config --list`."""
        return parse_config_list(self.run("config", "--list"))

    def check_platform_reqs(self) -> str:
        return self.run("check-platform-reqs")

    # Maintenance

    def self_update(self) -> None:
        self.run("self-update")

    def clear_cache(self) -> None:
        self.run("clear-cache")

    def validate(self, strict: bool = False, with_dependencies: bool = False) -> None:
        """
        Validate composer.json.

        Raises:
            CommandExecutionError: If validation reports errors
        """
        args = ["validate"]
        if strict:
            args.append("--strict")
        if with_dependencies:
            args.append("--with-dependencies")
        self.run(*args)

    # Dependencies

    def install(self, no_dev: bool = False, optimize: bool = False) -> None:
        args = ["install"]
        if no_dev:
            args.append("--no-dev")
        if optimize:
            args.append("--optimize-autoloader")
        self.run(*args)

    def update(
        self, packages: Optional[Iterable[str]] = None, no_dev: bool = False
    ) -> None:
        args = ["update"]
        if no_dev:
            args.append("--no-dev")
        args.extend(packages or [])
        self.run(*args)

    def require_package(self, package: str, version: str = "", dev: bool = False) -> None:
        """
        Add a package with `composer require`.

        Args:
            package: Package name, e.g. "symfony/console"
            version: Version constraint ("" lets Composer choose)
            dev: Add to require-dev
        """
        args = ["require"]
        if dev:
            args.append("--dev")
        args.append(f"{package}:{version}" if version else package)
        self.run(*args)

    def remove_package(self, package: str, dev: bool = False) -> None:
        args = ["remove"]
        if dev:
            args.append("--dev")
        args.append(package)
        self.run(*args)

    def show_package(self, package: str) -> str:
        return self.run("show", package)

    def search(self, query: str) -> str:
        return self.run("search", query)

    def dump_autoload(self, optimize: bool = False) -> None:
        args = ["dump-autoload"]
        if optimize:
            args.append("--optimize")
        self.run(*args)

    # composer.json in the working directory

    def read_manifest(self) -> Dict[str, Any]:
        return manifest.read_manifest(self.working_dir)

    def write_manifest(self, data: Dict[str, Any]) -> None:
        manifest.write_manifest(data, self.working_dir)

    def add_require(self, package: str, version: str, dev: bool = False) -> None:
        """Edit composer.json directly, without running Composer."""
        manifest.add_require(package, version, dev=dev, project_dir=self.working_dir)

    def remove_require(self, package: str, dev: bool = False) -> bool:
        return manifest.remove_require(package, dev=dev, project_dir=self.working_dir)


__all__ = ["ComposerCommands", "parse_config_list"]
