"""
Composer facade.

Composer resolves an executable at construction (explicit path, detection,
or installation followed by detection) and then runs commands through the
invocation core. A constructed instance always has a usable executable path.

Example:
    from composerkit import Composer, ComposerOptions

    composer = Composer(ComposerOptions(working_dir="/srv/app"))
    print(composer.get_version())
    composer.run("install", "--no-dev")
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from composerkit.commands import ComposerCommands
from composerkit.core.context import RunContext
from composerkit.core.exceptions import ExecutableNotFoundError, InstallationError
from composerkit.detector.detector import Detector
from composerkit.fixtures import FixtureTable
from composerkit.installer.installer import Installer
from composerkit.runner import run_command

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 600


@dataclass
class ComposerOptions:
    """
    Options for constructing a Composer.

    Attributes:
        executable_path: Explicit executable (skips detection; must exist)
        working_dir: Directory commands run in (inherited if empty)
        auto_install: Install Composer when detection fails
        installer: Installer to use (platform default if None)
        detector: Detector to use (platform default if None)
        env: Complete child environment (inherited if empty)
        default_timeout: Seconds allowed per run() call (None or 0 for no limit)
        fixtures: Fixture table (process-wide table if None)
    """

    executable_path: Optional[Union[str, Path]] = None
    working_dir: Optional[Union[str, Path]] = None
    auto_install: bool = True
    installer: Optional[Installer] = None
    detector: Optional[Detector] = None
    env: Dict[str, str] = field(default_factory=dict)
    default_timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    fixtures: Optional[FixtureTable] = None


def default_options() -> ComposerOptions:
    return ComposerOptions()


class Composer(ComposerCommands):
    """
    Handle on a resolved Composer executable.

    Setters are meant for single-threaded setup; run(), run_with_timeout()
    and run_with_context() may be called from several threads at once.

    Raises (from the constructor):
        ExecutableNotFoundError: If no executable can be resolved
        InstallationError: If auto-installation fails
    """

    def __init__(self, options: Optional[ComposerOptions] = None):
        options = options or default_options()

        self._working_dir = options.working_dir
        self._env: Dict[str, str] = dict(options.env or {})
        self.default_timeout = options.default_timeout
        self.auto_install = options.auto_install
        self.fixtures = options.fixtures
        self.installer = options.installer or Installer()
        self.detector = options.detector or Detector()

        self._executable_path = self._resolve_executable(options.executable_path)
        logger.info(f"Using Composer at {self._executable_path}")

    def _resolve_executable(self, explicit: Optional[Union[str, Path]]) -> Path:
        if explicit:
            path = Path(explicit)
            if not path.exists():
                raise ExecutableNotFoundError(
                    f"Specified Composer executable does not exist: {path}"
                )
            return path

        try:
            return self.detector.detect()
        except ExecutableNotFoundError as e:
            if not self.auto_install:
                raise
            detect_error = e

        logger.info(f"Composer not found ({detect_error}), installing")
        try:
            self.installer.install()
        except Exception as e:
            raise InstallationError(f"Composer installation failed: {e}") from e

        # The install directory need not be among the default candidates
        self.detector.add_possible_path(self.installer.executable_path)

        try:
            return self.detector.detect()
        except ExecutableNotFoundError as e:
            raise ExecutableNotFoundError(
                f"Composer not found after installation: {e}"
            ) from e

    @property
    def executable_path(self) -> Path:
        return self._executable_path

    @property
    def working_dir(self) -> Optional[Union[str, Path]]:
        return self._working_dir

    def set_working_dir(self, working_dir: Optional[Union[str, Path]]) -> None:
        self._working_dir = working_dir

    @property
    def env(self) -> Dict[str, str]:
        """Copy of the child environment ({} means inherit os.environ)."""
        return dict(self._env)

    def set_env(self, env: Optional[Mapping[str, str]]) -> None:
        """Replace the child environment wholesale."""
        self._env = dict(env or {})

    def is_installed(self) -> bool:
        return self._executable_path.exists()

    def run(self, *args: str) -> str:
        """
        Run Composer with the default timeout.

        Returns:
            Combined stdout and stderr

        Raises:
            CommandExecutionError: If Composer exits non-zero
            DeadlineExceededError: If default_timeout elapses
        """
        timeout = self.default_timeout if self.default_timeout else None
        return self.run_with_context(RunContext(timeout=timeout), *args)

    def run_with_timeout(self, timeout: float, *args: str) -> str:
        return self.run_with_context(RunContext(timeout=timeout), *args)

    def run_with_context(self, context: RunContext, *args: str) -> str:
        """Run Composer bounded by a caller-supplied context."""
        return run_command(
            self._executable_path,
            args,
            working_dir=self._working_dir,
            env=self._env,
            context=context,
            fixtures=self.fixtures,
        )

    def __repr__(self) -> str:
        return f"Composer(executable_path={str(self._executable_path)!r})"


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "ComposerOptions",
    "default_options",
    "Composer",
]
