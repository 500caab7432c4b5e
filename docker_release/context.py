from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from docker_release.models import (
    PackageDescriptor,
    ReleaseConfig,
    read_package_descriptor,
    read_release_config,
)
from docker_release.settings import DockerReleaseSettings
from docker_release.shell import RunAndWait, ShellRun, run_and_wait

logger = logging.getLogger(__name__)


@dataclass
class ReleaseContext:
    """Everything a release step needs, loaded once when the process starts."""

    repo_path: Path
    package: PackageDescriptor
    release_config: ReleaseConfig | None = None
    settings: DockerReleaseSettings = field(
        default_factory=DockerReleaseSettings.from_env
    )
    runner: RunAndWait = run_and_wait

    @classmethod
    def load(
        cls,
        repo_path: Path,
        settings: DockerReleaseSettings | None = None,
        runner: RunAndWait = run_and_wait,
    ) -> ReleaseContext:
        """Raises PackageDescriptorError"""
        settings = settings or DockerReleaseSettings.from_env()
        package = read_package_descriptor(settings.package_path(repo_path))
        release_config = read_release_config(settings.release_config_path(repo_path))
        if release_config is None:
            logger.debug(
                f"no {settings.release_config_filename} found in {repo_path}, using {settings.package_filename} only"
            )
        return cls(
            repo_path=repo_path,
            package=package,
            release_config=release_config,
            settings=settings,
            runner=runner,
        )

    @property
    def package_filename(self) -> str:
        return self.settings.package_filename

    def run(
        self, args: list[str], *, stream_output: bool = False, **kwargs
    ) -> ShellRun:
        return self.runner(
            args, cwd=self.repo_path, stream_output=stream_output, **kwargs
        )
