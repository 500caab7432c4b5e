# flake8: noqa
from docker_release.context import ReleaseContext
from docker_release.errors import (
    BuildMarkerNotFoundError,
    DirtyWorkingTreeError,
    DockerReleaseError,
    NoHumanAvailableError,
    PackageDescriptorError,
    VersionOutputError,
)
from docker_release.models import BumpType, RegistryTarget
from docker_release.shell import ShellConfig, ShellError, ShellRun, run_and_wait
from docker_release.workflow import ReleaseRun, ReleaseStep, run_release

VERSION = "0.1.0"
__all__ = (
    "BuildMarkerNotFoundError",
    "BumpType",
    "DirtyWorkingTreeError",
    "DockerReleaseError",
    "NoHumanAvailableError",
    "PackageDescriptorError",
    "RegistryTarget",
    "ReleaseContext",
    "ReleaseRun",
    "ReleaseStep",
    "ShellConfig",
    "ShellError",
    "ShellRun",
    "VersionOutputError",
    "run_and_wait",
    "run_release",
)
