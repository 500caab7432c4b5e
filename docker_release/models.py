from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

from model_lib.model_base import Entity, Event
from pydantic import Field, ValidationError

from docker_release.errors import PackageDescriptorError

logger = logging.getLogger(__name__)


class BumpType(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class PackageDescriptor(Entity):
    """The `package.json` of the released project, unknown keys are kept."""

    name: str
    version: str
    image_name: str | None = Field(default=None, alias="imageName")


class ReleaseConfig(Entity):
    """The optional `.docker-release.json`."""

    image_name: str | None = Field(default=None, alias="imageName")
    docker_user: str | None = Field(default=None, alias="dockerUser")


class RegistryTarget(Event):
    docker_user: str
    image_name: str
    version: str

    @property
    def reference(self) -> str:
        """
        >>> RegistryTarget(docker_user="alice", image_name="myapp", version="2.0.1").reference
        'alice/myapp:2.0.1'
        """
        return f"{self.docker_user}/{self.image_name}:{self.version}"

    def __str__(self) -> str:
        return self.reference


def read_package_descriptor(path: Path) -> PackageDescriptor:
    """Raises PackageDescriptorError"""
    if not path.exists():
        raise PackageDescriptorError(path, "file not found")
    try:
        return PackageDescriptor.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        raise PackageDescriptorError(path, str(e)) from e


def read_release_config(path: Path) -> ReleaseConfig | None:
    if not path.exists():
        return None
    try:
        return ReleaseConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        logger.debug(f"ignoring unreadable release config @ {path}: {e!r}")
        return None


def local_image_name(
    package: PackageDescriptor, release_config: ReleaseConfig | None
) -> str:
    if release_config and release_config.image_name:
        return release_config.image_name
    return package.image_name or package.name
