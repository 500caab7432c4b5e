"""Parsers for the text contracts of git, npm and docker."""

from __future__ import annotations

import re
from typing import Literal

from docker_release.errors import BuildMarkerNotFoundError, VersionOutputError
from docker_release.models import RegistryTarget

CLEAN_STATUS_SENTINEL = "\nnothing to commit, working tree clean"
BUILD_TAIL_LENGTH = 100
_build_marker_regex = re.compile(r"\nSuccessfully built ([0-9a-f]+)(?:\n|$)")
# user and image are lowercase only, the inferred target from the config files is never checked against this
registry_reference_regex = re.compile(
    r"^(?P<user>[a-z0-9]+)/(?P<image>[a-z0-9-]+)(?::(?P<version>[a-z0-9._-]+))?$"
)
REQUIRED_MESSAGE = "Required"
INVALID_FORMAT_MESSAGE = 'Invalid format. Pattern: "user/image" or "user/image:version"'


def is_clean_status(output: str) -> bool:
    """
    >>> is_clean_status("On branch main\\nnothing to commit, working tree clean")
    True
    >>> is_clean_status("On branch main\\nChanges not staged for commit:")
    False
    """
    return output.strip().endswith(CLEAN_STATUS_SENTINEL)


def parse_npm_version(output: str) -> str:
    """npm prints the new version as the last line, lifecycle scripts can print before it.
    >>> parse_npm_version("v1.2.4")
    '1.2.4'
    >>> parse_npm_version("> prebuild\\n1.2.4\\n")
    '1.2.4'
    """
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        raise VersionOutputError(output)
    return lines[-1].removeprefix("v")


def parse_build_image_id(output: str, tail_length: int = BUILD_TAIL_LENGTH) -> str:
    """Raises BuildMarkerNotFoundError
    >>> parse_build_image_id("Step 2/2 : CMD node\\nSuccessfully built 3f9a21bd\\n")
    '3f9a21bd'
    """
    tail = output.strip()[-tail_length:]
    if match := _build_marker_regex.search(tail):
        return match[1]
    raise BuildMarkerNotFoundError(tail)


def validate_registry_input(raw: str) -> Literal[True] | str:
    """Returns True or the message to show before asking again (questionary validate protocol)"""
    if not raw:
        return REQUIRED_MESSAGE
    if not registry_reference_regex.match(raw):
        return INVALID_FORMAT_MESSAGE
    return True


def parse_registry_target(raw: str, default_version: str) -> RegistryTarget:
    """
    >>> parse_registry_target("alice/myapp:2.0.1", "1.0.0").reference
    'alice/myapp:2.0.1'
    >>> parse_registry_target("alice/myapp", "1.0.0").reference
    'alice/myapp:1.0.0'
    """
    match = registry_reference_regex.match(raw)
    if match is None:
        raise ValueError(f"{INVALID_FORMAT_MESSAGE}, got: {raw!r}")
    return RegistryTarget(
        docker_user=match["user"],
        image_name=match["image"],
        version=match["version"] or default_version,
    )
