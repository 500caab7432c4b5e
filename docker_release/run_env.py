"""Decides if prompts can be shown to a human or if their defaults must be used."""

import logging
import sys
from functools import lru_cache
from os import getenv

from zero_3rdparty.run_env import in_test_env

from docker_release.settings import DockerReleaseSettings

logger = logging.getLogger(__name__)


@lru_cache
def interactive_shell() -> bool:
    if DockerReleaseSettings.from_env().force_interactive_shell:
        logger.debug(
            f"Interactive shell forced by {DockerReleaseSettings.ENV_NAME_FORCE_INTERACTIVE_SHELL}"
        )
        return True
    if reason := non_interactive_reason():
        logger.debug(f"prompts will use their defaults: {reason}")
        return False
    return True


def non_interactive_reason() -> str:
    if in_test_env():
        return "running in test environment"
    if getenv("TERM", "") in ("dumb", "unknown"):
        return f"TERM={getenv('TERM')}"
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return "stdin/stdout is not a TTY"
    if getenv("CI", "false").lower() in ("true", "1", "yes"):
        return "running in CI"
    return ""
