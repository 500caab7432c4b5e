from __future__ import annotations

import logging

from docker_release.context import ReleaseContext
from docker_release.errors import DirtyWorkingTreeError
from docker_release.parsing import is_clean_status

logger = logging.getLogger(__name__)
# the clean sentinel is only printed in english
_GIT_ENV = {"LC_ALL": "C"}


def git_status(ctx: ReleaseContext) -> str:
    return ctx.run(["git", "status"], env=_GIT_ENV).stdout


def ensure_clean_working_tree(ctx: ReleaseContext) -> None:
    """Raises DirtyWorkingTreeError"""
    status = git_status(ctx)
    if not is_clean_status(status):
        raise DirtyWorkingTreeError(status)
    logger.info("working tree is clean")


def rollback_package_file(ctx: ReleaseContext) -> None:
    logger.warning(f"reverting {ctx.package_filename}")
    ctx.run(["git", "checkout", "--", ctx.package_filename])


def version_message(version: str) -> str:
    return f"version {version}"


def version_tag(version: str) -> str:
    return f"v{version}"


def git_release(ctx: ReleaseContext, version: str) -> None:
    """Commit the bumped package file, tag it and push both"""
    message = version_message(version)
    tag = version_tag(version)
    ctx.run(["git", "add", "--", ctx.package_filename])
    ctx.run(["git", "commit", "-m", message])
    ctx.run(["git", "tag", tag, "-m", message])
    ctx.run(["git", "push"])
    ctx.run(["git", "push", "--tags", ctx.settings.git_remote, tag])
    logger.info(f"pushed {tag} to {ctx.settings.git_remote}")
