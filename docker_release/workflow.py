"""The release runs as a fixed sequence of steps:

CHECK_CLEAN -> SELECT_VERSION -> UPDATE_VERSION | SKIP_VERSION -> BUILD_IMAGE
-> RESOLVE_PUBLISH_TARGET -> TAG_AND_PUSH | SKIP_PUBLISH -> GIT_FINALIZE | SKIP_GIT_FINALIZE -> DONE

Nothing is written before BUILD_IMAGE except the package file (by `npm version`).
Any error from BUILD_IMAGE onward enters ROLLBACK, the package file is checked out again and the error is re-raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from docker_release.context import ReleaseContext
from docker_release.docker import build_image, push_image, tag_image
from docker_release.git import ensure_clean_working_tree, git_release, rollback_package_file
from docker_release.models import BumpType, RegistryTarget, local_image_name
from docker_release.publish import resolve_publish_target
from docker_release.version_bump import prompt_bump_type, resolve_version

logger = logging.getLogger(__name__)


class ReleaseStep(StrEnum):
    CHECK_CLEAN = "check_clean"
    SELECT_VERSION = "select_version"
    UPDATE_VERSION = "update_version"
    SKIP_VERSION = "skip_version"
    BUILD_IMAGE = "build_image"
    RESOLVE_PUBLISH_TARGET = "resolve_publish_target"
    TAG_AND_PUSH = "tag_and_push"
    SKIP_PUBLISH = "skip_publish"
    GIT_FINALIZE = "git_finalize"
    SKIP_GIT_FINALIZE = "skip_git_finalize"
    ROLLBACK = "rollback"
    DONE = "done"


@dataclass
class ReleaseRun:
    bump: BumpType | None = None
    version: str = ""
    image_id: str = ""
    target: RegistryTarget | None = None
    steps: list[ReleaseStep] = field(default_factory=list)

    def enter(self, step: ReleaseStep) -> None:
        logger.debug(f"release step: {step}")
        self.steps.append(step)

    @property
    def published(self) -> bool:
        return ReleaseStep.TAG_AND_PUSH in self.steps

    @property
    def done(self) -> bool:
        return bool(self.steps) and self.steps[-1] == ReleaseStep.DONE


def run_release(ctx: ReleaseContext, release: ReleaseRun | None = None) -> ReleaseRun:
    """Raises DirtyWorkingTreeError before anything is changed, other errors after the rollback.
    Pass `release` to inspect the steps taken when an error is raised."""
    release = release or ReleaseRun()
    release.enter(ReleaseStep.CHECK_CLEAN)
    ensure_clean_working_tree(ctx)

    release.enter(ReleaseStep.SELECT_VERSION)
    release.bump = prompt_bump_type()
    if release.bump is None:
        release.enter(ReleaseStep.SKIP_VERSION)
    else:
        release.enter(ReleaseStep.UPDATE_VERSION)
    release.version = resolve_version(ctx, release.bump)
    try:
        _build_publish_finalize(ctx, release)
    except BaseException as e:
        release.enter(ReleaseStep.ROLLBACK)
        logger.warning(f"release of {release.version} failed: {e!r}")
        _rollback(ctx)
        raise
    release.enter(ReleaseStep.DONE)
    return release


def _build_publish_finalize(ctx: ReleaseContext, release: ReleaseRun) -> None:
    release.enter(ReleaseStep.BUILD_IMAGE)
    release.image_id = build_image(ctx, local_image_name(ctx.package, ctx.release_config))

    release.enter(ReleaseStep.RESOLVE_PUBLISH_TARGET)
    release.target = resolve_publish_target(ctx, release.version)
    if target := release.target:
        release.enter(ReleaseStep.TAG_AND_PUSH)
        tag_image(ctx, release.image_id, target)
        push_image(ctx, target)
    else:
        release.enter(ReleaseStep.SKIP_PUBLISH)

    if release.bump is None:
        release.enter(ReleaseStep.SKIP_GIT_FINALIZE)
    else:
        release.enter(ReleaseStep.GIT_FINALIZE)
        git_release(ctx, release.version)


def _rollback(ctx: ReleaseContext) -> None:
    try:
        rollback_package_file(ctx)
    except Exception as e:
        logger.error(f"rollback of {ctx.package_filename} failed: {e!r}")
        logger.exception(e)
