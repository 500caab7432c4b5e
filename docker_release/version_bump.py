from __future__ import annotations

import logging

from docker_release.context import ReleaseContext
from docker_release.interactive import ChoiceTyped, select_list_choice
from docker_release.models import BumpType
from docker_release.parsing import parse_npm_version

logger = logging.getLogger(__name__)
SKIP_UPDATE = "no (skip update)"
BUMP_PROMPT = "What type of update is it?"


def bump_choices() -> list[ChoiceTyped[str]]:
    names = [bump.value for bump in BumpType] + [SKIP_UPDATE]
    return [ChoiceTyped(name=name, value=name) for name in names]


def prompt_bump_type() -> BumpType | None:
    """None means the version is released as is."""
    selection = select_list_choice(
        BUMP_PROMPT, bump_choices(), default=BumpType.PATCH.value
    )
    if selection == SKIP_UPDATE:
        return None
    return BumpType(selection)


def update_version(ctx: ReleaseContext, bump: BumpType) -> str:
    """`npm version` rewrites the package file, the git commit and tag are done after the image is built."""
    run = ctx.run(
        [
            "npm",
            "version",
            "--no-git-tag-version",
            bump.value,
            "-m",
            "version %s",
        ]
    )
    version = parse_npm_version(run.stdout)
    logger.info(f"{bump} bump: {ctx.package.version} -> {version}")
    return version


def resolve_version(ctx: ReleaseContext, bump: BumpType | None) -> str:
    if bump is None:
        logger.info(f"skipping version update, using {ctx.package.version}")
        return ctx.package.version
    return update_version(ctx, bump)
