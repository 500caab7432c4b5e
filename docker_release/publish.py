from __future__ import annotations

import logging

from docker_release.context import ReleaseContext
from docker_release.interactive import ChoiceTyped, select_list_choice, text
from docker_release.models import PackageDescriptor, RegistryTarget, ReleaseConfig
from docker_release.parsing import parse_registry_target, validate_registry_input

logger = logging.getLogger(__name__)
PUBLISH_PROMPT = "Do you want to publish image to hub.docker.com?"
ENTER_MANUALLY = "Enter manually"
DO_NOT_PUBLISH = "No, don't publish"


def inferred_target(
    package: PackageDescriptor, release_config: ReleaseConfig | None, version: str
) -> RegistryTarget | None:
    """Only complete when a docker user is configured, the values are used as is."""
    docker_user = release_config.docker_user if release_config else None
    image_name = (
        release_config.image_name if release_config else None
    ) or package.image_name or package.name
    if not (docker_user and image_name):
        return None
    return RegistryTarget(docker_user=docker_user, image_name=image_name, version=version)


def inferred_choice_name(target: RegistryTarget) -> str:
    return f'As "{target.reference}"'


def manual_prompt(version: str) -> str:
    return f"Enter docker hub image (if version won't be specified, {version} will be used):\n "


def ask_manual_target(version: str) -> RegistryTarget:
    raw = text(manual_prompt(version), validate=validate_registry_input)
    return parse_registry_target(raw, default_version=version)


def resolve_publish_target(ctx: ReleaseContext, version: str) -> RegistryTarget | None:
    """None when the image should not be published"""
    inferred = inferred_target(ctx.package, ctx.release_config, version)
    choices: list[ChoiceTyped[str]] = []
    if inferred:
        choices.append(
            ChoiceTyped(name=inferred_choice_name(inferred), value=inferred.reference)
        )
    choices.extend(
        ChoiceTyped(name=name, value=name) for name in (ENTER_MANUALLY, DO_NOT_PUBLISH)
    )
    selection = select_list_choice(PUBLISH_PROMPT, choices, default=DO_NOT_PUBLISH)
    if selection == DO_NOT_PUBLISH:
        logger.info("image will not be published")
        return None
    if selection == ENTER_MANUALLY:
        return ask_manual_target(version)
    assert inferred, f"unexpected publish selection: {selection}"
    return inferred
