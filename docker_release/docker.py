from __future__ import annotations

import logging

from docker_release.context import ReleaseContext
from docker_release.models import RegistryTarget
from docker_release.parsing import parse_build_image_id

logger = logging.getLogger(__name__)


def build_image(ctx: ReleaseContext, image_name: str) -> str:
    """Raises BuildMarkerNotFoundError if docker exits 0 without printing the image id"""
    logger.info(f"Start image building of {image_name}...")
    run = ctx.run(["docker", "build", "-t", image_name, "."], stream_output=True)
    image_id = parse_build_image_id(run.stdout, ctx.settings.tail_search_length)
    logger.info(f"built image {image_id}")
    return image_id


def tag_image(ctx: ReleaseContext, image_id: str, target: RegistryTarget) -> None:
    ctx.run(["docker", "tag", image_id, target.reference])


def push_image(ctx: ReleaseContext, target: RegistryTarget) -> None:
    ctx.run(["docker", "push", target.reference], stream_output=True)
    logger.info(f"pushed {target}")
