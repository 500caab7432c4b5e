"""CLI entry point for docker-release."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from typer import Typer

from docker_release.context import ReleaseContext
from docker_release.errors import DirtyWorkingTreeError, PackageDescriptorError
from docker_release.printer import console
from docker_release.settings import DockerReleaseSettings
from docker_release.typer_command import configure_logging
from docker_release.workflow import run_release

logger = logging.getLogger(__name__)
app = Typer(
    name="docker-release",
    help="Bump the version, build the docker image, push it and tag the release in git.",
)


@app.command()
def release(
    path: Path | None = typer.Option(
        None,
        "-p",
        "--path",
        help="Directory with the package.json and Dockerfile (default: current directory)",
    ),
):
    """Interactive release: version bump -> docker build -> docker push -> git tag"""
    settings = DockerReleaseSettings.from_env()
    repo_path = (path or Path.cwd()).resolve()
    try:
        ctx = ReleaseContext.load(repo_path, settings)
    except PackageDescriptorError as e:
        logger.error(str(e))
        raise typer.Exit(1)
    try:
        release_run = run_release(ctx)
    except DirtyWorkingTreeError as e:
        logger.error(f"Error: {e}")
        console.print(e.status, markup=False, highlight=False)
        raise typer.Exit(1)
    published = f" pushed as {release_run.target}" if release_run.target else ""
    logger.info(f"released {release_run.version} image {release_run.image_id}{published}")


def main():
    configure_logging(app)
    app()


if __name__ == "__main__":
    main()
