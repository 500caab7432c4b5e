import pytest

from docker_release.conftest import IMAGE_ID
from docker_release.docker import build_image, push_image, tag_image
from docker_release.errors import BuildMarkerNotFoundError
from docker_release.models import RegistryTarget
from docker_release.shell import ShellError

_target = RegistryTarget(docker_user="alice", image_name="myapp", version="1.2.4")


def test_build_image_returns_id_and_streams(ctx, fake_runner):
    assert build_image(ctx, "myapp") == IMAGE_ID
    assert fake_runner.streamed == ["docker build -t myapp ."]


def test_build_image_without_marker_raises(ctx, fake_runner):
    fake_runner.outputs["docker build"] = "#8 naming to docker.io/library/myapp done\n"
    with pytest.raises(BuildMarkerNotFoundError):
        build_image(ctx, "myapp")


def test_build_image_failure_raises_shell_error(ctx, fake_runner):
    fake_runner.exit_codes["docker build"] = 1
    with pytest.raises(ShellError):
        build_image(ctx, "myapp")


def test_tag_and_push(ctx, fake_runner):
    tag_image(ctx, IMAGE_ID, _target)
    push_image(ctx, _target)
    assert fake_runner.commands == [
        f"docker tag {IMAGE_ID} alice/myapp:1.2.4",
        "docker push alice/myapp:1.2.4",
    ]
    assert fake_runner.streamed == ["docker push alice/myapp:1.2.4"]
