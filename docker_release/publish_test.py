import pytest

from docker_release.interactive import KeyInput, question_patcher
from docker_release.models import PackageDescriptor, ReleaseConfig
from docker_release.publish import (
    DO_NOT_PUBLISH,
    ENTER_MANUALLY,
    inferred_choice_name,
    inferred_target,
    manual_prompt,
    resolve_publish_target,
)

_package = PackageDescriptor(name="myapp", version="1.2.3")


def test_no_inferred_target_without_docker_user():
    assert inferred_target(_package, None, "1.2.4") is None
    assert inferred_target(_package, ReleaseConfig(image_name="web"), "1.2.4") is None


@pytest.mark.parametrize(
    "package, config, expected",
    [
        (_package, ReleaseConfig(docker_user="alice"), "alice/myapp:1.2.4"),
        (
            PackageDescriptor(name="myapp", version="1.2.3", image_name="api"),
            ReleaseConfig(docker_user="alice"),
            "alice/api:1.2.4",
        ),
        (
            PackageDescriptor(name="myapp", version="1.2.3", image_name="api"),
            ReleaseConfig(docker_user="alice", image_name="web"),
            "alice/web:1.2.4",
        ),
    ],
    ids=["package name", "package imageName", "release config imageName"],
)
def test_inferred_target(package, config, expected):
    target = inferred_target(package, config, "1.2.4")
    assert target is not None
    assert target.reference == expected
    assert inferred_choice_name(target) == f'As "{expected}"'


def test_inferred_target_is_not_validated_against_manual_format():
    config = ReleaseConfig(docker_user="Alice", image_name="My_App")
    target = inferred_target(_package, config, "1.2.4")
    assert target is not None
    assert target.reference == "Alice/My_App:1.2.4"


def test_manual_prompt_mentions_fallback_version():
    assert manual_prompt("1.2.4") == (
        "Enter docker hub image (if version won't be specified, 1.2.4 will be used):\n "
    )


def test_resolve_publish_target_defaults_to_not_publishing(ctx):
    with question_patcher(responses=[""]):
        assert resolve_publish_target(ctx, "1.2.4") is None


def test_resolve_publish_target_manual_entry_is_asked_again_when_invalid(ctx):
    invalid = "Alice/My_App"
    retype = KeyInput.ENTER + KeyInput.BACK * len(invalid) + "alice/myapp"
    with question_patcher(responses=[KeyInput.ONE, invalid + retype]):
        target = resolve_publish_target(ctx, "1.2.4")
    assert target is not None
    assert target.reference == "alice/myapp:1.2.4"


def test_choice_constants():
    assert ENTER_MANUALLY == "Enter manually"
    assert DO_NOT_PUBLISH == "No, don't publish"
