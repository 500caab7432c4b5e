import json
import shlex
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from docker_release.context import ReleaseContext
from docker_release.models import read_package_descriptor, read_release_config
from docker_release.settings import DockerReleaseSettings
from docker_release.shell import ShellConfig, ShellError, ShellRun

CLEAN_STATUS = "On branch main\nYour branch is up to date with 'origin/main'.\n\nnothing to commit, working tree clean\n"
DIRTY_STATUS = "On branch main\nChanges not staged for commit:\n\tmodified:   Dockerfile\n"
IMAGE_ID = "3f9a21bd"
BUILD_OUTPUT = f"Step 1/2 : FROM node:20\n ---> 1c2d3e4f\nStep 2/2 : CMD node index.js\n ---> Running in 0a1b\nSuccessfully built {IMAGE_ID}\nSuccessfully tagged myapp:latest\n"


def default_outputs() -> dict[str, str]:
    return {
        "git status": CLEAN_STATUS,
        "npm version": "v1.2.4\n",
        "docker build": BUILD_OUTPUT,
    }


@dataclass
class FakeRunner:
    """Records every command instead of running it, the output is looked up by command prefix."""

    outputs: dict[str, str] = field(default_factory=default_outputs)
    exit_codes: dict[str, int] = field(default_factory=dict)
    commands: list[str] = field(default_factory=list)
    streamed: list[str] = field(default_factory=list)

    def __call__(
        self,
        script: ShellConfig | str | list[str],
        *,
        cwd: str | Path | None = None,
        stream_output: bool | None = None,
        **_,
    ) -> ShellRun:
        command = shlex.join(script) if isinstance(script, list) else str(script)
        self.commands.append(command)
        if stream_output:
            self.streamed.append(command)
        run = ShellRun(ShellConfig(shell_input=command, cwd=cwd))
        run._stdout_lines.append(self._lookup(self.outputs, command, ""))
        run.exit_code = self._lookup(self.exit_codes, command, 0)
        if run.exit_code != 0:
            raise ShellError(run)
        return run

    @staticmethod
    def _lookup(values: dict, command: str, default):
        return next(
            (value for prefix, value in values.items() if command.startswith(prefix)),
            default,
        )

    def called(self, prefix: str) -> list[str]:
        return [command for command in self.commands if command.startswith(prefix)]


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def settings() -> DockerReleaseSettings:
    return DockerReleaseSettings(log_level="DEBUG", remove_os_secrets=False)


def write_package_json(repo_path: Path, **extra) -> Path:
    path = repo_path / "package.json"
    path.write_text(json.dumps({"name": "myapp", "version": "1.2.3", **extra}))
    return path


def write_release_config(repo_path: Path, **content) -> Path:
    path = repo_path / ".docker-release.json"
    path.write_text(json.dumps(content))
    return path


@pytest.fixture()
def repo_path(tmp_path) -> Path:
    write_package_json(tmp_path)
    return tmp_path


@pytest.fixture()
def ctx(repo_path, settings, fake_runner) -> ReleaseContext:
    return ReleaseContext.load(repo_path, settings, runner=fake_runner)


def reload_ctx(ctx: ReleaseContext) -> ReleaseContext:
    """Call after changing the files in the repo_path"""
    ctx.package = read_package_descriptor(ctx.settings.package_path(ctx.repo_path))
    ctx.release_config = read_release_config(
        ctx.settings.release_config_path(ctx.repo_path)
    )
    return ctx
