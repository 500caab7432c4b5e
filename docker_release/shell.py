"""Blocking wrapper around subprocess used for every git/npm/docker call.

1. ShellConfig holds the user configuration of a run.
2. A ShellRun is created for each run and stores the captured output.
3. `run_and_wait` blocks until the command is done, there is never more than one command running.
4. With `stream_output` every line is printed to the console as it arrives (used by `docker build` and `docker push`), otherwise output is only captured.
5. Any failure is converted into a `ShellError` which contains the run and base exception. Use `allow_non_zero_exit` to allow runs to complete with a non-zero exit code without raising this error.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Callable, Protocol, Self

from model_lib.model_base import Entity
from model_lib.pydantic_utils import copy_and_validate
from pydantic import Field, model_validator

from docker_release.colors import ContentType
from docker_release.errors import DockerReleaseError
from docker_release.printer import print_with

logger = logging.getLogger(__name__)
_pool = ThreadPoolExecutor(
    max_workers=2, thread_name_prefix="docker-release-reader"
)  # 1 for stdout and 1 for stderr


class ShellConfig(Entity):
    shell_input: str
    env: dict[str, str] = Field(default_factory=dict)
    cwd: Path = Field(default=None, description="Set to Path.cwd() if not provided")  # type: ignore
    allow_non_zero_exit: bool = False
    stream_output: bool = Field(
        default=False,
        description="Print stdout/stderr lines while the command runs, they are captured either way",
    )
    print_prefix: str = Field(
        default=None, description="cwd+binary_name+first_arg, shown before each streamed line"
    )  # type: ignore

    def __repr__(self) -> str:
        return f"ShellConfig({self.shell_input!r}, cwd={self.cwd!r})"

    @model_validator(mode="after")
    def post_init(self) -> Self:
        if not self.shell_input.strip():
            raise ValueError("shell_input must not be empty")
        if self.cwd is None:
            self.cwd = Path.cwd().resolve()
        if not self.cwd.exists():
            raise ValueError(f"cwd {self.cwd} does not exist")
        if self.print_prefix is None:
            self.print_prefix = " ".join([self.cwd.name, *self.shell_input.split()[:2]])
        self.env = {**os.environ} | self.env
        return self

    @property
    def popen_kwargs(self) -> dict[str, Any]:
        return {"env": self.env, "cwd": self.cwd}


@dataclass
class ShellRun:
    """Only created by `run_and_wait`."""

    config: ShellConfig
    exit_code: int | None = field(init=False, default=None)
    _stdout_lines: list[str] = field(init=False, default_factory=list)
    _stderr_lines: list[str] = field(init=False, default_factory=list)

    def __str__(self) -> str:
        state = "running" if self.exit_code is None else f"exit_code={self.exit_code}"
        return f"ShellRun({self.config.print_prefix} {state})"

    @property
    def stdout(self) -> str:
        return "".join(self._stdout_lines).strip()

    @property
    def stderr(self) -> str:
        return "".join(self._stderr_lines).strip()


class ShellError(DockerReleaseError):
    def __init__(self, run: ShellRun, base_error: BaseException | None = None):
        self.run = run
        self.base_error = base_error

    @property
    def command(self) -> str:
        return self.run.config.shell_input

    @property
    def exit_code(self) -> int | None:
        return self.run.exit_code

    @property
    def stdout(self) -> str:
        return self.run.stdout

    @property
    def stderr(self) -> str:
        return self.run.stderr

    def __str__(self) -> str:
        lines_stdout, lines_stderr = (
            self.stdout.splitlines()[-10:],
            self.stderr.splitlines()[-10:],
        )
        if lines_stdout:
            lines_stdout.insert(0, "STDOUT")
        if lines_stderr:
            lines_stderr.insert(0, "STDERR")
        last_lines_str = "\n".join(
            line.strip() for line in lines_stdout + lines_stderr if line.strip()
        )
        return f"'{self.command}' failed: {self.run}\nExit code: {self.exit_code}\nlines:{last_lines_str}"


class RunAndWait(Protocol):
    def __call__(
        self,
        script: ShellConfig | str | list[str],
        *,
        allow_non_zero_exit: bool | None = None,
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
        stream_output: bool | None = None,
    ) -> ShellRun: ...


def run_and_wait(
    script: ShellConfig | str | list[str],
    *,
    allow_non_zero_exit: bool | None = None,
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
    stream_output: bool | None = None,
) -> ShellRun:
    """Raises: ShellError"""
    config = _as_config(
        script,
        allow_non_zero_exit=allow_non_zero_exit,
        cwd=cwd,
        env=env,
        stream_output=stream_output,
    )
    run = ShellRun(config)
    _execute_run(run)
    return run


def _as_config(script: ShellConfig | str | list[str], **kwargs) -> ShellConfig:
    kwargs_not_none = {k: v for k, v in kwargs.items() if v is not None}
    if isinstance(script, list):
        script = shlex.join(script)
    if isinstance(script, str):
        return ShellConfig(shell_input=script, **kwargs_not_none)
    assert isinstance(script, ShellConfig), f"not a ShellConfig or str: {script!r}"
    return copy_and_validate(script, **kwargs_not_none)


def _execute_run(run: ShellRun) -> None:
    config = run.config
    logger.debug(f"running: {config.shell_input} in {config.cwd}")
    try:
        with subprocess.Popen(
            config.shell_input,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            universal_newlines=True,
            **config.popen_kwargs,
        ) as proc:
            read_stdout = _pool.submit(
                _read_until_complete,
                proc.stdout,  # type: ignore
                run._stdout_lines.append,
                _line_printer(config, ContentType.STDOUT),
            )
            read_stderr = _pool.submit(
                _read_until_complete,
                proc.stderr,  # type: ignore
                run._stderr_lines.append,
                _line_printer(config, ContentType.STDERR),
            )
            wait([read_stdout, read_stderr])
            read_stdout.result()
            read_stderr.result()
            run.exit_code = proc.wait()
    except OSError as e:
        logger.warning(f"unable to start {run}: {e!r}")
        run.exit_code = -1
        run._stderr_lines.append(str(e))
        raise ShellError(run, e) from e
    if run.exit_code != 0 and not config.allow_non_zero_exit:
        raise ShellError(run)


def _line_printer(
    config: ShellConfig, content_type: ContentType
) -> Callable[[str], Any] | None:
    if not config.stream_output:
        return None

    def print_line(line: str):
        print_with(line, prefix=config.print_prefix, content_type=content_type)

    return print_line


def _read_until_complete(
    stream: IO[str],
    on_line: Callable[[str], Any],
    on_print: Callable[[str], Any] | None,
):
    for line in iter(stream.readline, ""):
        on_line(line)
        if on_print:
            on_print(line)
