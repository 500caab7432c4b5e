import pytest

from docker_release.colors import ContentType
from docker_release.printer import print_with_override
from docker_release.shell import ShellConfig, ShellError, run_and_wait


def test_normal_run():
    result = run_and_wait("echo hello")
    assert result.stdout == "hello"
    assert result.stderr == ""
    assert result.exit_code == 0


def test_stderr_run():
    result = run_and_wait("echo hello >&2")
    assert result.stdout == ""
    assert result.stderr == "hello"


def test_list_args_are_quoted():
    result = run_and_wait(["echo", "version %s", "it's"])
    assert result.stdout == "version %s it's"


def test_non_zero_exit_raises_shell_error():
    with pytest.raises(ShellError) as exc:
        run_and_wait("echo before-fail && exit 3")
    error = exc.value
    assert error.exit_code == 3
    assert error.stdout == "before-fail"
    assert "exit 3" in error.command
    assert "Exit code: 3" in str(error)


def test_allow_non_zero_exit():
    result = run_and_wait("exit 1", allow_non_zero_exit=True)
    assert result.exit_code == 1


def test_cwd(tmp_path):
    (tmp_path / "marker.txt").write_text("")
    result = run_and_wait("ls", cwd=tmp_path)
    assert "marker.txt" in result.stdout


def test_cwd_must_exist(tmp_path):
    with pytest.raises(ValueError, match="does not exist"):
        ShellConfig(shell_input="ls", cwd=tmp_path / "missing")


def test_custom_env():
    result = run_and_wait("echo $MY_VAR", env={"MY_VAR": "ok"})
    assert result.stdout == "ok"


def test_stream_output_prints_each_line_and_captures():
    printed: list[tuple[str, str]] = []

    def capture(content: str, *, prefix: str, content_type: str = ""):
        printed.append((content.strip(), content_type))

    with print_with_override(capture, call_old=False):
        result = run_and_wait(
            "echo line1 && echo line2 && echo oops >&2", stream_output=True
        )
    assert result.stdout == "line1\nline2"
    assert ("line1", ContentType.STDOUT) in printed
    assert ("line2", ContentType.STDOUT) in printed
    assert ("oops", ContentType.STDERR) in printed


def test_buffered_run_prints_nothing():
    printed = []
    with print_with_override(lambda *args, **kwargs: printed.append(args), call_old=False):
        run_and_wait("echo quiet")
    assert printed == []


def test_config_overrides_are_applied(tmp_path):
    config = ShellConfig(shell_input="exit 2")
    result = run_and_wait(config, allow_non_zero_exit=True, cwd=tmp_path)
    assert result.exit_code == 2
    assert result.config.cwd == tmp_path
