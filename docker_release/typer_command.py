import logging
import os
import sys
import traceback
from contextlib import suppress
from functools import wraps
from pathlib import Path
from types import TracebackType
from typing import Callable, TypeVar

import click
import typer
from rich.logging import RichHandler
from rich.traceback import Traceback

import docker_release
from docker_release.printer import console
from docker_release.settings import DockerReleaseSettings

T = TypeVar("T", bound=Callable)


def except_hook_decorator(*, skip_except_hook: bool = False) -> Callable[[T], T]:
    def decorator(command: T) -> T:
        @wraps(command)
        def wrapper(*args, **kwargs):
            if not skip_except_hook:  # this must be done inside of the call as the typer.main sets the except hook when the app is called
                sys.excepthook = except_hook  # type: ignore
            return command(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def configure_logging(
    app: typer.Typer,
    *,
    settings: DockerReleaseSettings | None = None,
    skip_except_hook: bool = False,
) -> logging.Handler:
    settings = settings or DockerReleaseSettings.from_env()
    for command in app.registered_commands:
        command.callback = except_hook_decorator(skip_except_hook=skip_except_hook)(
            command.callback  # type: ignore
        )
    handler = RichHandler(rich_tracebacks=False, level=settings.log_level, console=console)
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    if settings.remove_os_secrets:
        hide_secrets(handler, {**os.environ})
    app.pretty_exceptions_enable = False
    return handler


def except_hook(
    exc_type: type[BaseException], exc_value: BaseException, tb: TracebackType | None
) -> None:
    """Similar to typer's except hook"""
    internal_modules = [typer, click, docker_release]
    rich_tb = Traceback.from_exception(
        exc_type,
        exc_value,
        tb,
        show_locals=False,
        suppress=internal_modules,
        width=console.width,
    )
    console.print(rich_tb)
    standard_exception = traceback.TracebackException(
        exc_type, exc_value, tb, limit=-3, compact=True
    )
    for line in standard_exception.format(chain=True):
        console.print(line, end="", markup=False, highlight=False)


def remove_secrets(message: str, secrets: list[str]) -> str:
    for secret in secrets:
        message = message.replace(secret, "***")
    return message


class SecretsHider(logging.Filter):
    def __init__(self, secrets: list[str], name: str = "") -> None:
        self.secrets = secrets
        super().__init__(name)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = remove_secrets(str(record.msg), self.secrets)
        return True


SECRET_KEY_PARTS = ("key", "token", "secret", "password")


def _is_secret(key: str, value: str) -> bool:
    key_lower = key.lower()
    if not any(part in key_lower for part in SECRET_KEY_PARTS):
        return False
    if value.lower() in {"", "true", "false"} or value.isdigit():
        return False
    with suppress(OSError, ValueError):
        if Path(value).exists():
            return False
    return True


def secret_values(env: dict[str, str]) -> list[str]:
    """
    >>> secret_values({"DOCKER_TOKEN": "abc123", "HOME_DIR": "abc", "API_KEY": "true"})
    ['abc123']
    """
    return sorted(value for key, value in env.items() if _is_secret(key, value))


def hide_secrets(handler: logging.Handler, env: dict[str, str]) -> None:
    if secrets := secret_values(env):
        handler.addFilter(SecretsHider(secrets, name="secrets-hider"))
