from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Protocol

from rich.console import Console
from rich.text import Text

from docker_release.colors import PREFIX_COLORS, ContentType

_DEFAULT_CONTENT_TYPE = ContentType.DEFAULT


class PrintWith(Protocol):
    def __call__(
        self,
        content: str,
        *,
        prefix: str,
        content_type: str = _DEFAULT_CONTENT_TYPE,
    ) -> Any:
        pass


console = Console(log_path=False, soft_wrap=True)


def _default_print_with(
    content: str,
    *,
    prefix: str,
    content_type: str = _DEFAULT_CONTENT_TYPE,
):
    # Text instead of markup, docker output is full of square brackets
    line = Text()
    if prefix:
        line.append(prefix, style=get_color(prefix))
        line.append(" ")
    line.append(content.rstrip(), style=get_color(content_type))
    console.print(line)


_print_with: PrintWith = _default_print_with


def print_with(
    content: str,
    *,
    prefix: str,
    content_type: str = _DEFAULT_CONTENT_TYPE,
):
    return _print_with(content, prefix=prefix, content_type=content_type)


@contextmanager
def print_with_override(new_call: PrintWith, call_old: bool = True):
    global _print_with
    old = _print_with
    if call_old:

        def call(*args, **kwargs):
            old(*args, **kwargs)
            return new_call(*args, **kwargs)

    else:
        call = new_call
    _print_with = call
    try:
        yield
    finally:
        _print_with = old


_CONTENT_COLORS = ContentType.colors()
_PREFIX_COLOR: dict[str, str] = {"": ""}


def get_color(key: str) -> str:
    if key in _CONTENT_COLORS:
        return _CONTENT_COLORS[key]
    if key in _PREFIX_COLOR:
        return _PREFIX_COLOR[key]
    color = PREFIX_COLORS[len(_PREFIX_COLOR) % len(PREFIX_COLORS)]
    _PREFIX_COLOR[key] = color
    return color
