from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ContentType(StrEnum):
    DEFAULT = "DEFAULT"
    STDOUT = "STDOUT"
    STDERR = "STDERR"

    __colors__: ClassVar[dict[str, str]] = {
        DEFAULT: "",
        STDOUT: "green",
        STDERR: "red",
    }

    @classmethod
    def colors(cls) -> dict[str, str]:
        return {**cls.__colors__}


# directly from rich.color, used for the command prefixes
PREFIX_COLORS: tuple[str, ...] = (
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "dodger_blue2",
    "orchid",
    "orange3",
)
