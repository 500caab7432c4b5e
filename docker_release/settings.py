import logging
from pathlib import Path
from typing import ClassVar, Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOCKER_RELEASE_"


class DockerReleaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, populate_by_name=True)

    ENV_NAME_FORCE_INTERACTIVE_SHELL: ClassVar[str] = (
        f"{ENV_PREFIX}FORCE_INTERACTIVE_SHELL"
    )
    DEFAULT_PACKAGE_FILENAME: ClassVar[str] = "package.json"
    DEFAULT_RELEASE_CONFIG_FILENAME: ClassVar[str] = ".docker-release.json"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "UNSET"] = (
        "UNSET"
    )
    force_interactive_shell: bool = Field(
        default=False,
        description="Useful for testing, prompts are asked even when stdout is not a TTY",
    )
    package_filename: str = Field(
        default=DEFAULT_PACKAGE_FILENAME,
        description="Package descriptor with name/version/imageName, bumped by `npm version`",
    )
    release_config_filename: str = Field(
        default=DEFAULT_RELEASE_CONFIG_FILENAME,
        description="Optional file with dockerUser/imageName used to infer the registry target",
    )
    tail_search_length: int = Field(
        default=100,
        description="Number of trailing characters of the `docker build` output searched for the image id",
    )
    git_remote: str = Field(
        default="origin", description="Remote receiving the release tag"
    )
    remove_os_secrets: bool = Field(
        default=True,
        description="Use a log filter to remove secrets from the terminal output. No guarantees though.",
    )

    @model_validator(mode="after")
    def ensure_vars_set(self) -> Self:
        if self.log_level == "UNSET":
            self.log_level = "INFO"
        return self

    def package_path(self, repo_path: Path) -> Path:
        return repo_path / self.package_filename

    def release_config_path(self, repo_path: Path) -> Path:
        return repo_path / self.release_config_filename

    @classmethod
    def from_env(cls, **kwargs) -> Self:
        return cls(**kwargs)
