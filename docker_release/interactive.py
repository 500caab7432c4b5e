"""Inspired by: https://github.com/tmbo/questionary/blob/master/tests/utils.py"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import wraps
from typing import Callable, Generic, Literal, TypeVar

from prompt_toolkit.input.defaults import create_pipe_input
from prompt_toolkit.output import DummyOutput
from questionary import Choice, Question
from questionary import select as _select
from questionary import text as _text
from zero_3rdparty.object_name import as_name, func_arg_names

from docker_release.errors import NoHumanAvailableError
from docker_release.run_env import interactive_shell
from docker_release.settings import DockerReleaseSettings

T = TypeVar("T")
TypedAsk = Callable[[Question, type[T]], T]
ValidateT = Callable[[str], Literal[True] | str]
logger = logging.getLogger(__name__)


def _default_asker(q: Question, _: type[T]) -> T:
    return q.unsafe_ask()


_question_asker: TypedAsk = _default_asker


FuncT = TypeVar("FuncT", bound=Callable)


def return_default_if_not_interactive(func: FuncT) -> FuncT:
    assert "default" in func_arg_names(func), (
        f"Function {as_name(func)} must have a 'default' parameter"
    )

    @wraps(func)
    def return_default(prompt_text: str, *args, **kwargs):
        if interactive_shell():
            return func(prompt_text, *args, **kwargs)
        default_value = kwargs.get("default", None)
        if default_value is None:
            raise NoHumanAvailableError(prompt_text)
        logger.warning(
            f"Function {as_name(func)} called in non-interactive shell, returning default value: {default_value}"
        )
        return default_value

    return return_default  # type: ignore


_PROMPT_TEXT_ATTR_NAME = "__prompt_text__"


def _set_prompt_text(q: Question, prompt_text: str) -> None:
    setattr(q, _PROMPT_TEXT_ATTR_NAME, prompt_text)


def _get_prompt_text(q: Question) -> str:
    return getattr(q, _PROMPT_TEXT_ATTR_NAME, "")


@dataclass
class ChoiceTyped(Generic[T]):
    name: str
    value: T
    description: str | None = None

    def as_choice(self) -> Choice:
        return Choice(title=self.name, value=self.value, description=self.description)


@return_default_if_not_interactive
def text(
    prompt_text: str,
    default: str = "",
    *,
    validate: ValidateT | None = None,
) -> str:
    """`validate` returns True or the message shown before the user can try again."""
    question = _text(prompt_text, default=default, validate=validate)
    _set_prompt_text(question, prompt_text)
    return _question_asker(question, str)


@return_default_if_not_interactive
def select_list_choice(
    prompt_text: str,
    choices: list[ChoiceTyped[T]],
    *,
    default: T | None = None,
) -> T:
    assert choices, f"choices must not be empty for {as_name(select_list_choice)}"
    questionary_choices = [typed_choice.as_choice() for typed_choice in choices]
    question = _select(
        prompt_text,
        default=next(
            (choice for choice in questionary_choices if choice.value == default),
            None,
        ),
        choices=questionary_choices,
        use_shortcuts=True,
    )
    _set_prompt_text(question, prompt_text)
    return _question_asker(question, T)  # type: ignore


class KeyInput:
    DOWN = "\x1b[B"
    UP = "\x1b[A"
    ENTER = "\r"
    CONTROLC = "\x03"
    BACK = "\x7f"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"


@dataclass
class question_patcher:
    """Context manager to patch the questionary.ask_question, useful for testing."""

    responses: list[str] = field(default_factory=list)
    next_response: int = 0
    asked: list[str] = field(default_factory=list, init=False)

    _old_force_interactive_env_str: str | None = field(
        default=None, init=False, repr=False
    )

    def _next_index_response(self, prompt_text: str) -> str:
        try:
            input_response = self.responses[self.next_response]
        except IndexError:
            raise ValueError(
                f"Not enough responses provided. Expected {len(self.responses)}, got {self.next_response + 1} questions. Last prompt: '{prompt_text}'"
            )
        self.next_response += 1
        return input_response

    def ask_question(self, q: Question, response_type: type[T]) -> T:
        prompt_text = _get_prompt_text(q)
        self.asked.append(prompt_text)
        input_response = self._next_index_response(prompt_text)
        with create_pipe_input() as inp:
            inp.send_text(input_response + KeyInput.ENTER + "\r")
            q.application.output = DummyOutput()
            q.application.input = inp
            return _default_asker(q, response_type)

    def __enter__(self):
        global _question_asker
        self._old_patcher = _question_asker
        _question_asker = self.ask_question
        env_name = DockerReleaseSettings.ENV_NAME_FORCE_INTERACTIVE_SHELL
        self._old_force_interactive_env_str = os.environ.get(env_name)
        os.environ[env_name] = "true"
        interactive_shell.cache_clear()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        global _question_asker
        _question_asker = self._old_patcher
        env_name = DockerReleaseSettings.ENV_NAME_FORCE_INTERACTIVE_SHELL
        if self._old_force_interactive_env_str is None:
            os.environ.pop(env_name, None)
        else:
            os.environ[env_name] = self._old_force_interactive_env_str
        interactive_shell.cache_clear()
