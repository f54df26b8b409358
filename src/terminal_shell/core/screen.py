# src/terminal_shell/core/screen.py
import abc
import logging
from typing import Any, List
from xml.parsers.expat import ExpatError

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.shortcuts import clear

from terminal_shell.core.services.json_service import to_json

logger = logging.getLogger(__name__)


def render_value(value: Any) -> str:
    """Renders a command value for display: containers as indented JSON, the rest as text."""
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    return "" if value is None else str(value)


class Screen(metaclass=abc.ABCMeta):
    """The display surface the interpreter writes to. It never reads from it."""

    @abc.abstractmethod
    def print(self, value: Any) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def print_error(self, message: Any) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def print_html(self, markup: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def clean(self) -> None:
        raise NotImplementedError


class ConsoleScreen(Screen):
    """Renders to the terminal through prompt_toolkit (safe under patch_stdout)."""

    def print(self, value: Any) -> None:
        print_formatted_text(render_value(value))

    def print_error(self, message: Any) -> None:
        print_formatted_text(HTML("<ansired>{}</ansired>").format(render_value(message)))

    def print_html(self, markup: str) -> None:
        try:
            formatted = HTML(markup)
        except (ExpatError, ValueError) as e:
            logger.debug("Invalid markup, printing as plain text: %s", e)
            print_formatted_text(markup)
            return
        print_formatted_text(formatted)

    def clean(self) -> None:
        clear()


class MutedScreen(Screen):
    """Wraps another screen and drops regular output. Errors still get through."""

    def __init__(self, inner: Screen):
        self.inner = inner

    def print(self, value: Any) -> None:
        pass

    def print_html(self, markup: str) -> None:
        pass

    def print_error(self, message: Any) -> None:
        self.inner.print_error(message)

    def clean(self) -> None:
        self.inner.clean()


class RecordingScreen(Screen):
    """Keeps everything in memory. Handy for embedding hosts and tests."""

    def __init__(self):
        self.lines: List[Any] = []
        self.errors: List[str] = []
        self.html: List[str] = []
        self.cleaned = 0

    def print(self, value: Any) -> None:
        self.lines.append(value)

    def print_error(self, message: Any) -> None:
        self.errors.append(render_value(message))

    def print_html(self, markup: str) -> None:
        self.html.append(markup)

    def clean(self) -> None:
        self.cleaned += 1
        self.lines.clear()
        self.html.clear()

    @property
    def text(self) -> str:
        return "\n".join(render_value(v) for v in self.lines)
