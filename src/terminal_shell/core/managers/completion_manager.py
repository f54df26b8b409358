import logging
from typing import Iterable, List

from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

from terminal_shell.core.command_registry import CommandRegistry
from terminal_shell.core.managers.alias_manager import AliasManager

logger = logging.getLogger(__name__)

# Commands whose first argument is itself a command name
_COMMAND_ARG_COMMANDS = {"help"}
# Commands whose trailing arguments form a nested command line
_NESTED_COMMANDS = {"chrono", "mute", "export", "exportvar", "exportfile"}


class CompletionManager:
    """
    Generates completion suggestions: command names, their aliases and user
    aliases for the first word, and command names where a command expects one.
    """

    def __init__(self, registry: CommandRegistry, alias_manager: AliasManager):
        self.registry = registry
        self.alias_manager = alias_manager

    def candidates(self, include_user_aliases: bool = True) -> List[str]:
        names = set(self.registry.names()) | set(self.registry.aliases())
        if include_user_aliases:
            names |= set(self.alias_manager.all())
        return sorted(names)

    def generate_completions(self, document: Document) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.lstrip().split()
        completing_new_word = not words or text_before_cursor.endswith(" ")
        word = "" if completing_new_word else words[-1]
        position = len(words) if completing_new_word else len(words) - 1

        if position == 0:
            yield from self._complete(word, self.candidates())
            return

        # Skip over the leading meta commands ('mute chrono help x', 'repeat 3 print')
        index = 0
        while index < position:
            head = words[index]
            if head in _NESTED_COMMANDS:
                index += 1
            elif head == "repeat":
                index += 2
            else:
                break

        if index == position:
            yield from self._complete(word, self.candidates(include_user_aliases=False))
        elif index == position - 1 and words[index] in _COMMAND_ARG_COMMANDS:
            yield from self._complete(word, self.candidates(include_user_aliases=False))

    @staticmethod
    def _complete(word: str, candidates: Iterable[str]) -> Iterable[Completion]:
        for name in candidates:
            if name.startswith(word):
                yield Completion(name, start_position=-len(word))
