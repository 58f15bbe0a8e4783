"""Interactive prompters used to collect missing command arguments.

InteractivePrompter is the seam between argument collection and the rest
of the command layer; tests substitute a MagicMock or a scripted prompter.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TextIO

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

CANCEL_CHOICE = "0"


class InteractivePrompter(ABC):
    """Presents a choice list and returns the selected key."""

    @abstractmethod
    def choose(self, message: str, options: Mapping[str, str]) -> str | None:
        """Ask the user to pick one of ``options``.

        Args:
            message: Question shown above the choices.
            options: Ordered key -> label pairs.

        Returns:
            The chosen key, or None if the user aborted.
        """
        ...


class ConsolePrompter(InteractivePrompter):
    """Numbered-menu prompter built on rich's Prompt.

    Choice ``0``, an empty answer or end of input aborts. An answer may be
    the menu number or the option key itself; anything else is re-asked.

    Args:
        stdin: Input stream. Defaults to sys.stdin.
        stdout: Output stream. Defaults to sys.stderr so stdout stays clean
            for command results.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._in = stdin or sys.stdin
        self._console = Console(file=stdout or sys.stderr, highlight=False)

    def choose(self, message: str, options: Mapping[str, str]) -> str | None:
        keys = list(options)
        if not keys:
            return None

        self._console.print(Text(message))
        self._console.print(Text(f"  [{CANCEL_CHOICE}] Cancel"))
        for index, key in enumerate(keys, start=1):
            self._console.print(Text(f"  [{index}] {options[key]}"))

        numbers = [str(index) for index in range(1, len(keys) + 1)]
        answer = Prompt.ask(
            ">",
            console=self._console,
            choices=[CANCEL_CHOICE, *numbers, *keys],
            show_choices=False,
            default=CANCEL_CHOICE,
            show_default=False,
            stream=self._in,
        )
        if answer == CANCEL_CHOICE:
            return None
        if answer in numbers:
            return keys[int(answer) - 1]
        return answer
