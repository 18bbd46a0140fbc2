from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple

from .errors import Cancelled, ValidationError


class Prompter:
    """Line-based console prompts. Every invalid answer re-asks the same question."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def _read(self, label: str) -> str:
        try:
            return self._input(label)
        except (EOFError, KeyboardInterrupt):
            raise Cancelled("Aborted at prompt.")

    def say(self, text: str = "") -> None:
        self._output(text)

    def text(
        self,
        message: str,
        default: Optional[str] = None,
        validate: Optional[Callable[[str], Any]] = None,
    ) -> Any:
        """
        Ask for a line of text.

        An empty answer takes ``default`` when one is given. ``validate``
        receives the raw answer and returns the parsed value, or raises
        ValidationError to have the question asked again.
        """
        label = f"{message} [{default}]: " if default else f"{message}: "
        while True:
            value = self._read(label)
            if not value.strip() and default is not None:
                value = default
            if validate is None:
                return value
            try:
                return validate(value)
            except ValidationError as e:
                self._output(f">> {e}")

    def confirm(self, message: str, default: bool = True) -> bool:
        suffix = "Y/n" if default else "y/N"
        while True:
            value = self._read(f"{message} ({suffix}): ").strip().lower()
            if not value:
                return default
            if value in ("y", "yes"):
                return True
            if value in ("n", "no"):
                return False
            self._output(">> Please enter y or n.")

    def choice(self, message: str, options: Sequence[Tuple[str, Any]], default: int = 0) -> Any:
        self._output(message)
        for i, (label, _) in enumerate(options, start=1):
            self._output(f"  {i}) {label}")
        while True:
            value = self._read(f"Choice [{default + 1}]: ").strip()
            if not value:
                return options[default][1]
            if value.isdecimal() and value.isascii() and 1 <= int(value) <= len(options):
                return options[int(value) - 1][1]
            self._output(f">> Please enter a number between 1 and {len(options)}.")

    def pause(self, message: str) -> bool:
        """Block until the operator presses Enter (True) or types q (False)."""
        value = self._read(f"{message} ").strip().lower()
        return value not in ("q", "quit")

