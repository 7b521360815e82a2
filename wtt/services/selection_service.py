"""Interactive selection: fzf when available, numbered prompt otherwise."""

import shutil
import sys
from typing import Callable, Optional, Sequence, TextIO

from rich.console import Console

from wtt.constants import (
    NONE_LABEL,
    PICKER_CANCEL_EXIT_CODE,
    PICKER_COMMAND,
    SENTINEL_INDEX,
)
from wtt.exceptions import NoCandidatesError, PickerError
from wtt.logging_config import get_logger
from wtt.models.selection import Selection
from wtt.utils.process import CommandRunner, SubprocessRunner

logger = get_logger(__name__)

Columns = Callable[[object], Sequence[str]]


class SelectionService:
    """Presents candidates to the user and returns a Selection.

    All prompts go to the console (stderr). stdout stays reserved for the
    single path a command prints.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        stdin: Optional[TextIO] = None,
        runner: Optional[CommandRunner] = None,
        picker: Optional[str] = PICKER_COMMAND,
    ):
        """Initialize the service.

        Args:
            console: Console for prompts (defaults to a stderr console)
            stdin: Stream answers are read from (defaults to sys.stdin)
            runner: Command runner for the external picker
            picker: Picker executable; None forces the numbered prompt
        """
        self.console = console or Console(stderr=True)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.runner = runner or SubprocessRunner()
        self.picker = picker

    def has_picker(self) -> bool:
        return bool(self.picker) and shutil.which(self.picker) is not None

    def select(
        self,
        candidates: Sequence,
        columns: Columns,
        title: str,
        sentinel: Optional[str] = None,
    ) -> Selection:
        """Let the user choose one candidate.

        Args:
            candidates: Items to choose from, in display order
            columns: Maps an item to its display columns
            title: Heading / prompt text
            sentinel: Label of an extra leading option (e.g. "(none) - clear");
                choosing it yields a CLEARED selection

        Raises:
            NoCandidatesError: If candidates is empty
            PickerError: On picker failure or unusable input
        """
        if not candidates:
            raise NoCandidatesError(f"nothing to select: {title.lower()}")

        if self.has_picker():
            return self._select_with_picker(candidates, columns, title, sentinel)
        return self._select_numbered(candidates, columns, title, sentinel)

    def _select_with_picker(self, candidates, columns, title, sentinel) -> Selection:
        # Rows are "index<TAB>columns..."; only the index is parsed back, so
        # ambiguous display text never has to be mapped to an item.
        rows = []
        if sentinel is not None:
            rows.append(f"{SENTINEL_INDEX}\t{sentinel}\t")
        for i, item in enumerate(candidates):
            rows.append("\t".join([str(i), *columns(item)]))

        result = self.runner.run(
            [self.picker, "--with-nth=2..", "--delimiter=\t", "--ansi", f"--prompt={title}> "],
            stdin="\n".join(rows) + "\n",
            capture_stderr=False,
        )
        if result.returncode == PICKER_CANCEL_EXIT_CODE:
            logger.debug("Picker cancelled")
            return Selection.cancelled()
        if not result.ok:
            raise PickerError(f"{self.picker} exited with status {result.returncode}")

        selected = result.stdout.rstrip("\n")
        parts = selected.split("\t", 1)
        if len(parts) < 2:
            raise PickerError(f"unexpected {self.picker} output: {selected!r}")
        try:
            index = int(parts[0])
        except ValueError:
            raise PickerError(f"unexpected {self.picker} index: {parts[0]!r}") from None

        if sentinel is not None and index == SENTINEL_INDEX:
            return Selection.cleared()
        if not 0 <= index < len(candidates):
            raise PickerError(f"unexpected {self.picker} index: {parts[0]!r}")
        return Selection.chosen(candidates[index])

    def _select_numbered(self, candidates, columns, title, sentinel) -> Selection:
        self.console.print(f"{title}:", markup=False, highlight=False, soft_wrap=True)
        if sentinel is not None:
            self.console.print(f"  [0] {sentinel}", markup=False, highlight=False, soft_wrap=True)
        for i, item in enumerate(candidates, 1):
            self.console.print(
                f"  [{i}] " + "  ".join(columns(item)),
                markup=False, highlight=False, soft_wrap=True,
            )

        text = self._read("Enter number: ")
        if not text:
            return Selection.cancelled()

        lowest = 0 if sentinel is not None else 1
        try:
            number = int(text)
        except ValueError:
            raise PickerError(f"invalid selection {text!r}") from None
        if not lowest <= number <= len(candidates):
            raise PickerError(f"invalid selection {text!r}")

        if number == 0:
            return Selection.cleared()
        return Selection.chosen(candidates[number - 1])

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; anything but y/yes means no."""
        answer = self._read(f"{question} [y/N] ").lower()
        return answer in ("y", "yes")

    def _read(self, prompt: str) -> str:
        """Prompt on the console and read one line; EOF reads as empty."""
        line = self.console.input(prompt, markup=False, stream=self.stdin)
        return line.strip()


def sentinel_label(action: str) -> str:
    """Label for the leading "(none)" option."""
    return f"{NONE_LABEL} - {action}"
