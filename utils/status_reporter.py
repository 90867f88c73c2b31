"""
Aligned, colour-coded per-file status lines.

    track01.mp3......Ok
    bad.mp3..........MissingField: No album found
                     MissingField: No title found
"""

from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.text import Text

from api.schemas import FileOutcome

DEFAULT_DOT_GAP = 10
UNKNOWN_NAME = "<N/A>"

SUCCESS_STYLE = "bold green"
ERROR_STYLE = "bold red"
WARNING_STYLE = "bold yellow"


def display_name(path: Path) -> str:
    """Final path component as shown to the user.

    Names that are not valid UTF-8 (surrogate-escaped by the OS layer)
    cannot be printed and are shown as ``<N/A>``.
    """
    name = path.name
    if name in ("", ".", ".."):
        return UNKNOWN_NAME
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return UNKNOWN_NAME
    return name


class StatusReporter:
    """Prints one block of lines per processed file."""

    def __init__(
        self,
        longest_name_len: int,
        console: Optional[Console] = None,
        dot_gap: int = DEFAULT_DOT_GAP
    ):
        self.longest_name_len = longest_name_len
        self.console = console or Console(highlight=False)
        self.dot_gap = dot_gap

    @classmethod
    def for_files(
        cls,
        file_paths: Iterable[Path],
        console: Optional[Console] = None,
        dot_gap: int = DEFAULT_DOT_GAP
    ) -> "StatusReporter":
        """Create a reporter whose columns fit every name in the batch."""
        longest = max((len(display_name(path)) for path in file_paths), default=1)
        return cls(longest, console=console, dot_gap=dot_gap)

    def _print(self, text: Text) -> None:
        self.console.print(text, soft_wrap=True)

    def report(self, outcome: FileOutcome) -> None:
        """
        Print the status of one file.

        The first line holds the name, a run of dots and either ``Ok`` or
        the first error. Further errors follow on their own lines, aligned
        under the first one. A removal warning never replaces ``Ok``.
        """
        name = display_name(outcome.source_path)
        dots_amount = max(self.longest_name_len - len(name), 0) + self.dot_gap
        dots = "." * dots_amount

        if outcome.success:
            self._print(Text.assemble(name, dots, ("Ok", SUCCESS_STYLE)))
        else:
            first, *others = outcome.errors
            self._print(Text.assemble(name, dots, (first.format_message(), ERROR_STYLE)))

            indent = " " * (len(name) + dots_amount)
            for error in others:
                self._print(Text.assemble(indent, (error.format_message(), ERROR_STYLE)))

        if outcome.warning:
            self.warning(outcome.warning)

    def warning(self, message: str) -> None:
        self._print(Text.assemble(("Warning!", WARNING_STYLE), " ", message))

    def error(self, message: str) -> None:
        self._print(Text.assemble(("ERROR!", ERROR_STYLE), " ", message))
