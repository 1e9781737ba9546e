"""Terminal output for the release commands.

Pipeline stages report progress through ConsoleProtocol. The CLI passes a
RichConsole; tests pass a MockConsole and assert on what was recorded.

Every message is printed as plain text. Pull-request titles and changelog
lines carry brackets (`[#12](...)`) that Rich would otherwise read as markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """What the pipeline needs from a console."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...


# Leading tag and its style for each status line kind.
_PREFIXES: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "blue bold",
}


class RichConsole:
    """ConsoleProtocol backed by a rich Console (stdout unless `stderr`)."""

    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console
        from rich.text import Text

        self._console = Console(stderr=stderr, highlight=False)
        self._text = Text

    def _status(self, style: Style, message: str) -> None:
        prefix = (_PREFIXES[style], _RICH_STYLES[style])
        self._console.print(self._text.assemble(prefix, " ", message))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(self._text(message, style=_RICH_STYLES[style]))

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


def _no_records() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """ConsoleProtocol that keeps every line in `outputs`.

    Status lines are stored with the same prefix RichConsole prints, e.g.
    `warning: tag 1.3.0 already exists; skipping`.
    """

    outputs: list[OutputRecord] = field(default_factory=_no_records)

    def _record(self, message: str, style: Style) -> None:
        prefix = _PREFIXES.get(style)
        text = f"{prefix} {message}" if prefix else message
        self.outputs.append(OutputRecord(text, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(message, Style.SUCCESS)

    def error(self, message: str) -> None:
        self._record(message, Style.ERROR)

    def warning(self, message: str) -> None:
        self._record(message, Style.WARNING)

    def info(self, message: str) -> None:
        self._record(message, Style.INFO)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    @property
    def messages(self) -> list[str]:
        return [record.message for record in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(record.style is Style.ERROR for record in self.outputs)

    def has_success(self) -> bool:
        return any(record.style is Style.SUCCESS for record in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [record for record in self.outputs if substring in record.message]
