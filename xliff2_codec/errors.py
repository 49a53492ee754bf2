"""Error records and exceptions raised by the codec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Where a node came from: the caller supplied ``url`` and a line."""

    url: str
    line: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.url
        return f"{self.url}@{self.line}"


@dataclass
class I18nError:
    """A single problem found while reading a translation file.

    Errors are collected rather than raised so one pass reports everything
    wrong with a file.  ``context`` is the serialized offending element.
    """

    location: SourceLocation
    msg: str
    context: str = ""

    def __str__(self) -> str:
        context = f' ("[ERROR ->]{self.context}")' if self.context else ""
        return f"{self.msg}{context}: {self.location}"


class NestedIcuError(ValueError):
    """Raised by ``write`` when an ICU expression is nested in another."""

    def __init__(self) -> None:
        super().__init__("xliff does not support nested ICU messages")


class Xliff2LoadError(ValueError):
    """Raised by ``load`` with every error collected from the document."""

    def __init__(self, errors: List[I18nError]) -> None:
        self.errors = list(errors)
        details = "\n".join(str(err) for err in self.errors)
        super().__init__(f"xliff2 parse errors:\n{details}")
