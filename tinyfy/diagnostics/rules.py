"""Extraction rules for the error grammars of supported minifiers."""

import re
from abc import ABC, abstractmethod

from tinyfy.diagnostics.models import Diagnostic


class ExtractionRule(ABC):
    """Finds the first located error in raw tool output."""

    name: str = ""

    @abstractmethod
    def match(self, raw_text: str) -> Diagnostic | None:
        """Return a Diagnostic for the first match, or None.

        Must not raise on malformed input.
        """


class ParseErrorRule(ExtractionRule):
    """Matches ``<label> at <identifier>:<line>,<column>``.

    Terser reports e.g. ``Parse error at 0:114,5`` where ``0`` is the
    input name (stdin) and the numbers are taken as found.
    """

    name = "parse-error"
    _PATTERN = re.compile(
        r"(?P<label>[A-Za-z][\w ]*?) at [^\s:]+:(?P<line>[0-9]+),(?P<column>[0-9]+)",
        re.IGNORECASE,
    )

    def match(self, raw_text: str) -> Diagnostic | None:
        found = self._PATTERN.search(raw_text)
        if found is None:
            return None
        try:
            line = int(found.group("line"))
            column = int(found.group("column"))
        except ValueError:
            return None
        return Diagnostic(line=line, column=column, message=_line_containing(raw_text, found))


class StructuredLocationRule(ExtractionRule):
    """Matches ``line: <int>`` and ``column: <int>`` key-value pairs.

    Lightning CSS dumps a Rust error struct such as
    ``Error { kind: InvalidSelector(..), loc: Some(ErrorLocation { filename:
    "main.css", line: 304, column: 2 }) }``.
    """

    name = "structured-location"
    _LINE = re.compile(r"\bline:\s*([0-9]+)", re.IGNORECASE)
    _COLUMN = re.compile(r"\bcolumn:\s*([0-9]+)", re.IGNORECASE)
    _KIND = re.compile(r"\bkind:\s*(\w+)\(", re.IGNORECASE)

    def match(self, raw_text: str) -> Diagnostic | None:
        line_match = self._LINE.search(raw_text)
        column_match = self._COLUMN.search(raw_text)
        if line_match is None or column_match is None:
            return None
        try:
            line = int(line_match.group(1))
            column = int(column_match.group(1))
        except ValueError:
            return None
        kind_match = self._KIND.search(raw_text)
        return Diagnostic(
            line=line,
            column=column,
            message=_first_line(raw_text),
            kind=kind_match.group(1) if kind_match else None,
        )


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _line_containing(text: str, found: re.Match[str]) -> str:
    start = text.rfind("\n", 0, found.start()) + 1
    end = text.find("\n", found.end())
    return text[start : end if end != -1 else len(text)].strip()
