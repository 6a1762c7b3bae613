from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """Normalized location and message extracted from a tool's error text."""

    line: int
    column: int
    message: str
    kind: str | None = None
