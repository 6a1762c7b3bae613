from dataclasses import dataclass


@dataclass(frozen=True)
class FileStat:
    """Subset of filesystem metadata the pipeline needs."""

    size: int


@dataclass(frozen=True)
class Notification:
    """User-facing message with an optional "Learn More" link."""

    id: str
    title: str
    body: str
    url: str | None = None

    @property
    def actions(self) -> list[str]:
        return ["Learn More"] if self.url else []
