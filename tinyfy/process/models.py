from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and accumulated output streams of one child process."""

    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ToolStatus:
    """Presence and version of an external tool."""

    available: bool
    version: str | None = None


@dataclass(frozen=True)
class DependencyState:
    """Read-only snapshot of tool availability taken at activation."""

    tools: tuple[tuple[str, ToolStatus], ...] = ()

    @classmethod
    def from_mapping(cls, statuses: dict[str, ToolStatus]) -> "DependencyState":
        return cls(tools=tuple(statuses.items()))

    def status(self, tool_id: str) -> ToolStatus:
        for name, status in self.tools:
            if name == tool_id:
                return status
        return ToolStatus(available=False)

    def is_available(self, tool_id: str) -> bool:
        return self.status(tool_id).available
