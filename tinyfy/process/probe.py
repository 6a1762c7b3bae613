from collections.abc import Sequence

from tinyfy.logging.logger import Log
from tinyfy.process.exceptions import ProcessSpawnError
from tinyfy.process.models import ToolStatus
from tinyfy.process.runner import ProcessRunner


class DependencyProbe:
    """Checks whether a command-line tool is installed and reads its version."""

    def __init__(self, runner: ProcessRunner, tool_invoker: str = "/usr/bin/env") -> None:
        self._runner = runner
        self._tool_invoker = tool_invoker

    async def probe(self, tool_name: str, version_args: Sequence[str]) -> ToolStatus:
        try:
            result = await self._runner.run(self._tool_invoker, [tool_name, *version_args])
        except ProcessSpawnError as exc:
            Log.debug(f"Probe for {tool_name} could not start: {exc}")
            return ToolStatus(available=False)
        if not result.ok:
            Log.debug(f"Probe for {tool_name} exited with status {result.exit_status}")
            return ToolStatus(available=False)
        return ToolStatus(available=True, version=result.stdout_text.strip())
