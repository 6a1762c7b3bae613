import asyncio
from collections.abc import Sequence

from tinyfy.logging.logger import Log
from tinyfy.process.exceptions import ProcessSpawnError
from tinyfy.process.models import ProcessResult

_CHUNK_SIZE = 64 * 1024


class ProcessRunner:
    """Spawns one child process per call and reports its result faithfully.

    Interpreting the exit status is left to the caller.
    """

    async def run(
        self,
        command: str,
        arguments: Sequence[str],
        input_bytes: bytes | None = None,
    ) -> ProcessResult:
        """Run ``command`` with ``arguments`` and wait for it to exit.

        Args:
            command: Executable to spawn.
            arguments: Argument list passed after the executable.
            input_bytes: Written to stdin before it is closed. When None,
                stdin is closed immediately.

        Returns:
            ProcessResult with the exit status and both streams.

        Raises:
            ProcessSpawnError: if the child could not be started.
        """
        Log.debug(f"Spawning {command} {' '.join(arguments)}")
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *arguments,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"Failed to start {command}: {exc}") from exc

        stdout, stderr, _ = await asyncio.gather(
            self._drain(process.stdout),
            self._drain(process.stderr),
            self._feed(process.stdin, input_bytes),
        )
        exit_status = await process.wait()
        Log.debug(
            f"{command} exited with status {exit_status} "
            f"({len(stdout)} bytes stdout, {len(stderr)} bytes stderr)"
        )
        return ProcessResult(exit_status=exit_status, stdout=stdout, stderr=stderr)

    @staticmethod
    async def _feed(stream: asyncio.StreamWriter | None, data: bytes | None) -> None:
        if stream is None:
            return
        try:
            if data:
                stream.write(data)
                await stream.drain()
            stream.close()
            await stream.wait_closed()
        except (BrokenPipeError, ConnectionResetError):
            # Child exited without consuming its input; the exit status decides.
            Log.debug("Child closed stdin before all input was written")

    @staticmethod
    async def _drain(stream: asyncio.StreamReader | None) -> bytes:
        if stream is None:
            return b""
        chunks: list[bytes] = []
        while True:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)
