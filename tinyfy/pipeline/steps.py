import asyncio
import os
import time

from tinyfy.editor.base import BaseFileSystem
from tinyfy.logging.logger import Log
from tinyfy.pipeline.context import JobContext, PipelineStep
from tinyfy.pipeline.exceptions import (
    EmptyInputError,
    JobSkipped,
    ToolFailedError,
    UnreadableInputError,
    WriteFailedError,
)
from tinyfy.pipeline.models import InvocationMode, SkipReason
from tinyfy.process.exceptions import ProcessSpawnError
from tinyfy.process.runner import ProcessRunner


class ValidatePathStep(PipelineStep):
    def __init__(self, fs: BaseFileSystem) -> None:
        self._fs = fs

    async def run(self, context: JobContext) -> JobContext:
        job = context.job
        stat = await asyncio.to_thread(self._fs.stat, job.input_path)
        if stat is None:
            raise JobSkipped(
                SkipReason.REMOTE,
                f"Cannot process remote file: {os.path.basename(job.input_path)}.\n"
                "Only local files are supported.",
            )
        if job.input_path.endswith(context.config.output_suffix):
            raise JobSkipped(SkipReason.ALREADY_MINIFIED, "File is already minified")
        if job.output_path == job.input_path:
            raise JobSkipped(
                SkipReason.SAME_PATH,
                "Input and output paths are the same. Aborting to prevent overwrite.",
            )
        job.original_size_bytes = stat.size
        return context


class ReadInputStep(PipelineStep):
    def __init__(self, fs: BaseFileSystem) -> None:
        self._fs = fs

    async def run(self, context: JobContext) -> JobContext:
        input_path = context.job.input_path
        try:
            context.content = await asyncio.to_thread(self._fs.read_bytes, input_path)
        except OSError as exc:
            raise UnreadableInputError(
                f"Could not read {os.path.basename(input_path)}: {exc}"
            ) from exc
        context.job.original_size_bytes = len(context.content)
        Log.debug(f"Read {len(context.content)} bytes from {context.job.input_path}")
        return context


class RequireContentStep(PipelineStep):
    async def run(self, context: JobContext) -> JobContext:
        if not context.job.original_size_bytes:
            raise EmptyInputError("Input file is empty")
        return context


class InvokeToolStep(PipelineStep):
    def __init__(
        self,
        runner: ProcessRunner,
        tool_invoker: str,
        package_runner: str = "",
    ) -> None:
        self._runner = runner
        self._tool_invoker = tool_invoker
        self._package_runner = package_runner

    async def run(self, context: JobContext) -> JobContext:
        job = context.job
        family = context.family
        arguments = family.build_arguments(job.input_path, job.output_path)
        if self._package_runner:
            arguments = [self._package_runner, *arguments]
        input_bytes = context.content if family.mode is InvocationMode.STREAM else None

        job.started_at = time.monotonic()
        try:
            result = await self._runner.run(self._tool_invoker, arguments, input_bytes)
        except ProcessSpawnError as exc:
            raise ToolFailedError(str(exc)) from exc
        context.duration_ms = round((time.monotonic() - job.started_at) * 1000)
        context.process_result = result

        if not result.ok:
            raise ToolFailedError(
                result.stderr_text.strip() or f"Process exited with status {result.exit_status}"
            )
        if family.mode is InvocationMode.STREAM and not result.stdout:
            raise ToolFailedError(f"{family.tool_name} produced no output")
        return context


class PersistOutputStep(PipelineStep):
    def __init__(self, fs: BaseFileSystem) -> None:
        self._fs = fs

    async def run(self, context: JobContext) -> JobContext:
        if context.process_result is None:
            raise ValueError("JobContext.process_result must be set before persist")
        output_path = context.job.output_path
        try:
            await asyncio.to_thread(
                self._fs.write_bytes, output_path, context.process_result.stdout
            )
        except OSError as exc:
            raise WriteFailedError(
                f"Could not write {os.path.basename(output_path)}: {exc}"
            ) from exc
        return context


class MeasureOutputStep(PipelineStep):
    """Record the output size.

    With ``require_output`` set, a missing output file means the tool
    exited cleanly without writing anything.
    """

    def __init__(self, fs: BaseFileSystem, require_output: bool = False) -> None:
        self._fs = fs
        self._require_output = require_output

    async def run(self, context: JobContext) -> JobContext:
        output_path = context.job.output_path
        try:
            stat = await asyncio.to_thread(self._fs.stat, output_path)
        except OSError as exc:
            Log.warning(f"Could not measure {output_path}: {exc}")
            context.output_size_bytes = None
            return context
        if stat is None and self._require_output:
            raise ToolFailedError(f"{context.family.tool_name} produced no output")
        context.output_size_bytes = stat.size if stat is not None else None
        return context
