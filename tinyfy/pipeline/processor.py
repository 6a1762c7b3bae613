from tinyfy.config.settings import Settings
from tinyfy.diagnostics.extractor import DiagnosticExtractor
from tinyfy.diagnostics.models import Diagnostic
from tinyfy.editor.base import BaseFileSystem
from tinyfy.editor.local import LocalFileSystem
from tinyfy.logging.logger import Log
from tinyfy.pipeline.context import JobContext, PipelineStep
from tinyfy.pipeline.exceptions import (
    InputError,
    JobSkipped,
    ToolFailedError,
    WriteFailedError,
)
from tinyfy.pipeline.models import (
    InvocationMode,
    MinificationJob,
    Outcome,
    OutcomeStatus,
    PipelineConfig,
    SkipReason,
    ToolFamily,
)
from tinyfy.pipeline.steps import (
    InvokeToolStep,
    MeasureOutputStep,
    PersistOutputStep,
    ReadInputStep,
    RequireContentStep,
    ValidatePathStep,
)
from tinyfy.process.runner import ProcessRunner


class MinificationProcessor:
    """Runs one minification job through its mode-specific steps.

    Stream mode: validate -> read -> require content -> invoke -> persist -> measure.
    File-path mode: validate -> require content -> invoke -> measure.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        fs: BaseFileSystem,
        extractor: DiagnosticExtractor,
        tool_invoker: str,
        package_runner: str = "",
    ) -> None:
        self._extractor = extractor
        validate = ValidatePathStep(fs)
        require_content = RequireContentStep()
        invoke = InvokeToolStep(runner, tool_invoker, package_runner)
        self._steps: dict[InvocationMode, tuple[PipelineStep, ...]] = {
            InvocationMode.STREAM: (
                validate,
                ReadInputStep(fs),
                require_content,
                invoke,
                PersistOutputStep(fs),
                MeasureOutputStep(fs),
            ),
            InvocationMode.FILE_PATH: (
                validate,
                require_content,
                invoke,
                MeasureOutputStep(fs, require_output=True),
            ),
        }

    async def process(
        self,
        job: MinificationJob,
        family: ToolFamily,
        config: PipelineConfig,
    ) -> Outcome:
        """Run the job and convert every pipeline failure into an Outcome."""
        Log.info(f"Minifying {job.input_path} -> {job.output_path} with {family.tool_name}")
        context = JobContext(job=job, family=family, config=config)
        try:
            for step in self._steps[family.mode]:
                context = await step.run(context)
        except JobSkipped as exc:
            Log.info(f"Skipping {job.input_path}: {exc}")
            return self._outcome(context, OutcomeStatus.SKIPPED, str(exc), skip_reason=exc.reason)
        except InputError as exc:
            Log.error(f"{family.label} minification of {job.input_path} failed: {exc}")
            return self._outcome(context, OutcomeStatus.INPUT_FAILED, str(exc))
        except ToolFailedError as exc:
            message = str(exc)
            Log.error(f"{family.label} minification of {job.input_path} failed: {message}")
            return self._outcome(
                context,
                OutcomeStatus.TOOL_FAILED,
                message,
                diagnostic=self._extractor.extract(message, family.grammar),
            )
        except WriteFailedError as exc:
            Log.error(f"{family.label} output for {job.input_path} not saved: {exc}")
            return self._outcome(context, OutcomeStatus.WRITE_FAILED, str(exc))

        outcome = self._outcome(
            context, OutcomeStatus.SUCCESS, saved_bytes=self._saved_bytes(context)
        )
        Log.info(f"{job.output_path} processed in {outcome.duration_ms}ms")
        return outcome

    @staticmethod
    def _saved_bytes(context: JobContext) -> int | None:
        original = context.job.original_size_bytes
        if original is None or context.output_size_bytes is None:
            return None
        return original - context.output_size_bytes

    @staticmethod
    def _outcome(
        context: JobContext,
        status: OutcomeStatus,
        message: str = "",
        *,
        skip_reason: SkipReason | None = None,
        saved_bytes: int | None = None,
        diagnostic: Diagnostic | None = None,
    ) -> Outcome:
        return Outcome(
            status=status,
            family=context.family,
            input_path=context.job.input_path,
            output_path=context.job.output_path,
            skip_reason=skip_reason,
            duration_ms=context.duration_ms,
            saved_bytes=saved_bytes,
            message=message,
            diagnostic=diagnostic,
        )


def build_processor(
    settings: Settings,
    fs: BaseFileSystem | None = None,
    runner: ProcessRunner | None = None,
) -> MinificationProcessor:
    """Build a MinificationProcessor with the configured tool invocation."""
    return MinificationProcessor(
        runner=runner if runner is not None else ProcessRunner(),
        fs=fs if fs is not None else LocalFileSystem(),
        extractor=DiagnosticExtractor(),
        tool_invoker=settings.tool_invoker,
        package_runner=settings.package_runner,
    )
