import asyncio
from collections.abc import Sequence

from tinyfy.editor.base import BaseConfigStore, BaseDocument
from tinyfy.logging.logger import Log
from tinyfy.pipeline.models import (
    MinificationJob,
    Outcome,
    OutcomeStatus,
    PipelineConfig,
    ToolFamily,
)
from tinyfy.pipeline.processor import MinificationProcessor
from tinyfy.process.models import DependencyState
from tinyfy.reporting.reporter import Reporter


class EventDispatcher:
    """Routes save events to the minification pipeline of their tool family.

    Failures never propagate to the caller: every job ends in a report.
    """

    def __init__(
        self,
        processor: MinificationProcessor,
        reporter: Reporter,
        config_store: BaseConfigStore,
        families: Sequence[ToolFamily],
        dependencies: DependencyState,
    ) -> None:
        self._processor = processor
        self._reporter = reporter
        self._config_store = config_store
        self._families = tuple(families)
        self._dependencies = dependencies
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}
        self._pending: set[asyncio.Task[None]] = set()

    def on_save(self, document: BaseDocument) -> None:
        """Schedule handling of a save event and return immediately."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            Log.exception(f"Could not schedule save handling: {exc}")
            self._reporter.report_unexpected(exc)
            return
        task = loop.create_task(self.handle_save(document))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def handle_save(self, document: BaseDocument) -> None:
        try:
            await self._dispatch(document)
        except Exception as exc:
            Log.exception(f"Error in save handler: {exc}")
            self._reporter.report_unexpected(exc)

    async def drain(self) -> None:
        """Wait until every scheduled save has been handled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def family_for(self, syntax: str | None) -> ToolFamily | None:
        for family in self._families:
            if family.handles(syntax):
                return family
        return None

    async def _dispatch(self, document: BaseDocument) -> None:
        input_path = document.path
        if not input_path:
            return
        family = self.family_for(document.syntax)
        if family is None:
            return

        config = PipelineConfig.load(self._config_store, family)
        if not config.enabled:
            Log.info(f"{family.label} minification is disabled in settings.")
            return
        if input_path.endswith(config.output_suffix):
            Log.info(f"Skipping already minified {family.label} file.")
            return
        if not self._dependencies.is_available(family.dependency):
            self._reporter.report(
                Outcome(
                    status=OutcomeStatus.UNAVAILABLE,
                    family=family,
                    input_path=input_path,
                    output_path=family.output_path_for(input_path, config.output_suffix),
                    message=(
                        f"Attempted to minify {family.label} but "
                        f"{family.tool_name} is not installed."
                    ),
                ),
                document,
            )
            return

        job = MinificationJob.create(input_path, family, config)
        outcome = await self._process_serialized(job, family, config)
        self._reporter.report(outcome, document)

    async def _process_serialized(
        self,
        job: MinificationJob,
        family: ToolFamily,
        config: PipelineConfig,
    ) -> Outcome:
        """Run the job while holding the lock for its output path.

        The lock is dropped once no save for that path holds or awaits it.
        """
        output_path = job.output_path
        lock = self._locks.get(output_path)
        if lock is None:
            lock = self._locks[output_path] = asyncio.Lock()
        self._lock_users[output_path] = self._lock_users.get(output_path, 0) + 1
        try:
            async with lock:
                return await self._processor.process(job, family, config)
        finally:
            self._lock_users[output_path] -= 1
            if not self._lock_users[output_path]:
                del self._lock_users[output_path]
                del self._locks[output_path]
