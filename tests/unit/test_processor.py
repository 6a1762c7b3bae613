import asyncio
from unittest.mock import AsyncMock, MagicMock

from tinyfy.diagnostics.extractor import DiagnosticExtractor
from tinyfy.editor.base import BaseFileSystem
from tinyfy.editor.models import FileStat
from tinyfy.pipeline.families import CSS_FAMILY, JS_FAMILY
from tinyfy.pipeline.models import (
    MinificationJob,
    Outcome,
    OutcomeStatus,
    PipelineConfig,
    SkipReason,
    ToolFamily,
)
from tinyfy.pipeline.processor import MinificationProcessor
from tinyfy.process.exceptions import ProcessSpawnError
from tinyfy.process.models import ProcessResult
from tinyfy.process.runner import ProcessRunner

JS_CONFIG = PipelineConfig(enabled=True, output_suffix=".min.js")
CSS_CONFIG = PipelineConfig(enabled=True, output_suffix=".min.css")


def _make_processor(
    stats: dict[str, FileStat | None] | None = None,
    content: bytes = b"x" * 1000,
    result: ProcessResult | None = None,
) -> tuple[MinificationProcessor, MagicMock, MagicMock]:
    """Create a processor with a mocked runner and filesystem."""
    stats = stats if stats is not None else {}
    runner = MagicMock(spec=ProcessRunner)
    runner.run = AsyncMock(
        return_value=result if result is not None else ProcessResult(0, b"y" * 400)
    )
    fs = MagicMock(spec=BaseFileSystem)
    fs.stat.side_effect = lambda path: stats.get(path)
    fs.read_bytes.return_value = content
    processor = MinificationProcessor(
        runner=runner,
        fs=fs,
        extractor=DiagnosticExtractor(),
        tool_invoker="/usr/bin/env",
        package_runner="npx",
    )
    return processor, runner, fs


def _process(
    processor: MinificationProcessor,
    path: str,
    family: ToolFamily = JS_FAMILY,
    config: PipelineConfig = JS_CONFIG,
) -> Outcome:
    job = MinificationJob.create(path, family, config)
    return asyncio.run(processor.process(job, family, config))


class TestStreamModeSuccess:
    def test_reports_saved_bytes(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/app.js": FileStat(1000), "/p/app.min.js": FileStat(400)}
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.saved_bytes == 600
        assert outcome.output_path == "/p/app.min.js"
        assert outcome.duration_ms is not None and outcome.duration_ms >= 0

    def test_passes_full_content_on_stdin(self) -> None:
        processor, runner, _fs = _make_processor(
            stats={"/p/app.js": FileStat(1000), "/p/app.min.js": FileStat(400)}
        )

        _process(processor, "/p/app.js")

        runner.run.assert_awaited_once_with(
            "/usr/bin/env", ["npx", "terser", "--compress", "--mangle"], b"x" * 1000
        )

    def test_persists_stdout_to_output_path(self) -> None:
        processor, _runner, fs = _make_processor(
            stats={"/p/app.js": FileStat(1000), "/p/app.min.js": FileStat(400)}
        )

        _process(processor, "/p/app.js")

        fs.write_bytes.assert_called_once_with("/p/app.min.js", b"y" * 400)

    def test_original_size_comes_from_content(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/app.js": FileStat(5), "/p/app.min.js": FileStat(400)}
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.saved_bytes == 600

    def test_missing_output_stat_omits_savings(self) -> None:
        processor, _runner, _fs = _make_processor(stats={"/p/app.js": FileStat(1000)})

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.saved_bytes is None

    def test_failing_output_stat_omits_savings(self) -> None:
        processor, _runner, fs = _make_processor()

        def stat(path: str) -> FileStat:
            if path == "/p/app.min.js":
                raise OSError("I/O error")
            return FileStat(1000)

        fs.stat.side_effect = stat

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.saved_bytes is None


class TestFilePathModeSuccess:
    def test_passes_paths_and_no_stdin(self) -> None:
        processor, runner, fs = _make_processor(
            stats={"/p/main.css": FileStat(2000), "/p/main.min.css": FileStat(500)},
            result=ProcessResult(0),
        )

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.saved_bytes == 1500
        runner.run.assert_awaited_once_with(
            "/usr/bin/env",
            ["npx", "lightningcss", "--minify", "/p/main.css", "-o", "/p/main.min.css"],
            None,
        )
        fs.read_bytes.assert_not_called()
        fs.write_bytes.assert_not_called()

    def test_empty_stdout_is_fine(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/main.css": FileStat(10), "/p/main.min.css": FileStat(8)},
            result=ProcessResult(0, b"", b""),
        )

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.status is OutcomeStatus.SUCCESS

    def test_missing_output_file_is_tool_failure(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/main.css": FileStat(10)},
            result=ProcessResult(0),
        )

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.status is OutcomeStatus.TOOL_FAILED
        assert outcome.message == "Lightning CSS produced no output"
        assert outcome.saved_bytes is None

    def test_unmeasurable_output_omits_savings(self) -> None:
        processor, _runner, fs = _make_processor(result=ProcessResult(0))

        def stat(path: str) -> FileStat:
            if path == "/p/main.min.css":
                raise OSError("I/O error")
            return FileStat(10)

        fs.stat.side_effect = stat

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.saved_bytes is None


class TestSkips:
    def test_remote_file_is_skipped_before_spawn(self) -> None:
        processor, runner, _fs = _make_processor(stats={})

        outcome = _process(processor, "/remote/app.js")

        assert outcome.status is OutcomeStatus.SKIPPED
        assert outcome.skip_reason is SkipReason.REMOTE
        assert "app.js" in outcome.message
        runner.run.assert_not_awaited()

    def test_same_input_and_output_path_is_skipped(self) -> None:
        processor, runner, fs = _make_processor(stats={"/p/app.ts": FileStat(10)})

        outcome = _process(processor, "/p/app.ts")

        assert outcome.skip_reason is SkipReason.SAME_PATH
        runner.run.assert_not_awaited()
        fs.write_bytes.assert_not_called()

    def test_already_minified_is_skipped(self) -> None:
        processor, runner, _fs = _make_processor(stats={"/p/app.min.js": FileStat(10)})

        outcome = _process(processor, "/p/app.min.js")

        assert outcome.skip_reason is SkipReason.ALREADY_MINIFIED
        runner.run.assert_not_awaited()


class TestInputFailures:
    def test_empty_stream_input_fails(self) -> None:
        processor, runner, _fs = _make_processor(
            stats={"/p/app.js": FileStat(0)}, content=b""
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.INPUT_FAILED
        assert outcome.message == "Input file is empty"
        runner.run.assert_not_awaited()

    def test_empty_file_path_input_fails(self) -> None:
        processor, runner, _fs = _make_processor(stats={"/p/main.css": FileStat(0)})

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.status is OutcomeStatus.INPUT_FAILED
        runner.run.assert_not_awaited()

    def test_unreadable_stream_input_fails(self) -> None:
        processor, runner, fs = _make_processor(stats={"/p/app.js": FileStat(1000)})
        fs.read_bytes.side_effect = PermissionError("denied")

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.INPUT_FAILED
        assert outcome.message == "Could not read app.js: denied"
        runner.run.assert_not_awaited()


class TestToolFailures:
    def test_non_zero_exit_extracts_diagnostic(self) -> None:
        processor, _runner, fs = _make_processor(
            stats={"/p/app.js": FileStat(1000)},
            result=ProcessResult(1, b"", b"Parse error at 0:3,7\nERROR: Unexpected token\n"),
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.TOOL_FAILED
        assert outcome.diagnostic is not None
        assert (outcome.diagnostic.line, outcome.diagnostic.column) == (3, 7)
        fs.write_bytes.assert_not_called()

    def test_non_zero_exit_fails_even_with_stdout(self) -> None:
        processor, _runner, fs = _make_processor(
            stats={"/p/app.js": FileStat(1000)},
            result=ProcessResult(1, b"minified", b"boom"),
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.TOOL_FAILED
        assert outcome.message == "boom"
        assert outcome.diagnostic is None
        fs.write_bytes.assert_not_called()

    def test_silent_failure_reports_exit_status(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/main.css": FileStat(10)},
            result=ProcessResult(2),
        )

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.message == "Process exited with status 2"

    def test_empty_stdout_in_stream_mode_fails(self) -> None:
        processor, _runner, fs = _make_processor(
            stats={"/p/app.js": FileStat(1000)},
            result=ProcessResult(0, b"", b""),
        )

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.TOOL_FAILED
        assert outcome.message == "Terser produced no output"
        fs.write_bytes.assert_not_called()

    def test_spawn_failure_is_tool_failure(self) -> None:
        processor, runner, _fs = _make_processor(stats={"/p/app.js": FileStat(1000)})
        runner.run.side_effect = ProcessSpawnError("Failed to start /usr/bin/env: no such file")

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.TOOL_FAILED
        assert "Failed to start" in outcome.message

    def test_css_diagnostic_carries_kind(self) -> None:
        processor, _runner, _fs = _make_processor(
            stats={"/p/main.css": FileStat(10)},
            result=ProcessResult(
                101, b"", b"Error { kind: InvalidSelector(..), line: 304, column: 2 }"
            ),
        )

        outcome = _process(processor, "/p/main.css", CSS_FAMILY, CSS_CONFIG)

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.kind == "InvalidSelector"


class TestWriteFailures:
    def test_write_error_is_distinct_category(self) -> None:
        processor, _runner, fs = _make_processor(stats={"/p/app.js": FileStat(1000)})
        fs.write_bytes.side_effect = PermissionError("denied")

        outcome = _process(processor, "/p/app.js")

        assert outcome.status is OutcomeStatus.WRITE_FAILED
        assert "app.min.js" in outcome.message
