import os

from tinyfy.editor.base import BaseConfigStore, BaseDocument, BaseNotifier
from tinyfy.editor.models import Notification
from tinyfy.logging.logger import Log
from tinyfy.pipeline.models import Outcome, OutcomeStatus, SkipReason
from tinyfy.reporting.cursor import jump_to_error
from tinyfy.reporting.formatting import format_bytes

DEFAULT_ERROR_KIND = "Parse Error"


class Reporter:
    """Presents job outcomes to the user and positions the cursor on errors."""

    def __init__(self, notifier: BaseNotifier, config_store: BaseConfigStore) -> None:
        self._notifier = notifier
        self._config_store = config_store

    def report(self, outcome: Outcome, document: BaseDocument) -> None:
        """Send the notification matching ``outcome``; some skips only log."""
        if outcome.status is OutcomeStatus.SUCCESS:
            self._report_success(outcome)
        elif outcome.status is OutcomeStatus.SKIPPED:
            self._report_skip(outcome)
        elif outcome.status is OutcomeStatus.TOOL_FAILED:
            self._report_tool_failure(outcome, document)
        elif outcome.status is OutcomeStatus.WRITE_FAILED:
            self._notify(
                "minify-error",
                f"{outcome.family.label} Output Not Saved",
                outcome.message,
            )
        elif outcome.status is OutcomeStatus.INPUT_FAILED:
            self._notify(
                "minify-error",
                f"{outcome.family.label} Minification Failed",
                outcome.message,
            )
        else:
            Log.error(f"{outcome.input_path} not minified: {outcome.message}")

    def report_unexpected(self, exc: BaseException) -> None:
        self._notify("minify-error", "Minification Error", f"Unexpected error: {exc}")

    def _report_success(self, outcome: Outcome) -> None:
        filename = os.path.basename(outcome.output_path)
        body = f"{filename} processed in {outcome.duration_ms}ms"
        if outcome.saved_bytes is not None:
            body += f" (saved {format_bytes(outcome.saved_bytes)})"
        self._notify("minify-success", f"{outcome.family.label} Minified Successfully", body)

    def _report_skip(self, outcome: Outcome) -> None:
        if outcome.skip_reason is SkipReason.REMOTE:
            self._notify("remote-file-unsupported", "Minification Skipped", outcome.message)

    def _report_tool_failure(self, outcome: Outcome, document: BaseDocument) -> None:
        diagnostic = outcome.diagnostic
        if diagnostic is None:
            self._notify(
                "minify-error",
                f"{outcome.family.label} Minification Failed",
                outcome.message,
            )
            return
        if self._config_store.get_bool("tinyfy.jumpToError", True):
            jump_to_error(document, diagnostic.line, diagnostic.column)
        title = outcome.family.parse_error_title.format(
            kind=diagnostic.kind or DEFAULT_ERROR_KIND
        )
        self._notify(
            "minify-error",
            title,
            f"Check near line {diagnostic.line}, column {diagnostic.column} for the error.",
        )

    def _notify(self, notification_id: str, title: str, body: str, url: str | None = None) -> None:
        self._notifier.notify(Notification(id=notification_id, title=title, body=body, url=url))
