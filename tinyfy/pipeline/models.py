import re
from dataclasses import dataclass
from enum import Enum

from tinyfy.diagnostics.models import Diagnostic
from tinyfy.editor.base import BaseConfigStore


class InvocationMode(Enum):
    """How content travels between the pipeline and the tool."""

    STREAM = "stream"
    FILE_PATH = "file-path"


class OutcomeStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    TOOL_FAILED = "tool-failed"
    WRITE_FAILED = "write-failed"
    INPUT_FAILED = "input-failed"
    UNAVAILABLE = "unavailable"


class SkipReason(Enum):
    REMOTE = "remote"
    SAME_PATH = "same-path"
    ALREADY_MINIFIED = "already-minified"


@dataclass(frozen=True)
class ToolFamily:
    """Describes one class of content types and the minifier that handles them."""

    name: str
    label: str
    tool_name: str
    dependency: str
    config_prefix: str
    syntaxes: frozenset[str]
    source_pattern: str
    default_suffix: str
    mode: InvocationMode
    arguments: tuple[str, ...]
    grammar: str
    parse_error_title: str
    probe_arguments: tuple[str, ...]
    install_hint: str
    install_url: str

    def handles(self, syntax: str | None) -> bool:
        return syntax is not None and syntax in self.syntaxes

    def output_path_for(self, input_path: str, suffix: str) -> str:
        """Replace the known source extension with ``suffix``.

        Paths without a known extension are returned unchanged.
        """
        return re.sub(self.source_pattern, lambda _match: suffix, input_path)

    def build_arguments(self, input_path: str, output_path: str) -> list[str]:
        return [
            argument.format(input=input_path, output=output_path)
            for argument in self.arguments
        ]


@dataclass(frozen=True)
class PipelineConfig:
    """Per-family settings, read fresh for every save."""

    enabled: bool
    output_suffix: str

    @classmethod
    def load(cls, store: BaseConfigStore, family: ToolFamily) -> "PipelineConfig":
        return cls(
            enabled=store.get_bool(f"{family.config_prefix}.enabled", True),
            output_suffix=store.get_str(
                f"{family.config_prefix}.outputSuffix", family.default_suffix
            )
            or family.default_suffix,
        )


@dataclass
class MinificationJob:
    """One save-triggered minification attempt for a single file."""

    input_path: str
    output_path: str
    original_size_bytes: int | None = None
    started_at: float | None = None

    @classmethod
    def create(
        cls,
        input_path: str,
        family: ToolFamily,
        config: PipelineConfig,
    ) -> "MinificationJob":
        return cls(
            input_path=input_path,
            output_path=family.output_path_for(input_path, config.output_suffix),
        )


@dataclass(frozen=True)
class Outcome:
    """Terminal result of a job, ready to be reported."""

    status: OutcomeStatus
    family: ToolFamily
    input_path: str
    output_path: str
    skip_reason: SkipReason | None = None
    duration_ms: int | None = None
    saved_bytes: int | None = None
    message: str = ""
    diagnostic: Diagnostic | None = None
