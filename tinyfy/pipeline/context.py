from abc import ABC, abstractmethod
from dataclasses import dataclass

from tinyfy.pipeline.models import MinificationJob, PipelineConfig, ToolFamily
from tinyfy.process.models import ProcessResult


@dataclass(slots=True)
class JobContext:
    job: MinificationJob
    family: ToolFamily
    config: PipelineConfig
    content: bytes = b""
    process_result: ProcessResult | None = None
    duration_ms: int | None = None
    output_size_bytes: int | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: JobContext) -> JobContext:
        raise NotImplementedError
