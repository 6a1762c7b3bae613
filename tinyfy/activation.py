from collections.abc import Sequence
from dataclasses import dataclass

from tinyfy.config.settings import Settings
from tinyfy.config.store import SettingsConfigStore
from tinyfy.dispatch.dispatcher import EventDispatcher
from tinyfy.editor.base import BaseConfigStore, BaseFileSystem, BaseNotifier
from tinyfy.editor.local import LocalFileSystem, LogNotifier
from tinyfy.editor.models import Notification
from tinyfy.logging.logger import Log
from tinyfy.pipeline.families import (
    RUNTIME,
    RUNTIME_INSTALL_URL,
    RUNTIME_PROBE_ARGUMENTS,
    build_families,
)
from tinyfy.pipeline.models import ToolFamily
from tinyfy.pipeline.processor import build_processor
from tinyfy.process.models import DependencyState, ToolStatus
from tinyfy.process.probe import DependencyProbe
from tinyfy.process.runner import ProcessRunner
from tinyfy.reporting.reporter import Reporter


class DependencyChecker:
    """Probes the runtime and each enabled minifier once at activation."""

    def __init__(self, probe: DependencyProbe, notifier: BaseNotifier) -> None:
        self._probe = probe
        self._notifier = notifier

    async def check(
        self,
        config_store: BaseConfigStore,
        families: Sequence[ToolFamily],
    ) -> DependencyState:
        statuses: dict[str, ToolStatus] = {}
        runtime_tool, *runtime_args = RUNTIME_PROBE_ARGUMENTS
        runtime = await self._probe.probe(runtime_tool, runtime_args)
        statuses[RUNTIME] = runtime
        if not runtime.available:
            Log.error("NPM not found. Minifiers will not run.")
            self._notifier.notify(
                Notification(
                    id="dependency-error",
                    title="NPM Not Found",
                    body="Node.js and NPM are required. Please install them to use this extension.",
                    url=RUNTIME_INSTALL_URL,
                )
            )
            return DependencyState.from_mapping(statuses)
        Log.info(f"NPM version {runtime.version} detected.")

        for family in families:
            if not config_store.get_bool(f"{family.config_prefix}.enabled", True):
                continue
            tool, *version_args = family.probe_arguments
            status = await self._probe.probe(tool, version_args)
            statuses[family.dependency] = status
            if status.available:
                Log.info(f"{family.tool_name} version {status.version} is installed and enabled.")
                continue
            Log.error(f"{family.tool_name} not found but is enabled in settings.")
            self._notifier.notify(
                Notification(
                    id=f"dependency-error-{family.config_prefix}",
                    title=f"{family.tool_name} Not Found",
                    body=family.install_hint,
                    url=family.install_url,
                )
            )
        return DependencyState.from_mapping(statuses)


@dataclass(frozen=True)
class Extension:
    """Everything a host needs after activation."""

    dispatcher: EventDispatcher
    dependencies: DependencyState


async def activate(
    settings: Settings,
    notifier: BaseNotifier | None = None,
    fs: BaseFileSystem | None = None,
    config_store: BaseConfigStore | None = None,
    runner: ProcessRunner | None = None,
) -> Extension:
    """Probe dependencies and build the save dispatcher."""
    Log.info("Activating Tinyfy extension...")
    notifier = notifier if notifier is not None else LogNotifier()
    config_store = config_store if config_store is not None else SettingsConfigStore()
    runner = runner if runner is not None else ProcessRunner()
    families = build_families(settings)

    probe = DependencyProbe(runner, settings.tool_invoker)
    dependencies = await DependencyChecker(probe, notifier).check(config_store, families)

    dispatcher = EventDispatcher(
        processor=build_processor(settings, fs=fs, runner=runner),
        reporter=Reporter(notifier, config_store),
        config_store=config_store,
        families=families,
        dependencies=dependencies,
    )
    Log.info("Registering save listeners...")
    return Extension(dispatcher=dispatcher, dependencies=dependencies)
