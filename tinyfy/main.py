import asyncio

from tinyfy.activation import activate
from tinyfy.config.settings import Settings
from tinyfy.logging.logger import Log
from tinyfy.worker.watcher import SaveWatcher


async def run(settings: Settings) -> None:
    extension = await activate(settings)
    watcher = SaveWatcher(
        settings.watch_root,
        extension.dispatcher,
        settings.watch_poll_interval_seconds,
    )
    await watcher.run()


def main() -> None:
    """Entry point: load settings -> activate -> watch for saves."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting tinyfy in {settings.app_env} mode")
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        Log.info("Tinyfy stopped")


if __name__ == "__main__":
    main()
