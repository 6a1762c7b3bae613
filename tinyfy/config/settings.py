from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    tool_invoker: str = "/usr/bin/env"
    package_runner: str = "npx"

    terser_enabled: bool = True
    terser_output_suffix: str = ".min.js"

    lightningcss_enabled: bool = True
    lightningcss_output_suffix: str = ".min.css"

    jump_to_error: bool = True
    css_syntaxes: list[str] = ["css"]

    watch_root: Path = Path(".")
    watch_poll_interval_seconds: float = 1.0
