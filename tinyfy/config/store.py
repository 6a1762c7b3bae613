import re
from collections.abc import Callable

from tinyfy.config.settings import Settings
from tinyfy.editor.base import BaseConfigStore

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Keys namespaced under the extension itself map to top-level settings.
_NAMESPACE = "tinyfy"


def attribute_name(key: str) -> str:
    """Map a dotted camelCase key to a Settings attribute.

    ``terser.outputSuffix`` -> ``terser_output_suffix``,
    ``tinyfy.jumpToError`` -> ``jump_to_error``.
    """
    parts = key.split(".")
    if len(parts) > 1 and parts[0] == _NAMESPACE:
        parts = parts[1:]
    return "_".join(_CAMEL_BOUNDARY.sub("_", part).lower() for part in parts)


class SettingsConfigStore(BaseConfigStore):
    """Configuration store that re-reads Settings on every lookup."""

    def __init__(self, settings_factory: Callable[[], Settings] = Settings) -> None:
        self._settings_factory = settings_factory

    def get_bool(self, key: str, default: bool) -> bool:
        value = self._lookup(key)
        if value is None:
            return default
        return bool(value)

    def get_str(self, key: str, default: str) -> str:
        value = self._lookup(key)
        if value is None or value == "":
            return default
        return str(value)

    def _lookup(self, key: str) -> object | None:
        settings = self._settings_factory()
        return getattr(settings, attribute_name(key), None)
