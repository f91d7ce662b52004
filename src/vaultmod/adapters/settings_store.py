import io
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ..errors import UnknownSettingError

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    block_reference_alias: bool = True
    confirm_all_new_notes: bool = False
    confirm_phantom_notes_only: bool = True
    auto_hide_properties: bool = False

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def set(self, name: str, value: bool) -> None:
        if name not in self.names():
            raise UnknownSettingError(name)
        setattr(self, name, bool(value))


class SettingsStore:
    """
    Feature toggles persisted as a flat YAML mapping. Stored values overlay
    the defaults; unknown keys are dropped.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Settings:
        settings = Settings()
        if not self.path.exists():
            return settings
        try:
            data = yaml.safe_load(io.StringIO(self.path.read_text(encoding="utf-8"))) or {}
        except yaml.YAMLError:
            logger.warning("Invalid settings file %s, using defaults", self.path)
            return settings
        if not isinstance(data, dict):
            logger.warning("Settings file %s is not a mapping, using defaults", self.path)
            return settings
        for name in Settings.names():
            if name in data:
                settings.set(name, _as_bool(data[name]))
        return settings

    def save(self, settings: Settings) -> None:
        data: dict[str, Any] = asdict(settings)
        buf = io.StringIO()
        yaml.safe_dump(data, buf, sort_keys=False, allow_unicode=True)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(buf.getvalue(), encoding="utf-8")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
