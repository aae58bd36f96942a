# justlog/config/settings.py
# Configuration management for Justlog including data paths, tick interval & rest timer defaults

import os
from pathlib import Path
from typing import Dict, Any, Optional, cast
import typer
from dataclasses import dataclass, asdict

from ..justlog_io.generics import read_json_safe, write_json_safe
from ..core.exceptions import JSONParsingError, SettingsValidationError

# environment override for the config & data root
HOME_ENV_VAR = "JUSTLOG_HOME"

VALID_WEIGHT_UNITS = {"KG", "LBS"}
VALID_DISTANCE_UNITS = {"KM", "MILES"}


# * Root directory for config & session data (JUSTLOG_HOME or ~/.justlog)
def justlog_home() -> Path:
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".justlog"


# * Default settings dataclass for Justlog w/ storage paths & timer configuration
@dataclass
class JustlogSettings:
    # empty data_dir means the justlog home directory
    data_dir: str = ""
    session_filename: str = "session.json"

    # seconds between duration ticks while a session is active
    tick_interval: float = 1.0

    # rest timer default when `justlog rest` gets no duration
    default_rest_seconds: int = 90

    # display units
    weight_unit: str = "KG"
    distance_unit: str = "KM"

    def __post_init__(self) -> None:
        if (
            isinstance(self.tick_interval, bool)
            or not isinstance(self.tick_interval, (int, float))
            or self.tick_interval < 0.1
        ):
            raise SettingsValidationError(
                f"tick_interval must be >= 0.1 seconds, got {self.tick_interval}",
                "tick_interval",
                self.tick_interval,
            )

        if (
            isinstance(self.default_rest_seconds, bool)
            or not isinstance(self.default_rest_seconds, int)
            or self.default_rest_seconds < 1
        ):
            raise SettingsValidationError(
                f"default_rest_seconds must be a positive integer, got {self.default_rest_seconds}",
                "default_rest_seconds",
                self.default_rest_seconds,
            )

        if self.weight_unit not in VALID_WEIGHT_UNITS:
            raise SettingsValidationError(
                f"weight_unit must be one of {sorted(VALID_WEIGHT_UNITS)}, got '{self.weight_unit}'",
                "weight_unit",
                self.weight_unit,
            )

        if self.distance_unit not in VALID_DISTANCE_UNITS:
            raise SettingsValidationError(
                f"distance_unit must be one of {sorted(VALID_DISTANCE_UNITS)}, got '{self.distance_unit}'",
                "distance_unit",
                self.distance_unit,
            )

        if not isinstance(self.session_filename, str) or not self.session_filename.strip():
            raise SettingsValidationError(
                "session_filename must be a non-empty string",
                "session_filename",
                self.session_filename,
            )

    @property
    def data_path(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return justlog_home()

    @property
    def session_path(self) -> Path:
        return self.data_path / self.session_filename


# * Settings management class w/ JSON persistence for loading, saving, & modifying settings
class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path
        self._settings: Optional[JustlogSettings] = None

    # resolved lazily so JUSTLOG_HOME set after import still applies
    @property
    def config_path(self) -> Path:
        return self._config_path or justlog_home() / "config.json"

    @config_path.setter
    def config_path(self, path: Optional[Path]) -> None:
        self._config_path = path
        self._settings = None

    # load settings from file or return defaults
    def load(self) -> JustlogSettings:
        if self._settings is not None:
            return self._settings

        if self.config_path.exists():
            try:
                data = read_json_safe(self.config_path)
                self._settings = JustlogSettings(**data)
            except (JSONParsingError, SettingsValidationError, TypeError, ValueError) as e:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
                self._settings = JustlogSettings()
        else:
            self._settings = JustlogSettings()

        return self._settings

    # save setting to file
    def save(self, settings: JustlogSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self._settings = settings

    # get a specific setting value
    def get(self, key: str) -> Any:
        settings = self.load()
        return getattr(settings, key, None)

    # set a specific setting value; re-validates through the dataclass
    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        if not hasattr(settings, key):
            raise ValueError(f"Unknown setting: {key}")

        data = asdict(settings)
        data[key] = value
        self.save(JustlogSettings(**data))

    # reset to default settings
    def reset(self) -> None:
        self.save(JustlogSettings())

    # list all settings as a dictionary
    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())


# global settings manager instance
settings_manager = SettingsManager()


# * Retrieve settings preferring injected object from Typer context
def get_settings(
    ctx: typer.Context, provided: Optional[JustlogSettings] = None
) -> JustlogSettings:
    # prefer explicitly provided settings
    if provided is not None:
        return provided

    # search ctx, parent, & root for JustlogSettings
    candidates: list[typer.Context] = [ctx]
    parent = cast(Optional[typer.Context], getattr(ctx, "parent", None))
    if parent is not None:
        candidates.append(parent)
    find_root = getattr(ctx, "find_root", None)
    root_ctx = (
        cast(Optional[typer.Context], find_root()) if callable(find_root) else None
    )
    if root_ctx is not None:
        candidates.append(root_ctx)

    for c in candidates:
        obj = getattr(c, "obj", None)
        if isinstance(obj, JustlogSettings):
            return obj

    # fallback to loading from disk
    return settings_manager.load()
