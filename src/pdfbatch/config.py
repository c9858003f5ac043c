"""Configuration loading and validation for pdfbatch.

Two configuration sources exist:

- the job action config, a JSON file shipped inside every job archive;
- the server config, a YAML file naming the log, output and work directories.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from pdfbatch.constants import (
    DEFAULT_LOG_DIR,
    DEFAULT_OUT_DIR,
    DEFAULT_WORK_DIR,
)
from pdfbatch.exceptions import ConfigError


# ============================================================================
# Enums for constrained values
# ============================================================================


class ProcessingAction(str, Enum):
    """The six mutually-exclusive job actions.

    The value is the flag name used under "ProcessingActions" in the job config.
    """

    SPLIT = "Split"
    CONCATENATE = "Concatenate"
    MAKE_COPIES = "MakeCopies"
    SCALE_AND_ROTATE = "ScaleAndRotate"
    SMART_SAVE = "SmartSave"
    TEXT_CONVERT = "TextConvert"


class Trigger(str, Enum):
    """Page selection policies for the scale/rotate action."""

    ALL = "All"
    ODD = "Odd"  # 1-indexed odd page numbers
    EVEN = "Even"  # 1-indexed even page numbers
    XY_DIFF = "XYDiff"  # page orientation differs from target orientation
    XY_DIFF_DISABLE_SQUARE_ROTATION = "XYDiffDisableSquareRotation"

    @property
    def is_orientation_based(self) -> bool:
        return self in (Trigger.XY_DIFF, Trigger.XY_DIFF_DISABLE_SQUARE_ROTATION)


def parse_trigger(value: str) -> Trigger:
    """Parse a trigger name case-insensitively.

    Raises:
        ConfigError: If the name is not a known trigger.
    """
    if isinstance(value, str):
        wanted = value.strip().lower()
        for trigger in Trigger:
            if trigger.value.lower() == wanted:
                return trigger
    valid = ", ".join(t.value for t in Trigger)
    raise ConfigError(
        f"Invalid trigger '{value}'. Valid values are: {valid}",
        context={"field": "Settings.ScaleAndRotate.Trigger"},
    )


# ============================================================================
# Job action config
# ============================================================================


@dataclass
class ConcatenationSettings:
    """Page-break marker settings for concatenate and copy."""
    add_doc_break: bool = False
    break_text: str = ""


@dataclass
class MakeCopiesSettings:
    number_of_copies: int = 1


@dataclass
class SmartSavingSettings:
    """Optional smart-save steps, applied in the order flatten -> strip -> write."""
    strip_comments: bool = False
    flatten_acroforms: bool = False
    remove_password: bool = False


@dataclass
class TargetPageSize:
    page_width: float = 0.0
    page_height: float = 0.0


@dataclass
class ScaleAndRotateSettings:
    """Trigger-mode request for the scale/rotate action.

    A scale of (0, 0) asks the engine to derive both factors from the
    target size.
    """
    trigger: Trigger = Trigger.XY_DIFF
    degrees_rotation: int = 90
    scale_x: float = 0.0
    scale_y: float = 0.0
    shift_x: float = 0.0
    shift_y: float = 0.0


@dataclass
class Settings:
    """Per-action settings."""
    concatenation: ConcatenationSettings = field(default_factory=ConcatenationSettings)
    make_copies: MakeCopiesSettings = field(default_factory=MakeCopiesSettings)
    smart_saving: SmartSavingSettings = field(default_factory=SmartSavingSettings)
    target_page_size: TargetPageSize = field(default_factory=TargetPageSize)
    scale_and_rotate: ScaleAndRotateSettings = field(default_factory=ScaleAndRotateSettings)


@dataclass
class ActionConfig:
    """Root of the job action config.

    Author, date, description and notes are informational only.
    """
    author: str = ""
    date: str = ""
    description: str = ""
    enable_debug: bool = False
    notes: str = "No JSON has been read in"
    enabled_actions: list[ProcessingAction] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)


def _section(data: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    """Return a nested object, treating a missing or null one as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{path}' must be an object", context={"field": path})
    return value


def _get_bool(data: dict[str, Any], key: str, default: bool, path: str) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"'{path}' must be true or false, got {value!r}", context={"field": path})
    return value


def _get_number(data: dict[str, Any], key: str, default: float, path: str) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{path}' must be a number, got {value!r}", context={"field": path})
    return float(value)


def _get_int(data: dict[str, Any], key: str, default: int, path: str) -> int:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        # JSON writers sometimes emit 2.0 for an integer field
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ConfigError(f"'{path}' must be an integer, got {value!r}", context={"field": path})
    return value


def _get_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    return str(value)


def parse_processing_actions(data: dict[str, Any]) -> list[ProcessingAction]:
    """Return the enabled actions in declaration order."""
    enabled = []
    for action in ProcessingAction:
        if _get_bool(data, action.value, False, f"ProcessingActions.{action.value}"):
            enabled.append(action)
    return enabled


def parse_settings(data: dict[str, Any]) -> Settings:
    """Parse the "Settings" object of the job config."""
    concat = _section(data, "Concatenation", "Settings.Concatenation")
    copies = _section(data, "MakeCopies", "Settings.MakeCopies")
    saving = _section(data, "SmartSaving", "Settings.SmartSaving")
    size = _section(data, "TargetPageSize", "Settings.TargetPageSize")
    rotate = _section(data, "ScaleAndRotate", "Settings.ScaleAndRotate")

    trigger = Trigger.XY_DIFF
    if rotate.get("Trigger") is not None:
        trigger = parse_trigger(rotate["Trigger"])

    return Settings(
        concatenation=ConcatenationSettings(
            add_doc_break=_get_bool(concat, "AddDocBreak", False, "Settings.Concatenation.AddDocBreak"),
            break_text=_get_str(concat, "BreakText", ""),
        ),
        make_copies=MakeCopiesSettings(
            number_of_copies=_get_int(copies, "NumberOfCopies", 1, "Settings.MakeCopies.NumberOfCopies"),
        ),
        smart_saving=SmartSavingSettings(
            strip_comments=_get_bool(saving, "StripComments", False, "Settings.SmartSaving.StripComments"),
            flatten_acroforms=_get_bool(saving, "FlattenAcroforms", False, "Settings.SmartSaving.FlattenAcroforms"),
            remove_password=_get_bool(saving, "RemovePassword", False, "Settings.SmartSaving.RemovePassword"),
        ),
        target_page_size=TargetPageSize(
            page_width=_get_number(size, "PageWidth", 0.0, "Settings.TargetPageSize.PageWidth"),
            page_height=_get_number(size, "PageHeight", 0.0, "Settings.TargetPageSize.PageHeight"),
        ),
        scale_and_rotate=ScaleAndRotateSettings(
            trigger=trigger,
            degrees_rotation=_get_int(rotate, "DegreesRotation", 90, "Settings.ScaleAndRotate.DegreesRotation"),
            scale_x=_get_number(rotate, "ScaleX", 0.0, "Settings.ScaleAndRotate.ScaleX"),
            scale_y=_get_number(rotate, "ScaleY", 0.0, "Settings.ScaleAndRotate.ScaleY"),
            shift_x=_get_number(rotate, "ShiftX", 0.0, "Settings.ScaleAndRotate.ShiftX"),
            shift_y=_get_number(rotate, "ShiftY", 0.0, "Settings.ScaleAndRotate.ShiftY"),
        ),
    )


def parse_action_config(data: Any) -> ActionConfig:
    """Build an ActionConfig from decoded JSON.

    Unknown keys are ignored; missing keys take their defaults.
    """
    if not isinstance(data, dict):
        raise ConfigError("Action config must be a JSON object")

    return ActionConfig(
        author=_get_str(data, "Author", ""),
        date=_get_str(data, "Date", ""),
        description=_get_str(data, "Description", ""),
        enable_debug=_get_bool(data, "EnableDebug", False, "EnableDebug"),
        notes=_get_str(data, "Notes", "No JSON has been read in"),
        enabled_actions=parse_processing_actions(
            _section(data, "ProcessingActions", "ProcessingActions")
        ),
        settings=parse_settings(_section(data, "Settings", "Settings")),
    )


def load_action_config(config_path: Path) -> ActionConfig:
    """Load a job action config file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Action config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Action config is not valid JSON: {e}",
            context={"file": config_path.name},
        ) from e

    return parse_action_config(data)


# ============================================================================
# Server config
# ============================================================================


@dataclass
class Directories:
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    work_dir: Path = Path(DEFAULT_WORK_DIR)


@dataclass
class ServerConfig:
    """Root of the server config."""
    author: str = ""
    date: str = ""
    description: str = ""
    notes: str = ""
    directories: Directories = field(default_factory=Directories)


def load_server_config(config_path: Path) -> ServerConfig:
    """Load and validate a server configuration file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Server configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Server configuration is not valid YAML: {e}",
            context={"file": config_path.name},
        ) from e

    if data is None:
        return ServerConfig()
    if not isinstance(data, dict):
        raise ConfigError("Server configuration must be a YAML dictionary")

    dirs = data.get("directories") or {}
    if not isinstance(dirs, dict):
        raise ConfigError("'directories' must be a dictionary", context={"field": "directories"})

    return ServerConfig(
        author=str(data.get("author", "")),
        date=str(data.get("date", "")),
        description=str(data.get("description", "")),
        notes=str(data.get("notes", "")),
        directories=Directories(
            log_dir=Path(dirs.get("log_dir", DEFAULT_LOG_DIR)),
            out_dir=Path(dirs.get("out_dir", DEFAULT_OUT_DIR)),
            work_dir=Path(dirs.get("work_dir", DEFAULT_WORK_DIR)),
        ),
    )
