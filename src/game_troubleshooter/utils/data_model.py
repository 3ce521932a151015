"""
Unified data models for the game troubleshooter.

This module contains all Pydantic BaseModel classes used throughout the application,
providing centralized data validation and type safety.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from game_troubleshooter.utils.monitoring import resolve_level


# ============================================================================
# Crash-Fix Action Models
# ============================================================================

class LogMessage(BaseModel):
    """
    Informational step of a crash-fix sequence.

    Attributes:
        text: Message shown to the user when the step runs
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal['log'] = 'log'
    text: str = Field(..., min_length=1, description="Message shown when the step runs")

    def describe(self) -> str:
        return self.text


class StopProcess(BaseModel):
    """
    Terminate every running process with the given name.

    Attributes:
        process_name: Executable name to stop (e.g., 'cod.exe'), compared case-insensitively
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal['stop_process'] = 'stop_process'
    process_name: str = Field(..., min_length=1, description="Executable name to stop")

    def describe(self) -> str:
        return f"Stopping process {self.process_name}"


class DeleteTempFiles(BaseModel):
    """
    Delete files directly inside a cache or temp directory.

    Attributes:
        directory: Directory to clear. May contain $VAR / ${VAR} references and '~'.
        pattern: Glob pattern selecting the files to delete (default: every file)
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal['delete_temp_files'] = 'delete_temp_files'
    directory: str = Field(..., min_length=1, description="Directory to clear")
    pattern: str = Field(default="*", min_length=1, description="Glob pattern of files to delete")

    def describe(self) -> str:
        return f"Deleting {self.pattern} in {self.directory}"


Action = Annotated[
    Union[LogMessage, StopProcess, DeleteTempFiles],
    Field(discriminator='kind')
]


class ActionResult(BaseModel):
    """
    Outcome of one crash-fix action.

    Attributes:
        action: The action that was executed
        ok: False if the action raised or reported that it had no effect
    """
    model_config = ConfigDict(frozen=True)

    action: Action
    ok: bool


# ============================================================================
# Catalog Models
# ============================================================================

class GameEntry(BaseModel):
    """
    Everything the catalog knows about one game.

    The crash-fix sequence is kept apart from the advice categories, so it can
    never show up in an issue listing or match an issue query. Categories are
    a read-only mapping and every sequence is a tuple.
    """
    model_config = ConfigDict(frozen=True)

    advice: Mapping[str, Tuple[str, ...]] = Field(default_factory=dict, validate_default=True, description="Advice steps by issue category")
    crash_fix: Optional[Tuple[Action, ...]] = Field(default=None, description="Ordered cleanup actions, if any")

    @field_validator('advice')
    @classmethod
    def _check_advice(cls, value: Mapping[str, Tuple[str, ...]]) -> Mapping[str, Tuple[str, ...]]:
        for category, steps in value.items():
            if not category.strip():
                raise ValueError("Issue category names must not be blank")
            if not steps:
                raise ValueError(f"Issue category '{category}' has no advice steps")
        return MappingProxyType(dict(value))


class Catalog(BaseModel):
    """Games and their entries, in catalog file order, as a read-only mapping."""
    model_config = ConfigDict(frozen=True)

    games: Mapping[str, GameEntry] = Field(..., description="Game entries by exact game name")

    @field_validator('games')
    @classmethod
    def _freeze_games(cls, value: Mapping[str, GameEntry]) -> Mapping[str, GameEntry]:
        return MappingProxyType(dict(value))


# ============================================================================
# Application Configuration Model
# ============================================================================

class HelperConfig(BaseModel):
    """
    Runtime settings, loaded from troubleshooter_config.json when present.

    Attributes:
        log_level: Root logging level name (e.g., "INFO", "DEBUG")
        log_file: Optional log file
        console_log: Also log to stderr (off by default so the prompt stays readable)
        catalog_path: Optional catalog JSON replacing the shipped one
        prompt: Prompt shown before each command
        process_timeout: Seconds to wait for a graceful process exit before killing it
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    log_level: str = Field(default="INFO", description="Root logging level name")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")
    console_log: bool = Field(default=False, description="Also log to stderr")
    catalog_path: Optional[Path] = Field(default=None, description="Catalog JSON overriding the shipped one")
    prompt: str = Field(default=">> ", description="Interactive prompt")
    process_timeout: float = Field(default=5.0, gt=0.0, description="Graceful termination timeout in seconds")

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        resolve_level(value)
        return value.upper()
