"""Program options consumed by the version formatter, using Pydantic models."""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


@runtime_checkable
class Options(Protocol):
    """Key-value lookup with explicit presence checks."""

    def get(self, key: str, default: str) -> str: ...

    def is_set(self, key: str) -> bool: ...


class ProgramOptions(BaseModel):
    """Program identity and build metadata.

    Keys use the dashed names (``program-name``, ``program-buildgoos``...);
    fields may also be populated by their Python names. A key counts as set
    only when it was given explicitly, even if its value is an empty string.
    """
    program_name: str | None = Field(alias="program-name", default=None)
    program_version: str | None = Field(alias="program-version", default=None)
    program_timestamp: str | None = Field(alias="program-timestamp", default=None)
    program_buildgoos: str | None = Field(alias="program-buildgoos", default=None)
    program_buildgoarch: str | None = Field(alias="program-buildgoarch", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @classmethod
    def field_for_key(cls, key: str) -> str | None:
        for name, info in cls.model_fields.items():
            if key in (info.alias, name):
                return name
        return None

    def is_set(self, key: str) -> bool:
        name = self.field_for_key(key)
        if name is None or name not in self.model_fields_set:
            return False
        return getattr(self, name) is not None

    def get(self, key: str, default: str) -> str:
        if not self.is_set(key):
            return default
        return getattr(self, self.field_for_key(key))


def load_options(options_path: str | Path) -> ProgramOptions:
    """Load program options from a JSON file.

    Args:
        options_path: Path to a JSON object keyed by option name

    Returns:
        ProgramOptions: Loaded and validated options

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be read, is not valid JSON or holds
            unknown keys
    """
    options_path = Path(options_path)
    if not options_path.exists():
        raise FileNotFoundError(f"Options file not found: {options_path}")

    try:
        with open(options_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in options file {options_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Failed to read options file {options_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Options file {options_path} must contain a JSON object")

    try:
        options = ProgramOptions(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid options in {options_path}: {e}") from e

    logger.debug("Loaded options from %s: %s", options_path, sorted(options.model_fields_set))
    return options
