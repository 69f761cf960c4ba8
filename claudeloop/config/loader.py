"""Loading principles documents from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from claudeloop.config.defaults import default_principles
from claudeloop.config.principles import Principles


class LoadError(Exception):
    """A principles file that could not be read or parsed."""

    def __init__(self, path: str, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.path}: {self.message}: {self.cause}"
        return f"{self.path}: {self.message}"


def load_from_file(path: str | Path) -> Principles:
    """Read and parse the principles file at *path*."""
    name = str(path)
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError as err:
        raise LoadError(name, "file not found", err) from err
    except OSError as err:
        raise LoadError(name, "failed to read file", err) from err
    return load_from_bytes(data, name)


def load_from_bytes(data: bytes | str, source_path: str) -> Principles:
    """Parse principles from YAML *data*; *source_path* is used in errors."""
    try:
        decoded: Any = yaml.safe_load(data)
        return Principles.from_dict(decoded)
    except (yaml.YAMLError, TypeError, ValueError) as err:
        raise LoadError(source_path, "invalid YAML syntax", err) from err


def load_or_default(path: str | Path, preset: Any) -> Principles:
    """Load *path*, or return the defaults for *preset* if the file does not exist."""
    try:
        return load_from_file(path)
    except LoadError as err:
        if isinstance(err.cause, FileNotFoundError):
            return default_principles(preset)
        raise