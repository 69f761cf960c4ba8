"""Principles schema: presets, the two principle layers, and validation."""

from __future__ import annotations

import datetime as _dt
import json
import re
from dataclasses import dataclass, field, fields as dataclass_fields
from enum import Enum
from typing import Any, Mapping

MIN_PRINCIPLE_VALUE = 1
MAX_PRINCIPLE_VALUE = 10

_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class Preset(str, Enum):
    """Named sets of default principle values."""

    STARTUP = "startup"
    ENTERPRISE = "enterprise"
    OPENSOURCE = "opensource"
    CUSTOM = "custom"


VALID_PRESETS: tuple[Preset, ...] = tuple(Preset)


def _preset_text(preset: Any) -> str:
    if isinstance(preset, Preset):
        return preset.value
    return "" if preset is None else str(preset)


def is_valid_preset(preset: Any) -> bool:
    """Return True if *preset* names one of the known presets (case-sensitive)."""
    return _preset_text(preset) in {p.value for p in VALID_PRESETS}


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class ValidationError(ValueError):
    """A principles value that breaks the schema."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field = field_name
        self.message = message

    def __str__(self) -> str:
        return self.message


def _as_str(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"{key}: expected a scalar value, got {type(value).__name__}")


def _as_int(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key}: expected an integer, got {value!r}")
    return value


def _layer_from_mapping(layer_cls: type, data: Any, key: str) -> Any:
    if data is None:
        return layer_cls()
    if not isinstance(data, Mapping):
        raise TypeError(f"{key}: expected a mapping, got {type(data).__name__}")
    kwargs = {
        f.name: _as_int(data.get(f.name), f"{key}.{f.name}")
        for f in dataclass_fields(layer_cls)
        if f.name in data
    }
    return layer_cls(**kwargs)


@dataclass
class Layer0:
    """Product principles."""

    trust_architecture: int = 0
    curation_model: int = 0
    scope_philosophy: int = 0
    monetization_model: int = 0
    privacy_posture: int = 0
    ux_philosophy: int = 0
    authority_stance: int = 0
    auditability: int = 0
    interoperability: int = 0

    def fields(self) -> list[tuple[str, int]]:
        """Return (key, value) pairs in schema order."""
        return [(f.name, getattr(self, f.name)) for f in dataclass_fields(self)]


@dataclass
class Layer1:
    """Development principles."""

    speed_correctness: int = 0
    innovation_stability: int = 0
    blast_radius: int = 0
    clarity_of_intent: int = 0
    reversibility_priority: int = 0
    security_posture: int = 0
    urgency_tiers: int = 0
    cost_efficiency: int = 0
    migration_burden: int = 0

    def fields(self) -> list[tuple[str, int]]:
        """Return (key, value) pairs in schema order."""
        return [(f.name, getattr(self, f.name)) for f in dataclass_fields(self)]


@dataclass
class Principles:
    """The complete principles document."""

    version: str = ""
    preset: Any = ""
    created_at: str = ""
    layer0: Layer0 = field(default_factory=Layer0)
    layer1: Layer1 = field(default_factory=Layer1)

    def _check_version(self) -> ValidationError | None:
        if not self.version:
            return ValidationError("version", "version is required")
        if not _VERSION_RE.fullmatch(self.version):
            return ValidationError(
                "version", f"version must be in X.Y format (got {_quote(self.version)})"
            )
        return None

    def _check_preset(self) -> ValidationError | None:
        text = _preset_text(self.preset)
        if not text:
            return ValidationError("preset", "preset is required")
        if not is_valid_preset(text):
            return ValidationError(
                "preset",
                "preset must be one of: startup, enterprise, opensource, custom "
                f"(got {_quote(text)})",
            )
        return None

    def _check_created_at(self) -> ValidationError | None:
        if not self.created_at:
            return ValidationError("created_at", "created_at is required")
        if not _DATE_RE.fullmatch(self.created_at):
            return ValidationError(
                "created_at",
                f"created_at must be in YYYY-MM-DD format (got {_quote(self.created_at)})",
            )
        return None

    def _principle_fields(self) -> list[tuple[str, int]]:
        return [(f"layer0.{name}", value) for name, value in self.layer0.fields()] + [
            (f"layer1.{name}", value) for name, value in self.layer1.fields()
        ]

    def _errors(self):
        for check in (self._check_version, self._check_preset, self._check_created_at):
            error = check()
            if error is not None:
                yield error
        for name, value in self._principle_fields():
            if not MIN_PRINCIPLE_VALUE <= value <= MAX_PRINCIPLE_VALUE:
                yield ValidationError(
                    name,
                    f"{name} must be between {MIN_PRINCIPLE_VALUE} and "
                    f"{MAX_PRINCIPLE_VALUE} (got {value})",
                )

    def validate(self) -> None:
        """Raise the first ValidationError found, if any."""
        for error in self._errors():
            raise error

    def validate_all(self) -> list[ValidationError]:
        """Return every validation error found."""
        return list(self._errors())

    def to_dict(self) -> dict[str, Any]:
        """Return the document as plain data in schema key order."""
        return {
            "version": self.version,
            "preset": _preset_text(self.preset),
            "created_at": self.created_at,
            "layer0": dict(self.layer0.fields()),
            "layer1": dict(self.layer1.fields()),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Principles":
        """Build from decoded YAML data; missing keys keep their zero values."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        preset_text = _as_str(data.get("preset"), "preset")
        preset: Any = Preset(preset_text) if is_valid_preset(preset_text) else preset_text
        return cls(
            version=_as_str(data.get("version"), "version"),
            preset=preset,
            created_at=_as_str(data.get("created_at"), "created_at"),
            layer0=_layer_from_mapping(Layer0, data.get("layer0"), "layer0"),
            layer1=_layer_from_mapping(Layer1, data.get("layer1"), "layer1"),
        )