"""Default principle values for each preset."""

from __future__ import annotations

from typing import Any

from claudeloop.config.principles import Layer0, Layer1, Preset, Principles

DEFAULT_VERSION = "2.3"

_LAYER_DEFAULTS: dict[Preset, tuple[tuple[int, ...], tuple[int, ...]]] = {
    Preset.STARTUP: ((7, 6, 3, 5, 7, 4, 6, 5, 7), (4, 6, 7, 6, 7, 7, 3, 6, 5)),
    Preset.ENTERPRISE: ((9, 8, 7, 8, 9, 6, 7, 9, 6), (8, 8, 9, 8, 9, 9, 5, 5, 7)),
    Preset.OPENSOURCE: ((6, 5, 6, 2, 8, 5, 4, 7, 9), (7, 7, 8, 9, 8, 8, 4, 7, 8)),
}


def default_principles(preset: Any) -> Principles:
    """Return a fresh Principles for *preset*; unknown presets fall back to startup.

    ``created_at`` is left empty and must be set before validation.
    """
    try:
        key = Preset(preset.value if isinstance(preset, Preset) else preset)
    except ValueError:
        key = Preset.STARTUP
    if key not in _LAYER_DEFAULTS:
        key = Preset.STARTUP
    layer0, layer1 = _LAYER_DEFAULTS[key]
    return Principles(
        version=DEFAULT_VERSION,
        preset=key,
        layer0=Layer0(*layer0),
        layer1=Layer1(*layer1),
    )


def new_principles() -> Principles:
    """Return an empty custom Principles with only the version set."""
    return Principles(version=DEFAULT_VERSION, preset=Preset.CUSTOM)