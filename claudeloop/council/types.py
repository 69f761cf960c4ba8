"""Shared records for principle-conflict detection and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from claudeloop.config.principles import Principles

DEFAULT_LOG_FILE = ".claude/principles-decisions.log"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class IterationResult:
    """The outcome of one claude run as seen by the council."""

    output: str = ""
    cost: float = 0.0
    duration: float = 0.0
    completion_signal_found: bool = False


class ClaudeClient(Protocol):
    """Anything that can run a prompt and report its output and cost."""

    def execute(self, prompt: str) -> Any:
        ...


@dataclass
class CouncilConfig:
    """Settings for the council."""

    principles: Principles | None = None
    preset: Any = ""
    log_decisions: bool = False
    log_file: str = ""

    def is_enabled(self) -> bool:
        """Return True if principles are configured."""
        return self.principles is not None


def default_config() -> CouncilConfig:
    """Return a configuration with the default decision log path."""
    return CouncilConfig(log_file=DEFAULT_LOG_FILE)


@dataclass
class Result:
    """The outcome of a council resolution."""

    output: str = ""
    cost: float = 0.0
    duration: float = 0.0
    resolution: str = ""
    rationale: str = ""


@dataclass
class Decision:
    """One entry of the decision log."""

    timestamp: datetime = field(default_factory=lambda: _ZERO_TIME)
    iteration: int = 0
    decision: str = ""
    rationale: str = ""
    preset: Any = ""
    council_invoked: bool = False