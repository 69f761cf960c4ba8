"""Command-line option values, their defaults and their validation."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import timedelta

MERGE_STRATEGIES = ("squash", "merge", "rebase")

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_NUMBER_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?")
_UNIT_RE = re.compile(r"[^0-9.]*")
_MAX_NANOS = (1 << 63) - 1


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class ValidationError(ValueError):
    """An option value, or combination of values, that is not allowed."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field = field_name
        self.message = message

    def __str__(self) -> str:
        return self.message


class DurationError(ValueError):
    """A duration string that could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(reason)
        self.text = text
        self.reason = reason

    def __str__(self) -> str:
        return f"invalid duration format {_quote(self.text)}: {self.reason}"


def _parse_nanos(text: str) -> int:
    s = text
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise DurationError(text, f"time: invalid duration {_quote(text)}")

    total = 0
    while s:
        number = _NUMBER_RE.match(s)
        whole, fraction = number.group(1), number.group(2) or ""
        if not whole and not fraction:
            raise DurationError(text, f"time: invalid duration {_quote(text)}")
        s = s[number.end():]

        unit = _UNIT_RE.match(s).group(0)
        if not unit:
            raise DurationError(text, f"time: missing unit in duration {_quote(text)}")
        if unit not in _UNIT_NANOS:
            raise DurationError(
                text, f"time: unknown unit {_quote(unit)} in duration {_quote(text)}"
            )
        s = s[len(unit):]

        scale = _UNIT_NANOS[unit]
        value = int(whole or "0") * scale
        if fraction:
            value += int(fraction) * scale // (10 ** len(fraction))
        total += value
        if total > _MAX_NANOS + (1 if negative else 0):
            raise DurationError(text, f"time: invalid duration {_quote(text)}")

    return -total if negative else total


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as "2h", "30m" or "1h30m"; an empty string means zero."""
    if not text:
        return timedelta(0)
    nanos = _parse_nanos(text)
    micros = abs(nanos) // 1000
    return timedelta(microseconds=-micros if nanos < 0 else micros)


@dataclass
class Flags:
    """All option values of one run."""

    prompt: str = ""
    max_runs: int = 0
    max_cost: float = 0.0
    max_duration: timedelta = field(default_factory=lambda: timedelta(0))

    owner: str = ""
    repo: str = ""

    disable_commits: bool = False
    disable_branches: bool = False
    git_branch_prefix: str = "claude-loop/"
    merge_strategy: str = "squash"

    completion_signal: str = "CONTINUOUS_CLAUDE_PROJECT_COMPLETE"
    completion_threshold: int = 3
    dry_run: bool = False

    review_prompt: str = ""
    disable_ci_retry: bool = False
    ci_retry_max: int = 1

    notes_file: str = "SHARED_TASK_NOTES.md"

    worktree: str = ""
    worktree_base_dir: str = "../claude-loop-worktrees"
    cleanup_worktree: bool = False
    list_worktrees: bool = False

    reset_principles: bool = False
    principles_file: str = ".claude/principles.yaml"
    log_decisions: bool = False

    auto_update: bool = False
    disable_updates: bool = False

    def _check_prompt(self) -> ValidationError | None:
        if not self.prompt:
            return ValidationError("prompt", "prompt is required: use -p or --prompt")
        return None

    def _check_non_negative(self) -> ValidationError | None:
        checks = (
            ("max-runs", self.max_runs < 0),
            ("max-cost", self.max_cost < 0),
            ("max-duration", self.max_duration < timedelta(0)),
            ("ci-retry-max", self.ci_retry_max < 0),
            ("completion-threshold", self.completion_threshold < 0),
        )
        for name, negative in checks:
            if negative:
                return ValidationError(name, f"{name} cannot be negative")
        return None

    def _check_limit(self) -> ValidationError | None:
        if self.max_runs > 0 or self.max_cost > 0 or self.max_duration > timedelta(0):
            return None
        return ValidationError(
            "limit",
            "at least one limit required: use -m/--max-runs, --max-cost, or --max-duration",
        )

    def _check_merge_strategy(self) -> ValidationError | None:
        if not self.merge_strategy or self.merge_strategy in MERGE_STRATEGIES:
            return None
        return ValidationError(
            "merge-strategy",
            "merge-strategy must be squash, merge, or rebase "
            f"(got {_quote(self.merge_strategy)})",
        )

    def _errors(self):
        if self.list_worktrees:
            return
        for check in (
            self._check_prompt,
            self._check_non_negative,
            self._check_limit,
            self._check_merge_strategy,
        ):
            error = check()
            if error is not None:
                yield error

    def validate(self) -> None:
        """Raise the first ValidationError found; listing worktrees skips all checks."""
        for error in self._errors():
            raise error

    def validate_all(self) -> list[ValidationError]:
        """Return every validation error found."""
        return list(self._errors())