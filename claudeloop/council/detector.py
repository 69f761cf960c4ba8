"""Detection of unresolved principle conflicts and extraction of decisions."""

from __future__ import annotations

import re

_WS = r"[\t\n\f\r ]"

CONFLICT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"PRINCIPLE_CONFLICT_UNRESOLVED", re.IGNORECASE),
    re.compile(rf"cannot{_WS}+resolve.*principle", re.IGNORECASE),
    re.compile(rf"conflicting{_WS}+principles.*unresolved", re.IGNORECASE),
)

DECISION_PATTERN = re.compile(rf"\*\*Decision\*\*:{_WS}*([^*\n]+)")
RATIONALE_PATTERN = re.compile(rf"\*\*Rationale\*\*:{_WS}*([^*\n]+)")


class ConflictDetector:
    """Checks output for principle conflicts."""

    def detect(self, output: str) -> bool:
        """Return True if any conflict pattern occurs in *output*."""
        return any(pattern.search(output) for pattern in CONFLICT_PATTERNS)

    def extract_decision(self, output: str) -> tuple[str, str]:
        """Return the (decision, rationale) found in *output*, empty if absent."""
        decision = DECISION_PATTERN.search(output)
        rationale = RATIONALE_PATTERN.search(output)
        return (
            decision.group(1).strip() if decision else "",
            rationale.group(1).strip() if rationale else "",
        )