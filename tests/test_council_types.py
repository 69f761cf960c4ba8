from datetime import datetime, timezone

from claudeloop.config.principles import Principles
from claudeloop.council.types import CouncilConfig, Decision, Result, default_config


def test_default_config():
    cfg = default_config()
    assert cfg.log_file == ".claude/principles-decisions.log"
    assert cfg.principles is None
    assert cfg.log_decisions is False


def test_is_enabled_without_principles():
    assert CouncilConfig().is_enabled() is False


def test_is_enabled_with_principles():
    assert CouncilConfig(principles=Principles()).is_enabled() is True


def test_decision_defaults_to_zero_time():
    decision = Decision()
    assert decision.timestamp == datetime(1, 1, 1, tzinfo=timezone.utc)
    assert decision.decision == ""
    assert decision.council_invoked is False


def test_result_defaults():
    result = Result()
    assert (result.output, result.cost, result.resolution, result.rationale) == ("", 0.0, "", "")