from datetime import timedelta

import pytest

from claudeloop.cli.command import build_parser, format_help, format_version, parse_flags
from claudeloop.cli.flags import DurationError, ValidationError


@pytest.mark.parametrize(
    "args, attr, expected",
    [
        (["-p", "test prompt", "-m", "1"], "prompt", "test prompt"),
        (["--prompt", "long prompt test", "-m", "1"], "prompt", "long prompt test"),
        (["-p", "x", "-m", "10"], "max_runs", 10),
        (["-p", "x", "--max-runs", "25"], "max_runs", 25),
        (["-p", "x", "--max-cost", "5.50"], "max_cost", 5.50),
        (["-p", "x", "--max-duration", "2h30m"], "max_duration", timedelta(hours=2, minutes=30)),
        (["-p", "x", "-m", "1", "-r", "run tests"], "review_prompt", "run tests"),
        (["-p", "x", "-m", "1", "--merge-strategy", "rebase"], "merge_strategy", "rebase"),
        (["-p", "x", "-m", "1", "--ci-retry-max", "3"], "ci_retry_max", 3),
        (["-p", "x", "-m", "1", "--notes-file", "NOTES.md"], "notes_file", "NOTES.md"),
        (["-p", "x", "-m", "1", "--auto-update"], "auto_update", True),
        (["-p", "x", "-m", "1", "--disable-updates"], "disable_updates", True),
        (["-p", "x", "-m", "1", "--disable-ci-retry"], "disable_ci_retry", True),
        (["--list-worktrees"], "list_worktrees", True),
    ],
)
def test_single_flag_parsing(args, attr, expected):
    flags = parse_flags(args)
    assert getattr(flags, attr) == expected


def test_boolean_flags():
    flags = parse_flags(["-p", "x", "-m", "1", "--dry-run", "--disable-commits", "--disable-branches"])
    assert flags.dry_run is True
    assert flags.disable_commits is True
    assert flags.disable_branches is True


def test_github_flags():
    flags = parse_flags(["-p", "x", "-m", "1", "--owner", "myuser", "--repo", "myrepo"])
    assert flags.owner == "myuser"
    assert flags.repo == "myrepo"


def test_worktree_flags():
    flags = parse_flags(
        ["-p", "x", "-m", "1", "--worktree", "instance-1", "--worktree-base-dir", "/tmp/wt", "--cleanup-worktree"]
    )
    assert flags.worktree == "instance-1"
    assert flags.worktree_base_dir == "/tmp/wt"
    assert flags.cleanup_worktree is True


def test_principles_flags():
    flags = parse_flags(
        ["-p", "x", "-m", "1", "--reset-principles", "--principles-file", "custom.yaml", "--log-decisions"]
    )
    assert flags.reset_principles is True
    assert flags.principles_file == "custom.yaml"
    assert flags.log_decisions is True


def test_completion_flags():
    flags = parse_flags(["-p", "x", "-m", "1", "--completion-signal", "DONE", "--completion-threshold", "5"])
    assert flags.completion_signal == "DONE"
    assert flags.completion_threshold == 5


def test_no_arguments_gives_defaults_without_validation():
    flags = parse_flags([])
    assert flags.prompt == ""
    assert flags.merge_strategy == "squash"
    assert flags.git_branch_prefix == "claude-loop/"
    assert flags.completion_threshold == 3
    assert flags.ci_retry_max == 1
    assert flags.max_duration == timedelta(0)


def test_prompt_without_limit_fails_validation():
    with pytest.raises(ValidationError, match="at least one limit required"):
        parse_flags(["-p", "x"])


def test_limit_without_prompt_fails_validation():
    with pytest.raises(ValidationError) as exc:
        parse_flags(["-m", "5"])
    assert exc.value.field == "prompt"


def test_invalid_merge_strategy_fails_validation():
    with pytest.raises(ValidationError, match="merge-strategy must be squash, merge, or rebase"):
        parse_flags(["-p", "x", "-m", "1", "--merge-strategy", "invalid"])


def test_invalid_duration_raises():
    with pytest.raises(DurationError) as exc:
        parse_flags(["-p", "x", "--max-duration", "invalid"])
    assert "invalid duration format" in str(exc.value)


def test_duration_alone_triggers_validation():
    with pytest.raises(ValidationError, match="prompt is required"):
        parse_flags(["--max-duration", "30m"])


def test_list_worktrees_skips_validation_with_bad_values():
    flags = parse_flags(["--list-worktrees", "--merge-strategy", "bogus"])
    assert flags.merge_strategy == "bogus"


def test_unknown_option_raises():
    with pytest.raises(ValueError):
        parse_flags(["--no-such-flag"])


def test_non_integer_max_runs_raises():
    with pytest.raises(ValueError):
        parse_flags(["-p", "x", "-m", "many"])


def test_help_prints_help_text(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_flags(["--help"])
    assert exc.value.code == 0
    assert capsys.readouterr().out == format_help()


def test_version_prints_version_line(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_flags(["-v"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("claude-loop version ")
    assert out.endswith("\n")


def test_format_version():
    assert format_version("1.2.3") == "claude-loop version 1.2.3\n"


def test_format_help_content():
    text = format_help()
    assert text.startswith("Claude Loop - Autonomous AI development loop with 4-Layer Principles Framework\n")
    assert text.endswith("\n")
    assert '--max-duration <duration>     Maximum duration to run (e.g., "2h", "30m", "1h30m")' in text
    assert "    update                        Check for and install the latest version" in text


def test_parser_accepts_every_long_option_in_help():
    parser = build_parser()
    known = {name for action in parser._actions for name in action.option_strings}
    for line in format_help().splitlines():
        stripped = line.strip()
        if stripped.startswith("--") and "  " in stripped:
            option = stripped.split()[0]
            assert option in known
    assert {"-p", "-m", "-r", "-h", "-v"} <= known


def test_parser_does_not_abbreviate_options():
    with pytest.raises(ValueError):
        parse_flags(["--prom", "x", "-m", "1"])