"""The command line of the loop: help text, option parsing and pre-run checks."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any, NoReturn, Sequence

from claudeloop.cli.flags import Flags, parse_duration

_PROG = "claude-loop"
_DEFAULT_VERSION = "dev"
_DURATION_DEST = "max_duration_text"
_HELP_WIDTH = 30
_INDENT = "    "


@dataclass(frozen=True)
class _Option:
    names: tuple[str, ...]
    detail: str
    action: str = "switch"  # "switch", "value", "help" or "version"
    dest: str = ""
    kind: Any = str
    metavar: str = ""
    required: bool = False
    show_default: bool = False
    extra: tuple[str, ...] = ()


def _value(names, dest, metavar, detail, kind=str, **kwargs) -> _Option:
    return _Option(names, detail, "value", dest, kind, metavar, **kwargs)


def _switch(name, dest, detail) -> _Option:
    return _Option((name,), detail, "switch", dest)


_OPTIONS: tuple[_Option, ...] = (
    _value(("-p", "--prompt"), "prompt", "text",
           "The prompt/goal for Claude Code to work on", required=True),
    _value(("-m", "--max-runs"), "max_runs", "number",
           "Maximum number of successful iterations "
           "(use 0 for unlimited with --max-cost or --max-duration)",
           int, required=True),
    _value(("--max-cost",), "max_cost", "dollars",
           "Maximum cost in USD to spend (alternative to --max-runs)", float, required=True),
    _value(("--max-duration",), _DURATION_DEST, "duration",
           'Maximum duration to run (e.g., "2h", "30m", "1h30m") (alternative to --max-runs)',
           required=True),
    _Option(("-h", "--help"), "Show this help message", "help"),
    _Option(("-v", "--version"), "Show version information", "version"),
    _value(("--owner",), "owner", "owner",
           "GitHub repository owner (auto-detected from git remote if not provided)"),
    _value(("--repo",), "repo", "repo",
           "GitHub repository name (auto-detected from git remote if not provided)"),
    _switch("--disable-commits", "disable_commits", "Disable automatic commits and PR creation"),
    _switch("--disable-branches", "disable_branches",
            "Commit on current branch without creating branches or PRs"),
    _switch("--auto-update", "auto_update", "Automatically install updates when available"),
    _switch("--disable-updates", "disable_updates", "Skip all update checks and prompts"),
    _value(("--git-branch-prefix",), "git_branch_prefix", "prefix",
           "Branch prefix for iterations", show_default=True),
    _value(("--merge-strategy",), "merge_strategy", "strategy",
           "PR merge strategy: squash, merge, or rebase", show_default=True),
    _value(("--notes-file",), "notes_file", "file",
           "Shared notes file for iteration context", show_default=True),
    _value(("--worktree",), "worktree", "name",
           "Run in a git worktree for parallel execution (creates if needed)"),
    _value(("--worktree-base-dir",), "worktree_base_dir", "path",
           "Base directory for worktrees", show_default=True),
    _switch("--cleanup-worktree", "cleanup_worktree", "Remove worktree after completion"),
    _switch("--list-worktrees", "list_worktrees", "List all active git worktrees and exit"),
    _switch("--dry-run", "dry_run", "Simulate execution without making changes"),
    _value(("--completion-signal",), "completion_signal", "phrase",
           "Phrase that agents output when project is complete", show_default=True),
    _value(("--completion-threshold",), "completion_threshold", "num",
           "Number of consecutive signals to stop early", int, show_default=True),
    _value(("-r", "--review-prompt"), "review_prompt", "text",
           "Run a reviewer pass after each iteration to validate changes",
           extra=("(e.g., run build/lint/tests and fix any issues)",)),
    _switch("--disable-ci-retry", "disable_ci_retry",
            "Disable automatic CI failure retry (enabled by default)"),
    _value(("--ci-retry-max",), "ci_retry_max", "number",
           "Maximum CI fix attempts per PR", int, show_default=True),
    _switch("--reset-principles", "reset_principles", "Force re-collection of principles"),
    _value(("--principles-file",), "principles_file", "path",
           "Custom principles file path", show_default=True),
    _switch("--log-decisions", "log_decisions",
            "Enable decision logging to .claude/principles-decisions.log"),
)

_REPO_ARGS = "--owner myuser --repo myproject"

# Each invocation is written without the program name; "{repo}" stands for the
# owner and repository options and a newline marks a continued line.
_EXAMPLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Run 5 iterations to fix bugs", ('-p "Fix all linter errors" -m 5 {repo}',)),
    ("Run with cost limit", ('-p "Add tests" --max-cost 10.00 {repo}',)),
    ("Run for a maximum duration (time-boxed)",
     ('-p "Add documentation" --max-duration 2h {repo}',)),
    ("Run for 30 minutes", ('-p "Refactor module" --max-duration 30m {repo}',)),
    ("Run without commits (testing mode)", ('-p "Refactor code" -m 3 --disable-commits',)),
    ("Run with commits on current branch (no branches or PRs)",
     ('-p "Quick fixes" -m 3 --disable-branches',)),
    ("Use custom branch prefix and merge strategy",
     ('-p "Feature work" -m 10 {repo}\n--git-branch-prefix "ai/" --merge-strategy merge',)),
    ("Combine duration and cost limits (whichever comes first)",
     ('-p "Add tests" --max-duration 1h30m --max-cost 5.00 {repo}',)),
    ("Run in a worktree for parallel execution",
     ('-p "Add unit tests" -m 5 {repo} --worktree instance-1',)),
    ("Run multiple instances in parallel (in different terminals)",
     ('-p "Task A" -m 5 {repo} --worktree task-a', '-p "Task B" -m 5 {repo} --worktree task-b')),
    ("List all active worktrees", ("--list-worktrees",)),
    ("Clean up worktree after completion",
     ('-p "Quick fix" -m 1 {repo}\n--worktree temp --cleanup-worktree',)),
    ("Use completion signal to stop early when project is done",
     ('-p "Add unit tests to all files" -m 50 {repo}\n--completion-threshold 3',)),
    ("Use a reviewer to validate and fix changes after each iteration",
     ('-p "Add new feature" -m 5 {repo}\n-r "Run npm test and npm run lint, fix any failures"',)),
    ("Allow up to 2 CI fix attempts per PR (default is 1)",
     ('-p "Add tests" -m 5 {repo} --ci-retry-max 2',)),
    ("Disable automatic CI failure retry", ('-p "Add tests" -m 5 {repo} --disable-ci-retry',)),
    ("Run with custom principles file",
     ('-p "Feature work" -m 5 --principles-file custom-principles.yaml',)),
    ("Force re-collection of principles", ('-p "New project" -m 5 --reset-principles',)),
    ("Check for and install updates", ("update",)),
)

_REQUIREMENTS = (
    "Claude Code CLI",
    "GitHub CLI (gh) - authenticated with 'gh auth login'",
    "jq - JSON parsing utility",
    "Git repository (unless --disable-commits is used)",
)


def _row(label: str, text: str) -> str:
    return f"{_INDENT}{label.ljust(_HELP_WIDTH)}{text}"


def _option_lines(option: _Option, defaults: Flags) -> list[str]:
    label = ", ".join(option.names)
    if option.metavar:
        label += f" <{option.metavar}>"
    detail = option.detail
    if option.show_default:
        value = getattr(defaults, option.dest)
        shown = f'"{value}"' if isinstance(value, str) else str(value)
        detail += f" (default: {shown})"
    lines = [_row(label, detail)]
    lines.extend(_row("", more) for more in option.extra)
    return lines


def _example_lines(comment: str, invocations: tuple[str, ...]) -> list[str]:
    lines = [f"{_INDENT}# {comment}"]
    for invocation in invocations:
        first, *rest = invocation.format(repo=_REPO_ARGS).split("\n")
        command = f"{_INDENT}{_PROG} {first}"
        for part in rest:
            lines.append(command + " \\")
            command = f"{_INDENT * 2}{part}"
        lines.append(command)
    return lines


def format_help() -> str:
    """Return the full help text shown by -h/--help."""
    defaults = Flags()
    title = "Autonomous AI development loop with 4-Layer Principles Framework"
    sections: list[list[str]] = [
        [f"Claude Loop - {title}"],
        [
            "USAGE:",
            f'{_INDENT}{_PROG} -p "prompt" (-m max-runs | --max-cost max-cost | '
            "--max-duration duration) [--owner owner] [--repo repo] [options]",
            f"{_INDENT}{_PROG} update",
        ],
        ["REQUIRED OPTIONS:"]
        + [line for opt in _OPTIONS if opt.required for line in _option_lines(opt, defaults)],
        ["OPTIONAL FLAGS:"]
        + [line for opt in _OPTIONS if not opt.required for line in _option_lines(opt, defaults)],
        ["COMMANDS:", _row("update", "Check for and install the latest version")],
    ]
    examples = ["EXAMPLES:"]
    for index, (comment, invocations) in enumerate(_EXAMPLES):
        if index:
            examples.append("")
        examples.extend(_example_lines(comment, invocations))
    sections.append(examples)
    sections.append(["REQUIREMENTS:"] + [f"{_INDENT}- {item}" for item in _REQUIREMENTS])
    sections.append([
        "NOTE:",
        f"{_INDENT}{_PROG} automatically checks for updates at startup. "
        "You can press 'N' to skip the update.",
    ])
    return "\n\n".join("\n".join(section) for section in sections) + "\n"


def format_version(version: str) -> str:
    """Return the line shown by -v/--version."""
    return f"{_PROG} version {version}\n"


class _UsageError(ValueError):
    """An option that could not be parsed."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _UsageError(message)


class _HelpAction(argparse.Action):
    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest=argparse.SUPPRESS, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        sys.stdout.write(format_help())
        parser.exit(0)


class _VersionAction(argparse.Action):
    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest=argparse.SUPPRESS, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        sys.stdout.write(format_version(_DEFAULT_VERSION))
        parser.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Return a parser for every option, with the documented defaults."""
    defaults = Flags()
    parser = _ArgumentParser(prog=_PROG, add_help=False, allow_abbrev=False)
    for option in _OPTIONS:
        if option.action == "help":
            parser.add_argument(*option.names, action=_HelpAction)
        elif option.action == "version":
            parser.add_argument(*option.names, action=_VersionAction)
        elif option.action == "switch":
            parser.add_argument(
                *option.names,
                dest=option.dest,
                action="store_true",
                default=getattr(defaults, option.dest),
            )
        else:
            default = "" if option.dest == _DURATION_DEST else getattr(defaults, option.dest)
            parser.add_argument(
                *option.names, dest=option.dest, type=option.kind, default=default
            )
    return parser


def parse_flags(argv: Sequence[str] | None = None) -> Flags:
    """Parse *argv* into Flags and run the pre-run checks.

    Raises DurationError for a bad duration, ValidationError for bad values and
    ValueError for options that cannot be parsed. Validation is skipped when
    listing worktrees or when no prompt and no limit were given.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    namespace = vars(build_parser().parse_args(args))
    duration_text = namespace.pop(_DURATION_DEST)
    flags = Flags(**namespace)
    flags.max_duration = parse_duration(duration_text)

    if flags.list_worktrees:
        return flags
    if not flags.prompt and flags.max_runs == 0 and flags.max_cost == 0 and not duration_text:
        return flags
    flags.validate()
    return flags