# claudeloop

Building blocks for running an AI coding assistant in an autonomous,
iterative development loop. The package covers four areas:

- **Principles** (`claudeloop.config`): a two-layer set of product and
  development principles, each scored 1–10, with presets (`startup`,
  `enterprise`, `opensource`, `custom`), validation and YAML loading.
- **Assistant client** (`claudeloop.claude`): runs the `claude` command-line
  tool, parses its newline-delimited `stream-json` output, streams text as it
  arrives, and reports cost and errors.
- **Conflict detection** (`claudeloop.council`): spots unresolved principle
  conflicts in assistant output and pulls the `**Decision**` /
  `**Rationale**` lines out of an answer; shared records for configuring a
  council and describing its results and decisions.
- **Flags** (`claudeloop.cli`): the loop's command-line options, their
  defaults, validation rules, duration parsing (`2h`, `30m`, `1h30m`) and the
  full help text.

## Installation

Install the package with your usual installer; it depends only on PyYAML.
The `test` extra adds pytest.

## Principles

```python
from claudeloop.config.defaults import default_principles, new_principles
from claudeloop.config.loader import load_from_file, load_or_default
from claudeloop.config.principles import Preset

principles = default_principles(Preset.ENTERPRISE)
principles.created_at = "2026-01-11"
principles.validate()                 # raises ValidationError on the first problem
problems = principles.validate_all()  # or collect every problem

custom = load_from_file(".claude/principles.yaml")         # raises LoadError
fallback = load_or_default("missing.yaml", Preset.STARTUP)  # defaults if absent
```

Every principle value must lie between 1 and 10, `version` must look like
`X.Y`, and `created_at` like `YYYY-MM-DD`. Defaults leave `created_at` empty,
so set it before validating. Unknown presets fall back to the startup values;
`new_principles()` gives an empty `custom` document. `Principles.to_dict()`
and `Principles.from_dict()` convert to and from plain data in schema key
order. `load_from_bytes(data, source_path)` parses YAML already in memory;
empty input gives an all-empty document.

## Parsing assistant output

```python
import io

from claudeloop.claude.parser import Parser

stream = io.StringIO(
    '{"type":"assistant","message":{"content":[{"type":"text","text":"Hello"}]}}\n'
    '{"type":"result","result":"Done","total_cost_usd":0.05,"is_error":false}\n'
)
result = Parser().parse(stream)
print(result.output, result.result_text, result.total_cost_usd)
```

`Parser.parse` accepts a text or binary stream, or any iterable of lines.
Malformed and blank lines are skipped; every well-formed line is kept in
`raw_messages`. Text blocks from assistant messages are joined in order and
passed, one at a time, to the `on_text` method of a handler if one is given
(`NoOpHandler` ignores them). A line longer than 1 MiB raises `ParseError`.

## Running the assistant

```python
import threading

from claudeloop.claude.client import Client, ClientOptions

client = Client()  # or Client(ClientOptions(claude_path="/opt/bin/claude"))
cancel = threading.Event()
result = client.execute("Fix all linter errors", cancel)
print(result.output, result.cost, result.duration)
```

`Client.execute` runs the tool with `-p <prompt>` followed by its extra flags
(by default `--dangerously-skip-permissions --output-format stream-json
--verbose`) and returns an `IterationResult` with the output text, cost and
duration in seconds. It raises `ClaudeError` when the tool cannot be started,
its output cannot be read, it exits with an error, or it reports `is_error`
(the error's `result_text` and `stderr` carry the details). Setting the
`cancel` event kills the run and raises `concurrent.futures.CancelledError`.
Empty fields of `ClientOptions` are filled from `default_options()`; the
`executor` field may be any object with a `popen(args)` method.

## Conflict detection

```python
from claudeloop.council.detector import ConflictDetector

detector = ConflictDetector()
detector.detect("PRINCIPLE_CONFLICT_UNRESOLVED")  # True
detector.extract_decision("**Decision**: ship it\n**Rationale**: speed")
# ("ship it", "speed")
```

`claudeloop.council.types` holds `CouncilConfig` (with `default_config()`,
whose log file is `.claude/principles-decisions.log`, and `is_enabled()`,
true when principles are set), `Result`, `Decision`, `IterationResult` and
the `ClaudeClient` protocol.

## Flags

```python
from claudeloop.cli.command import format_help, parse_flags

flags = parse_flags(["-p", "Add tests", "--max-duration", "1h30m"])
print(flags.max_duration)  # 1:30:00
print(format_help())
```

A run needs a prompt and at least one limit: `--max-runs`, `--max-cost` or
`--max-duration`; negative values are refused, and `--merge-strategy` accepts
`squash`, `merge` or `rebase`. `parse_flags` raises `DurationError` for a bad
duration, `ValidationError` for refused values and `ValueError` for options
it cannot parse. It skips validation for `--list-worktrees` and when neither
a prompt nor a limit was given. `-h`/`--help` and `-v`/`--version` print the
help or version text and exit. `Flags.validate()` and `Flags.validate_all()`
can also be called directly, and `parse_duration()` parses a duration string
into a `timedelta`.

## What the package does not do

The package provides the pieces, not the loop: there is no installed command
and nothing here runs iterations, enforces the limits, makes commits,
branches or pull requests, manages worktrees, or checks for updates. The
options for those features are parsed and validated but not acted on. On the
council side, only detection, decision extraction and the shared records are
present; there is no resolution prompt, no call to the assistant to resolve
a conflict, and no writing of the decision log.