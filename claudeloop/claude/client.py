"""Runs the claude command and turns its stream-json output into a result."""

from __future__ import annotations

import subprocess
import threading
import time
from concurrent.futures import CancelledError
from dataclasses import dataclass, replace
from typing import Any, Protocol, Sequence

from claudeloop.claude.errors import ClaudeError, ParseError
from claudeloop.claude.parser import Parser, StreamHandler

_DEFAULT_FLAGS = (
    "--dangerously-skip-permissions",
    "--output-format",
    "stream-json",
    "--verbose",
)


@dataclass
class IterationResult:
    """The outcome of one claude run."""

    output: str = ""
    cost: float = 0.0
    duration: float = 0.0
    completion_signal_found: bool = False


class Executor(Protocol):
    def popen(self, args: Sequence[str]) -> subprocess.Popen:
        ...


class DefaultExecutor:
    """Starts commands with piped stdout and stderr."""

    def popen(self, args: Sequence[str]) -> subprocess.Popen:
        return subprocess.Popen(
            list(args),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )


@dataclass
class ClientOptions:
    """Settings for Client; empty fields are filled with defaults."""

    claude_path: str = ""
    additional_flags: list[str] | None = None
    stream_handler: StreamHandler | None = None
    executor: Any = None


def default_options() -> ClientOptions:
    """Return options with the default command, flags and executor."""
    return ClientOptions(
        claude_path="claude",
        additional_flags=list(_DEFAULT_FLAGS),
        executor=DefaultExecutor(),
    )


def _drain(stream: Any, chunks: list[str]) -> None:
    if stream is None:
        return
    data = stream.read()
    chunks.append(data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data)


def _watch(proc: subprocess.Popen, cancel: threading.Event, done: threading.Event) -> None:
    while not done.is_set():
        if cancel.wait(0.05):
            proc.kill()
            return


class Client:
    """Runs one claude invocation per prompt."""

    def __init__(self, options: ClientOptions | None = None) -> None:
        defaults = default_options()
        opts = replace(options) if options is not None else defaults
        if not opts.claude_path:
            opts.claude_path = defaults.claude_path
        if opts.executor is None:
            opts.executor = defaults.executor
        if opts.additional_flags is None:
            opts.additional_flags = defaults.additional_flags
        self.options = opts
        self._parser = Parser(opts.stream_handler)

    def execute(self, prompt: str, cancel: threading.Event | None = None) -> IterationResult:
        """Run claude with *prompt*; setting *cancel* kills the run."""
        started = time.monotonic()
        if cancel is not None and cancel.is_set():
            raise CancelledError()

        args = [self.options.claude_path, "-p", prompt, *self.options.additional_flags]
        try:
            proc = self.options.executor.popen(args)
        except OSError as err:
            raise ClaudeError("failed to start claude", cause=err) from err

        parsed = None
        parse_error: ParseError | None = None
        stderr_chunks: list[str] = []
        with proc:
            reader = threading.Thread(target=_drain, args=(proc.stderr, stderr_chunks), daemon=True)
            reader.start()
            done = threading.Event()
            if cancel is not None:
                threading.Thread(target=_watch, args=(proc, cancel, done), daemon=True).start()
            try:
                parsed = self._parser.parse(proc.stdout)
            except ParseError as err:
                parse_error = err
                proc.kill()
            returncode = proc.wait()
            done.set()
            reader.join()

        duration = time.monotonic() - started
        stderr = "".join(stderr_chunks)

        if parse_error is not None:
            raise ClaudeError("failed to parse output", cause=parse_error, stderr=stderr)

        if returncode != 0:
            if cancel is not None and cancel.is_set():
                raise CancelledError()
            if parsed is not None and parsed.is_error:
                raise ClaudeError("claude returned error", result_text=parsed.result_text, stderr=stderr)
            cause = subprocess.CalledProcessError(returncode, args)
            raise ClaudeError("claude exited with error", cause=cause, stderr=stderr)

        if parsed.is_error:
            raise ClaudeError("claude returned error", result_text=parsed.result_text, stderr=stderr)

        return IterationResult(
            output=parsed.output,
            cost=parsed.total_cost_usd,
            duration=duration,
            completion_signal_found=False,
        )