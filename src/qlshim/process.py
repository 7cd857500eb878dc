# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run CodeQL processes with live streaming and bounded error capture."""

from __future__ import annotations

import codecs
import os
import shutil

# Bandit: subprocess usage is intentional; commands are argument vectors and never use ``shell=True``.
import subprocess  # nosec B404
import threading
import time
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Final, Protocol, runtime_checkable

from .config import MAX_ERROR_SIZE
from .console import StreamSink
from .errors import InvocationError

_READ_CHUNK: Final[int] = 64 * 1024
DEFAULT_STREAM_TIMEOUT: Final[float] = 10.0


@runtime_checkable
class OutputSink(Protocol):
    """Destination receiving the streamed output of CLI processes."""

    def write(self, text: str) -> None:
        """Write ``text`` verbatim."""

        raise NotImplementedError


class BoundedTail:
    """Accumulate bytes while retaining only the most recent ``limit`` bytes."""

    def __init__(self, limit: int = MAX_ERROR_SIZE) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._limit = limit
        self._buffer = bytearray()
        self.truncated = False

    @property
    def limit(self) -> int:
        """Return the maximum number of retained bytes."""

        return self._limit

    def append(self, chunk: bytes) -> None:
        """Append ``chunk`` and discard the oldest bytes beyond the limit."""

        if len(chunk) >= self._limit:
            self._buffer = bytearray(chunk[-self._limit :])
            self.truncated = True
            return
        self._buffer.extend(chunk)
        overflow = len(self._buffer) - self._limit
        if overflow > 0:
            del self._buffer[:overflow]
            self.truncated = True

    def __len__(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        """Return the retained bytes."""

        return bytes(self._buffer)

    def text(self) -> str:
        """Return the retained bytes decoded as UTF-8.

        A multi-byte character split by truncation is dropped rather than replaced.
        """

        return self._buffer.decode("utf-8", errors="ignore" if self.truncated else "replace")


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Per-invocation process options.

    Attributes:
        stdin: Text piped to the process before its input is closed; ``None``
            attaches no input stream.
        stream_stdout: Echo stdout to the sink as it arrives.
        echo_command: Write the command line to the sink before launching.
        cwd: Working directory; ``None`` inherits the caller's.
        env: Complete environment; ``None`` inherits the caller's.
        stream_timeout: Seconds to keep draining output after the process exits.
            Descendants that inherited the pipes can hold them open long after
            the process itself is gone; their later output is discarded.
    """

    stdin: str | None = None
    stream_stdout: bool = True
    echo_command: bool = True
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    stream_timeout: float = DEFAULT_STREAM_TIMEOUT


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Outcome of a completed CLI process."""

    argv: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process exited successfully."""

        return self.exit_code == 0


def _resolve_executable(cmd: str) -> str:
    """Return an absolute path for ``cmd``.

    Raises:
        FileNotFoundError: If ``cmd`` is relative and cannot be found on ``PATH``.
    """

    path = Path(cmd)
    if path.is_absolute():
        return str(path)
    resolved = shutil.which(cmd)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{cmd}' was not found on PATH")
    return resolved


class ProcessRunner:
    """Execute CLI processes, streaming output to an :class:`OutputSink`.

    stdout is captured in full and echoed unless suppressed. stderr is always
    echoed, mirroring how the CLI interleaves its diagnostics into the visible
    log, and is retained in a :class:`BoundedTail` for failure reports.
    """

    def __init__(self, sink: OutputSink | None = None, *, max_error_size: int = MAX_ERROR_SIZE) -> None:
        self._sink: OutputSink = sink if sink is not None else StreamSink()
        self._max_error_size = max_error_size
        self._sink_lock = threading.Lock()

    @property
    def sink(self) -> OutputSink:
        """Return the sink receiving streamed output."""

        return self._sink

    def run(
        self,
        cmd: str,
        args: Sequence[str] = (),
        *,
        stdin: str | None = None,
        stream_stdout: bool = True,
        options: RunOptions | None = None,
    ) -> str:
        """Run ``cmd`` with ``args`` and return its stdout.

        Args:
            cmd: Executable to launch.
            args: Argument vector passed to the executable.
            stdin: Text piped to the process; overrides ``options.stdin``.
            stream_stdout: Echo stdout while the process runs.
            options: Additional process options.

        Returns:
            str: Complete standard output of the process.

        Raises:
            InvocationError: If the process exits with a non-zero status.
            FileNotFoundError: If the executable cannot be located.
        """

        base = options or RunOptions()
        resolved = RunOptions(
            stdin=stdin if stdin is not None else base.stdin,
            stream_stdout=stream_stdout and base.stream_stdout,
            echo_command=base.echo_command,
            cwd=base.cwd,
            env=base.env,
            stream_timeout=base.stream_timeout,
        )
        result = self.execute(cmd, args, resolved)
        if not result.ok:
            raise InvocationError(cmd, list(args), result.exit_code, result.stderr, result.stdout)
        return result.stdout

    def execute(self, cmd: str, args: Sequence[str] = (), options: RunOptions | None = None) -> InvocationResult:
        """Run ``cmd`` and return its result without raising on a non-zero exit.

        Output is drained for at most ``options.stream_timeout`` seconds once the
        process exits, after which readers still blocked on pipes held open by
        descendants are detached. If the calling thread is interrupted while
        waiting, the child process is killed and reaped before the interruption
        propagates.
        """

        opts = options or RunOptions()
        argv = (cmd, *args)
        if opts.echo_command:
            self._emit(f"[command]{' '.join(argv)}\n")
        executable = _resolve_executable(cmd)

        # Bandit: the argument vector is built by this package and never passed through a shell.
        process = subprocess.Popen(  # nosec B603
            [executable, *args],
            stdin=subprocess.PIPE if opts.stdin is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=str(opts.cwd) if opts.cwd is not None else None,
            env=dict(opts.env) if opts.env is not None else None,
        )
        stdout_parts: list[str] = []
        stderr_tail = BoundedTail(self._max_error_size)
        detached = threading.Event()
        readers = [
            threading.Thread(
                target=self._pump_stdout,
                args=(process.stdout, stdout_parts, opts.stream_stdout, detached),
                daemon=True,
            ),
            threading.Thread(
                target=self._pump_stderr,
                args=(process.stderr, stderr_tail, detached),
                daemon=True,
            ),
        ]
        try:
            for reader in readers:
                reader.start()
            if opts.stdin is not None and process.stdin is not None:
                self._feed_stdin(process.stdin, opts.stdin)
            exit_code = process.wait()
            deadline = time.monotonic() + opts.stream_timeout
            for reader in readers:
                reader.join(max(0.0, deadline - time.monotonic()))
        except BaseException:
            process.kill()
            process.wait()
            raise
        if any(reader.is_alive() for reader in readers):
            # Readers close their pipe ends themselves once the holders exit.
            with self._sink_lock:
                detached.set()
        return InvocationResult(
            argv=argv,
            exit_code=exit_code,
            stdout="".join(stdout_parts),
            stderr=stderr_tail.text(),
        )

    def _emit(self, text: str) -> None:
        with self._sink_lock:
            self._write(text)

    def _write(self, text: str) -> None:
        if text:
            self._sink.write(text)

    @staticmethod
    def _feed_stdin(stream: IO[bytes], payload: str) -> None:
        try:
            stream.write(payload.encode("utf-8"))
        except BrokenPipeError:
            # The process exited without reading its input; its exit code reports the failure.
            pass
        finally:
            try:
                stream.close()
            except BrokenPipeError:
                pass

    def _pump_stdout(
        self, stream: IO[bytes] | None, parts: list[str], echo: bool, detached: threading.Event
    ) -> None:
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        with stream:
            for chunk in _iter_chunks(stream):
                with self._sink_lock:
                    if detached.is_set():
                        return
                    text = decoder.decode(chunk)
                    parts.append(text)
                    if echo:
                        self._write(text)
            with self._sink_lock:
                if detached.is_set():
                    return
                tail = decoder.decode(b"", final=True)
                parts.append(tail)
                if echo:
                    self._write(tail)

    def _pump_stderr(self, stream: IO[bytes] | None, tail: BoundedTail, detached: threading.Event) -> None:
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        with stream:
            for chunk in _iter_chunks(stream):
                with self._sink_lock:
                    if detached.is_set():
                        return
                    tail.append(chunk)
                    self._write(decoder.decode(chunk))
            with self._sink_lock:
                if not detached.is_set():
                    self._write(decoder.decode(b"", final=True))


def _iter_chunks(stream: IO[bytes]) -> Iterator[bytes]:
    fd = stream.fileno()
    while True:
        chunk = os.read(fd, _READ_CHUNK)
        if not chunk:
            return
        yield chunk


__all__ = [
    "DEFAULT_STREAM_TIMEOUT",
    "BoundedTail",
    "InvocationResult",
    "OutputSink",
    "ProcessRunner",
    "RunOptions",
]
