# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Recording doubles for the process runner and logger."""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from qlshim.process import RunOptions


@dataclass
class RecordedCall:
    cmd: str
    args: list[str]
    stdin: str | None
    stream_stdout: bool
    options: RunOptions | None


@dataclass
class RecordingRunner:
    """Process runner double answering ``codeql version`` and recording other calls."""

    version: str = "2.15.2"
    features: dict[str, bool] = field(default_factory=dict)
    outputs: dict[tuple[str, ...], str] = field(default_factory=dict)
    failures: dict[tuple[str, ...], Exception] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)
    version_queries: int = 0

    def run(
        self,
        cmd: str,
        args: Sequence[str] = (),
        *,
        stdin: str | None = None,
        stream_stdout: bool = True,
        options: RunOptions | None = None,
    ) -> str:
        argv = list(args)
        if argv[:1] == ["version"]:
            self.version_queries += 1
            return json.dumps({"version": self.version, "features": self.features})
        self.calls.append(RecordedCall(cmd, argv, stdin, stream_stdout, options))
        for prefix, error in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                raise error
        for prefix, output in self.outputs.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return output
        return ""

    @property
    def last(self) -> RecordedCall:
        return self.calls[-1]


@dataclass
class RecordingLogger:
    """Logger double capturing messages by level."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        self.messages.append(("group", name))
        yield

    def at(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]
