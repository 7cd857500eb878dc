# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Versioned invocation layer for driving the CodeQL CLI from CI pipelines."""

from __future__ import annotations

from .capabilities import CapabilityGate, CapabilityToken
from .codeql import CodeQL, get_codeql, get_codeql_for_cmd
from .errors import (
    ConfigurationError,
    InvocationError,
    MalformedOutputError,
    QlShimError,
    UnknownCapabilityError,
)
from .overlay import parse_extra_options, resolve_extra_options
from .versioning import VersionInfo, VersionResolver

__all__ = [
    "CapabilityGate",
    "CapabilityToken",
    "CodeQL",
    "ConfigurationError",
    "InvocationError",
    "MalformedOutputError",
    "QlShimError",
    "UnknownCapabilityError",
    "VersionInfo",
    "VersionResolver",
    "get_codeql",
    "get_codeql_for_cmd",
    "parse_extra_options",
    "resolve_extra_options",
]
