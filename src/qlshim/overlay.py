# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve user-supplied extra CLI options keyed by command path.

Users may supply a tree of additional arguments such as::

    {"*": ["--threads=0"], "database": {"*": ["-v"], "init": ["--overwrite"]}}

The ``"*"`` key at any level applies to every command below that level. For a
command path the resolved options are the wildcard entries of each level,
outermost first, followed by the entries stored at the end of the path. Entries
are never deduplicated; the CLI's own precedence rules decide the outcome.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final, TypeAlias

from .config import InvocationSettings
from .errors import ConfigurationError

WILDCARD: Final[str] = "*"

CommandPath: TypeAlias = tuple[str, ...]
Primitive: TypeAlias = str | int | float | bool


@dataclass(frozen=True, slots=True)
class OptionValues:
    """Leaf node holding a flat, ordered list of stringified options."""

    values: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OptionBranch:
    """Inner node holding an optional wildcard list and named children."""

    wildcard: OptionValues | None = None
    children: Mapping[str, OptionNode] = field(default_factory=dict)
    raw: object = None


OptionNode: TypeAlias = OptionValues | OptionBranch

EMPTY_TREE: Final[OptionBranch] = OptionBranch()


def _describe(path: Sequence[str]) -> str:
    return ".".join(path)


def _dump(value: object) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _stringify(value: Primitive) -> str:
    """Render ``value`` the way it would appear on a JSON-configured command line."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_values(raw: object, path: Sequence[str]) -> OptionValues:
    """Return ``raw`` as a leaf node or raise naming ``path``.

    Raises:
        ConfigurationError: If ``raw`` is not a list or holds non-primitive entries.
    """

    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"The extra options for '{_describe(path)}' ('{_dump(raw)}') are not in an array.")
    rendered: list[str] = []
    for entry in raw:
        if not isinstance(entry, (str, int, float, bool)):
            raise ConfigurationError(
                f"The extra option for '{_describe(path)}' ('{_dump(entry)}') is not a primitive value."
            )
        rendered.append(_stringify(entry))
    return OptionValues(tuple(rendered))


def _parse_node(raw: object, path: tuple[str, ...]) -> OptionNode:
    if isinstance(raw, Mapping):
        wildcard = _as_values(raw[WILDCARD], (*path, WILDCARD)) if WILDCARD in raw else None
        children = {
            str(key): _parse_node(value, (*path, str(key)))
            for key, value in raw.items()
            if key != WILDCARD and value is not None
        }
        return OptionBranch(wildcard=wildcard, children=children, raw=raw)
    return _as_values(raw, path)


def parse_extra_options(raw: object) -> OptionNode:
    """Build the typed option tree from a decoded JSON document.

    Args:
        raw: Decoded document; ``None`` is treated as an empty tree.

    Returns:
        OptionNode: Root node of the parsed tree.

    Raises:
        ConfigurationError: If a wildcard or leaf entry is not a list of primitives.
    """

    if raw is None:
        return EMPTY_TREE
    return _parse_node(raw, ())


def resolve_extra_options(tree: OptionNode, path: Sequence[str]) -> list[str]:
    """Return the extra options applying to the command identified by ``path``.

    Args:
        tree: Parsed option tree.
        path: Command path segments such as ``("database", "init")``.

    Returns:
        list[str]: Wildcard options of every level followed by the path-specific options.

    Raises:
        ConfigurationError: If the path ends on a nested mapping instead of a list.
    """

    resolved: list[str] = []
    node: OptionNode | None = tree
    walked: list[str] = []
    remaining = list(path)
    while node is not None:
        match node:
            case OptionBranch(wildcard=wildcard, children=children, raw=raw):
                if wildcard is not None:
                    resolved.extend(wildcard.values)
                if not remaining:
                    if raw is None:
                        break
                    raise ConfigurationError(
                        f"The extra options for '{_describe(walked)}' ('{_dump(raw)}') are not in an array."
                    )
                segment = remaining.pop(0)
                walked.append(segment)
                node = children.get(segment)
            case OptionValues(values=values):
                if not remaining:
                    resolved.extend(values)
                # A list part-way down the path has no entries for deeper commands.
                node = None
    return resolved


def extra_options_from_env(env: Mapping[str, str] | None = None) -> OptionNode:
    """Return the option tree configured through ``CODEQL_ACTION_EXTRA_OPTIONS``."""

    return parse_extra_options(InvocationSettings.from_env(env).extra_options_tree())


__all__ = [
    "CommandPath",
    "EMPTY_TREE",
    "OptionBranch",
    "OptionNode",
    "OptionValues",
    "WILDCARD",
    "extra_options_from_env",
    "parse_extra_options",
    "resolve_extra_options",
]
