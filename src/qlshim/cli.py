# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for inspecting a CodeQL CLI installation."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager

import typer

from .capabilities import CODEQL_MINIMUM_VERSION, CapabilityToken
from .codeql import CodeQL, check_codeql_version, get_codeql_for_cmd
from .config import InvocationSettings
from .errors import QlShimError
from .logging import ConsoleLogger, fail, ok
from .overlay import extra_options_from_env, resolve_extra_options
from .typer_ext import create_typer

app = create_typer(help="Inspect a CodeQL CLI and the options this layer would pass to it.")

_CODEQL_OPTION = typer.Option(
    "codeql",
    "--codeql",
    envvar="CODEQL_PATH",
    help="Path to the CodeQL executable.",
)


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except (QlShimError, FileNotFoundError) as exc:
        fail(str(exc), use_emoji=False)
        raise typer.Exit(code=1) from exc


def _facade(codeql: str) -> CodeQL:
    return get_codeql_for_cmd(codeql, False)


def _parse_token(value: str) -> CapabilityToken:
    for token in CapabilityToken:
        if value in (token.value, token.name, token.name.lower().replace("_", "-")):
            return token
    known = ", ".join(token.value for token in CapabilityToken)
    raise typer.BadParameter(f"Unknown capability '{value}'. Known capabilities: {known}")


@app.command("version")
def version(codeql: str = _CODEQL_OPTION) -> None:
    """Print the CLI version and the features it reports."""

    with _reported_errors():
        info = _facade(codeql).get_version()
    typer.echo(json.dumps(info.model_dump(), indent=2, sort_keys=True))


@app.command("print-version")
def print_version(codeql: str = _CODEQL_OPTION) -> None:
    """Stream ``codeql version`` output unmodified."""

    with _reported_errors():
        _facade(codeql).print_version()


@app.command("check-version")
def check_version(codeql: str = _CODEQL_OPTION) -> None:
    """Fail unless the CLI meets the minimum supported version."""

    with _reported_errors():
        facade = _facade(codeql)
        check_codeql_version(facade, InvocationSettings.from_env(codeql_path=codeql), ConsoleLogger())
        info = facade.get_version()
    ok(f"CodeQL CLI {info.version} satisfies the minimum version {CODEQL_MINIMUM_VERSION}", use_emoji=False)


@app.command("supports")
def supports(
    capability: str = typer.Argument(..., help="Capability name, e.g. languageAliasing."),
    codeql: str = _CODEQL_OPTION,
) -> None:
    """Exit with status 0 when the CLI supports CAPABILITY, 1 otherwise."""

    token = _parse_token(capability)
    with _reported_errors():
        supported = _facade(codeql).supports_feature(token)
    typer.echo("supported" if supported else "unsupported")
    raise typer.Exit(code=0 if supported else 1)


@app.command("extra-options")
def extra_options(
    segments: list[str] = typer.Argument(..., help="Command path, e.g. database init."),
) -> None:
    """Print the extra options configured for a command path, one per line."""

    with _reported_errors():
        options = resolve_extra_options(extra_options_from_env(), tuple(segments))
    for option in options:
        typer.echo(option)


def main() -> None:
    """Run the ``qlshim`` command line interface."""

    app()


__all__ = ["app", "main"]
