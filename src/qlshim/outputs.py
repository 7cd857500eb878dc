# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structured documents parsed from CodeQL CLI output."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, model_validator

from .errors import MalformedOutputError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResolveLanguagesOutput(RootModel[dict[str, list[str]]]):
    """Mapping of language name to extractor locations from ``resolve languages``."""


class ExtractorInfo(BaseModel):
    """Location and options of a single extractor."""

    model_config = ConfigDict(extra="allow")

    extractor_root: str
    extractor_options: Any | None = None


class BetterResolveLanguagesOutput(BaseModel):
    """Output of ``resolve languages --format=betterjson``."""

    model_config = ConfigDict(extra="allow")

    aliases: dict[str, str] | None = None
    extractors: dict[str, list[ExtractorInfo]]


class ResolveQueriesOutput(BaseModel):
    """Queries grouped by declared language from ``resolve queries --format=bylanguage``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    by_language: dict[str, dict[str, Any]] = Field(alias="byLanguage")
    no_declared_language: dict[str, Any] = Field(alias="noDeclaredLanguage", default_factory=dict)
    multiple_declared_languages: dict[str, Any] = Field(alias="multipleDeclaredLanguages", default_factory=dict)


class ResolveBuildEnvironmentOutput(BaseModel):
    """Build configuration suggested by ``resolve build-environment``."""

    model_config = ConfigDict(extra="allow")

    configuration: dict[str, dict[str, Any]] | None = None


class PackDownloadItem(BaseModel):
    """A pack fetched by ``pack download``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    # The CLI omits the version when the request did not pin one.
    version: str | None = None
    pack_dir: str | None = Field(default=None, alias="packDir")
    install_result: str | None = Field(default=None, alias="installResult")

    @model_validator(mode="after")
    def _require_name(self) -> PackDownloadItem:
        if not self.name:
            raise ValueError("pack entries must have a name")
        return self


class PackDownloadOutput(BaseModel):
    """Result of ``pack download --format=json``."""

    model_config = ConfigDict(extra="allow")

    packs: list[PackDownloadItem]


def _unexpected(description: str, exc: Exception, output: str | None) -> str:
    message = f"Unexpected output from {description}: {exc}"
    return message if output is None else f"{message} in\n{output}"


def parse_json(output: str, description: str, *, quote_output: bool = False) -> Any:
    """Decode ``output`` as JSON.

    With ``quote_output`` the raw output follows the error in the message.

    Raises:
        MalformedOutputError: If ``output`` is not valid JSON.
    """

    try:
        return json.loads(output)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(_unexpected(description, exc, output if quote_output else None)) from exc


def parse_output(model: type[ModelT], output: str, description: str, *, quote_output: bool = False) -> ModelT:
    """Decode ``output`` and validate it against ``model``.

    Args:
        model: Pydantic model describing the expected document.
        output: Raw stdout of the CLI.
        description: Command description used in error messages.
        quote_output: Append the raw output to error messages.

    Returns:
        ModelT: Validated document.

    Raises:
        MalformedOutputError: If ``output`` is not JSON or does not match ``model``.
    """

    payload = parse_json(output, description, quote_output=quote_output)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedOutputError(_unexpected(description, exc, output if quote_output else None)) from exc


__all__ = [
    "BetterResolveLanguagesOutput",
    "ExtractorInfo",
    "PackDownloadItem",
    "PackDownloadOutput",
    "ResolveBuildEnvironmentOutput",
    "ResolveLanguagesOutput",
    "ResolveQueriesOutput",
    "parse_json",
    "parse_output",
]
