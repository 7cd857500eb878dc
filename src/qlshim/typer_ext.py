# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application factory with a stable command listing."""

from __future__ import annotations

from typing import Any

import typer
from click.core import Context
from typer.core import TyperGroup


class SortedTyperGroup(TyperGroup):
    """Group listing its commands alphabetically rather than by registration order."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return command names alphabetically.

        Args:
            ctx: Click context of the group being rendered.

        Returns:
            list[str]: Sorted command names.
        """

        return sorted(super().list_commands(ctx))


def create_typer(**kwargs: Any) -> typer.Typer:
    """Return a :class:`typer.Typer` whose help lists commands alphabetically."""

    kwargs.setdefault("cls", SortedTyperGroup)
    return typer.Typer(**kwargs)


__all__ = ["SortedTyperGroup", "create_typer"]
