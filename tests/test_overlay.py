# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for extra-option resolution by command path."""

from __future__ import annotations

import pytest

from qlshim.errors import ConfigurationError
from qlshim.overlay import EMPTY_TREE, extra_options_from_env, parse_extra_options, resolve_extra_options


def test_wildcards_apply_outermost_first_before_leaf_entries() -> None:
    tree = parse_extra_options({"*": ["A"], "database": {"*": ["B"], "init": ["C"]}})

    assert resolve_extra_options(tree, ("database", "init")) == ["A", "B", "C"]
    assert resolve_extra_options(tree, ("database", "finalize")) == ["A", "B"]
    assert resolve_extra_options(tree, ("resolve", "languages")) == ["A"]


def test_primitive_values_are_stringified() -> None:
    tree = parse_extra_options({"database": {"init": [True, False, 4, 2.0, 1.5, "--x"]}})

    assert resolve_extra_options(tree, ("database", "init")) == ["true", "false", "4", "2", "1.5", "--x"]


def test_absent_tree_and_missing_entries_resolve_to_nothing() -> None:
    assert resolve_extra_options(parse_extra_options(None), ("database", "init")) == []
    assert resolve_extra_options(EMPTY_TREE, ("pack", "download")) == []
    tree = parse_extra_options({"database": {"init": None}})
    assert resolve_extra_options(tree, ("database", "init")) == []


def test_entries_are_not_deduplicated() -> None:
    tree = parse_extra_options({"*": ["-v"], "database": {"*": ["-v"], "cleanup": ["-v"]}})

    assert resolve_extra_options(tree, ("database", "cleanup")) == ["-v", "-v", "-v"]


def test_mapping_at_end_of_path_names_the_path() -> None:
    tree = parse_extra_options({"database": {"init": {"nested": ["x"]}}})

    with pytest.raises(ConfigurationError, match=r"'database\.init'.*not in an array"):
        resolve_extra_options(tree, ("database", "init"))


def test_non_list_wildcard_is_rejected_at_parse_time() -> None:
    with pytest.raises(ConfigurationError, match=r"'database\.\*'.*not in an array"):
        parse_extra_options({"database": {"*": "--threads=1"}})


def test_non_primitive_entry_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="not a primitive value"):
        parse_extra_options({"*": [{"flag": "--x"}]})


def test_tree_is_read_from_environment() -> None:
    tree = extra_options_from_env({"CODEQL_ACTION_EXTRA_OPTIONS": '{"pack": {"download": ["--force"]}}'})

    assert resolve_extra_options(tree, ("pack", "download")) == ["--force"]


def test_invalid_json_in_environment_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        extra_options_from_env({"CODEQL_ACTION_EXTRA_OPTIONS": "{not json"})
