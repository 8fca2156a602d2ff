from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies default injection, type coercion with warnings, strict-mode
failures and output format normalization.
"""

import pytest

from assetindex.core.indexing.filters import default_exclude_patterns
from assetindex.core.pipeline.validator import validate_config


def test_valid_config_passes_without_warnings(mock_config_dict):
    cfg, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert cfg == mock_config_dict


def test_non_dict_config_falls_back_to_defaults():
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg["output_format"] == "plain"
    assert any("Invalid config type" in w for w in warnings)


def test_non_dict_config_strict_raises():
    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_missing_keys_are_filled_from_defaults():
    cfg, _ = validate_config({"output_format": "json"})

    assert cfg["output_format"] == "json"
    assert cfg["output_file"] == "-"
    assert cfg["compute_crc"] is True
    assert cfg["exclude_patterns"] == default_exclude_patterns()


def test_bool_coercion_from_strings_and_numbers(mock_config_dict):
    mock_config_dict["pretty"] = "yes"
    mock_config_dict["compute_crc"] = 0

    cfg, warnings = validate_config(mock_config_dict)

    assert cfg["pretty"] is True
    assert cfg["compute_crc"] is False
    assert len(warnings) == 2


def test_exclude_patterns_from_csv_string(mock_config_dict):
    mock_config_dict["exclude_patterns"] = r"\.tmp$, ^cache$"

    cfg, _ = validate_config(mock_config_dict)

    assert cfg["exclude_patterns"] == [r"\.tmp$", "^cache$"]


def test_empty_exclude_list_disables_exclusions(mock_config_dict):
    mock_config_dict["exclude_patterns"] = []

    cfg, warnings = validate_config(mock_config_dict)

    assert cfg["exclude_patterns"] == []
    assert warnings == []


def test_output_format_is_normalized(mock_config_dict):
    mock_config_dict["output_format"] = " CSV "

    cfg, _ = validate_config(mock_config_dict)

    assert cfg["output_format"] == "csv"


def test_unknown_output_format_falls_back(mock_config_dict):
    mock_config_dict["output_format"] = "yaml"

    cfg, warnings = validate_config(mock_config_dict)

    assert cfg["output_format"] == "plain"
    assert any("Unsupported output format" in w for w in warnings)


def test_unknown_output_format_strict_raises(mock_config_dict):
    mock_config_dict["output_format"] = "yaml"

    with pytest.raises(ValueError):
        validate_config(mock_config_dict, strict=True)


def test_invalid_string_type_strict_raises(mock_config_dict):
    mock_config_dict["output_file"] = 42

    with pytest.raises(TypeError):
        validate_config(mock_config_dict, strict=True)


def test_diff_dump_dir_none_means_disabled(mock_config_dict):
    mock_config_dict["diff_dump_dir"] = None

    cfg, warnings = validate_config(mock_config_dict)

    assert cfg["diff_dump_dir"] == ""
    assert warnings == []
