"""
Tests for the sanitization config loader
"""

import os

import pytest

from dbseed.sanitize import (
    ColumnConfig, TableConfig, SanitizeConfig, default_config_path, read,
)


CONFIG_TOML = """
table_alias = [["org", "organization"], ["ded", "deduction"]]

[[tables]]
email = { sanitize = "email" }
name = { sanitize = "name" }
created_at = {}

[[tables]]
amount = { sanitize = "zero" }
"""


def test_read(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)

    config = read(str(path))
    assert config is not None
    assert config.table_alias == [("org", "organization"), ("ded", "deduction")]
    assert len(config.tables) == 2
    assert list(config.tables[0].columns) == ["email", "name", "created_at"]
    assert config.tables[0].columns["email"] == ColumnConfig("email")
    assert config.tables[0].columns["created_at"] == ColumnConfig(None)
    assert config.sanitized_columns() == 3


def test_read_missing(tmp_path):
    assert read(str(tmp_path / "missing.toml")) is None


def test_read_malformed(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("table_alias = [[")
    assert read(str(path)) is None

    path.write_text('table_alias = [["only-one"]]')
    assert read(str(path)) is None

    path.write_text('[[tables]]\nemail = { sanitize = 5 }')
    assert read(str(path)) is None

    # Scalars where lists are expected
    path.write_text("tables = 5\n")
    assert read(str(path)) is None

    path.write_text("table_alias = true\n")
    assert read(str(path)) is None


def test_empty_file(tmp_path):
    path = tmp_path / "empty.toml"
    path.write_text("")
    assert read(str(path)) == SanitizeConfig()


def test_resolve_table():
    config = SanitizeConfig(table_alias=[("org", "organization")])
    assert config.resolve_table("org") == "organization"
    assert config.resolve_table("deduction") == "deduction"
    assert SanitizeConfig().resolve_table("org") == "org"


def test_from_dict_rejects_non_tables():
    with pytest.raises(ValueError):
        TableConfig.from_dict(["email"])
    with pytest.raises(ValueError):
        ColumnConfig.from_dict("email")


def test_default_config_path():
    path = default_config_path()
    assert path.endswith(os.path.join(".config", "seed", "config.toml"))
    assert not path.startswith("~")


def test_from_dict_rejects_scalar_sections():
    with pytest.raises(ValueError):
        SanitizeConfig.from_dict({"tables": 5})
    with pytest.raises(ValueError):
        SanitizeConfig.from_dict({"table_alias": True})
