"""
Sanitization config - Per-column sanitizer settings loaded from TOML

Layout of the config file:

    table_alias = [["org", "organization"]]

    [[tables]]
    email = { sanitize = "email" }
    name = { sanitize = "name" }

Each [[tables]] entry is a flat table of column entries.
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field
import os
import tomllib

from loguru import logger

from .config import CONFIG_PATH


@dataclass
class ColumnConfig:
    """Sanitizer applied to one column (None leaves it untouched)"""
    sanitize: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'ColumnConfig':
        if not isinstance(data, dict):
            raise ValueError(f"Column entry must be a table, got {data!r}")
        sanitize = data.get('sanitize')
        if sanitize is not None and not isinstance(sanitize, str):
            raise ValueError(f"sanitize must be a string, got {sanitize!r}")
        return cls(sanitize=sanitize)


@dataclass
class TableConfig:
    """Column settings for one table, in file order"""
    columns: Dict[str, ColumnConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'TableConfig':
        if not isinstance(data, dict):
            raise ValueError(f"Table entry must be a table, got {data!r}")
        return cls({name: ColumnConfig.from_dict(col) for name, col in data.items()})


@dataclass
class SanitizeConfig:
    """Table aliases plus per-table column sanitizers"""
    table_alias: List[Tuple[str, str]] = field(default_factory=list)
    tables: List[TableConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'SanitizeConfig':
        alias_pairs = data.get('table_alias', [])
        table_entries = data.get('tables', [])
        if not isinstance(alias_pairs, list):
            raise ValueError(f"table_alias must be a list, got {alias_pairs!r}")
        if not isinstance(table_entries, list):
            raise ValueError(f"tables must be a list, got {table_entries!r}")

        aliases = []
        for pair in alias_pairs:
            if not isinstance(pair, list) or len(pair) != 2 or not all(isinstance(p, str) for p in pair):
                raise ValueError(f"table_alias entries must be [alias, table] pairs, got {pair!r}")
            aliases.append((pair[0], pair[1]))
        tables = [TableConfig.from_dict(t) for t in table_entries]
        return cls(table_alias=aliases, tables=tables)

    def resolve_table(self, name: str) -> str:
        """Map an alias to its table name; other names pass through"""
        for alias, table in self.table_alias:
            if alias == name:
                return table
        return name

    def sanitized_columns(self) -> int:
        return sum(
            1
            for table in self.tables
            for column in table.columns.values()
            if column.sanitize is not None
        )


def default_config_path() -> str:
    return os.path.expanduser(CONFIG_PATH)


def read(path: str) -> Optional[SanitizeConfig]:
    """Load a config file, or None if it is missing or malformed"""
    try:
        with open(path, 'rb') as f:
            data = tomllib.load(f)
        config = SanitizeConfig.from_dict(data)
    except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
        logger.debug("no usable sanitize config at {}: {}", path, e)
        return None

    logger.debug("loaded sanitize config from {} ({} sanitized columns)",
                 path, config.sanitized_columns())
    return config
