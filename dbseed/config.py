"""
Configuration file for dbseed.
Contains the grammar constants, connection lookup rules, and logging defaults.
"""

import os

# ============================================================================
# Lexer Configuration
# ============================================================================

# Characters that always form a token of their own
DELIMITERS = frozenset('(),/')

# ============================================================================
# Grammar Configuration
# ============================================================================

# Separates clauses (one table each)
CLAUSE_SEPARATOR = '/'

# Separates selectors within a clause
SELECTOR_SEPARATOR = ','

# Not used by the selection grammar itself, kept as a matcher
PERIOD = '.'

# Comparator spellings (symbol, word)
GT_SPELLINGS = ('>', 'gt')
LT_SPELLINGS = ('<', 'lt')

# Selector keywords that take a count argument
KEYWORD_RAND = 'rand'
KEYWORD_LATEST = 'latest'
KEYWORD_LIMIT = 'limit'

# Selector keyword that takes a column and an optional direction
KEYWORD_SORT = 'sort'
SORT_DESCENDING = 'desc'

# ============================================================================
# Connection Configuration
# ============================================================================

# Key looked up in env files
DATABASE_URL_KEY = 'DATABASE_URL'

# Env files consulted for the source database, in order
SOURCE_ENV_FILES = ('.env.production', '../.env.production')

# Env files consulted for the destination database, in order
DEST_ENV_FILES = ('.env', '../.env')

# ============================================================================
# Sanitization Configuration
# ============================================================================

# Default location of the per-column sanitizer config
CONFIG_PATH = os.path.join('~', '.config', 'seed', 'config.toml')

# ============================================================================
# Debug and Logging
# ============================================================================

# Default log level
LOG_LEVEL = 'WARNING'

# Environment variable overriding the log level
LOG_LEVEL_ENV = 'DBSEED_LOG_LEVEL'

# Log line format (loguru syntax)
LOG_FORMAT = '{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}'
