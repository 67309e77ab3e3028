"""Shared constants for loctree.

Constants are grouped by domain:
- Key construction: separator and trim set for flat keys
- Depth limits: nesting cap for merge and flatten traversal
- Document discovery: file suffixes picked up by folder scans
- Marker strings: degraded text returned instead of raising

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key construction
    "KEY_SEPARATOR",
    "KEY_TRIM_CHARS",
    # Depth limits
    "MAX_DEPTH",
    # Document discovery
    "DEFAULT_DOCUMENT_SUFFIXES",
    "DEFAULT_ENCODING",
    # Escape conversion
    "ESCAPE_SEQUENCES",
    # Marker strings
    "MARKER_MISSING_KEY",
    "MARKER_BAD_INDEX",
    "MARKER_NOT_READY",
]

# ============================================================================
# KEY CONSTRUCTION
# ============================================================================

# Path segments of a flat key are joined with this separator ("ui/menu/play").
KEY_SEPARATOR: str = "/"

# Stripped from both ends of every segment and of the joined key.
# Order is irrelevant; str.strip() treats the argument as a character set.
KEY_TRIM_CHARS: str = "\\/\n\r\t\" "

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum object nesting followed by merge and flatten.
# Real text documents nest 2-6 levels; anything past 100 is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# DOCUMENT DISCOVERY
# ============================================================================

DEFAULT_DOCUMENT_SUFFIXES: tuple[str, ...] = (".json",)

DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# ESCAPE CONVERSION
# ============================================================================

# Literal two-character sequences converted to control characters on resolve.
ESCAPE_SEQUENCES: tuple[tuple[str, str], ...] = (
    ("\\n", "\n"),
    ("\\t", "\t"),
)

# ============================================================================
# MARKER STRINGS
# ============================================================================

# Template patterns returned by lookups that cannot produce real text.
# Each embeds the key so a broken build still shows what was asked for.
MARKER_MISSING_KEY: str = "'{key}' NOT FOUND!"  # e.g., 'ui/play' NOT FOUND!
MARKER_BAD_INDEX: str = "'{key}' NO IDX {index}!"  # e.g., 'ui/play' NO IDX 3!
MARKER_NOT_READY: str = "'{key}' NOT READY!"  # resolve before any activation
